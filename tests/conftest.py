"""Shared fixtures: every test starts from a clean process default."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from snapcheck import api
from snapcheck.core.settings import load_settings


@pytest.fixture(autouse=True)
def _isolate_snapcheck(monkeypatch: Any) -> Iterator[None]:
    """Drop the cached default engine/settings and any ambient update flag."""
    monkeypatch.delenv("UPDATE_SNAPSHOTS", raising=False)
    load_settings.cache_clear()
    api.set_default(None)
    yield
    api.set_default(None)
    load_settings.cache_clear()
