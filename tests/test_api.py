"""Tests for the package-level helpers and the process-wide default engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

import snapcheck
from snapcheck.core.config import Config
from snapcheck.core.engine import Snapcheck
from snapcheck.core.errors import Outcome, SnapshotCreatedError, SnapshotMismatchError
from snapcheck.core.settings import load_settings


@pytest.fixture
def engine(tmp_path: Path) -> Snapcheck:
    """Install a default engine writing into `tmp_path` without failing on create."""
    instance = Snapcheck(
        Config.default().with_options(
            subdirectory=str(tmp_path), fail_on_update=False, should_update=lambda: False
        )
    )
    snapcheck.set_default(instance)
    return instance


def test_default_is_lazy_and_shared() -> None:
    first = snapcheck.get_default()
    assert first is snapcheck.get_default()
    assert first.config.subdirectory == ".snapshots"


def test_default_reads_settings(monkeypatch: Any) -> None:
    monkeypatch.setenv("SNAPCHECK_SNAPSHOT_DIR", "golden")
    load_settings.cache_clear()
    snapcheck.set_default(None)

    assert snapcheck.get_default().config.subdirectory == "golden"


def test_derived_engine_does_not_touch_default() -> None:
    default = snapcheck.get_default()
    derived = default.with_options(subdirectory="elsewhere", fatal_on_mismatch=True)

    assert snapcheck.get_default() is default
    assert default.config.subdirectory == ".snapshots"
    assert default.config.fatal_on_mismatch is False
    assert derived.config.fatal_on_mismatch is True


def test_new_uses_builtin_defaults(monkeypatch: Any) -> None:
    monkeypatch.setenv("SNAPCHECK_SNAPSHOT_DIR", "golden")
    load_settings.cache_clear()

    assert snapcheck.new().config.subdirectory == ".snapshots"
    assert snapcheck.new(file_extension=".md").config.file_extension == ".md"


def test_snapshot_names_slot_after_caller(engine: Snapcheck, tmp_path: Path) -> None:
    report = snapcheck.snapshot("value")

    assert report.outcome is Outcome.CREATED
    assert report.name == "test_api-test_snapshot_names_slot_after_caller"
    assert (tmp_path / report.name).read_text() == "value\n"


def test_snapshot_multi_appends_id(engine: Snapcheck, tmp_path: Path) -> None:
    first = snapcheck.snapshot_multi("one", 1)
    second = snapcheck.snapshot_multi("two", 2)

    assert first.name == "test_api-test_snapshot_multi_appends_id-one"
    assert second.name == "test_api-test_snapshot_multi_appends_id-two"
    assert snapcheck.snapshot_multi("one", 1).outcome is Outcome.MATCHED


def test_snapshot_raises_on_mismatch(engine: Snapcheck) -> None:
    snapcheck.snapshot("before")
    with pytest.raises(SnapshotMismatchError) as excinfo:
        snapcheck.snapshot("after")
    assert "+after" in excinfo.value.diff


def test_engine_method_names_slot_after_caller(tmp_path: Path) -> None:
    instance = Snapcheck(Config.default().with_options(subdirectory=str(tmp_path)))
    with pytest.raises(SnapshotCreatedError) as excinfo:
        instance.snapshot({"a": 1})
    assert excinfo.value.name == "test_api-test_engine_method_names_slot_after_caller"
