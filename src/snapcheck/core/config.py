"""Snapshot behaviour options as an immutable Pydantic model.

``Config`` replaces a mutable settings struct with value semantics: every
customization goes through :meth:`Config.with_options`, which validates the
overrides and returns a *new* instance. Deriving a config for one test can
therefore never leak into the process default held by :mod:`snapcheck.api`.

Options
-------
should_update : Callable[[], bool] | None
    Zero-argument predicate authorizing rewrites of mismatching snapshots.
    ``None`` means "is ``update_env_var`` present in the environment".
update_env_var : str
    Variable consulted when ``should_update`` is ``None``.
subdirectory : str
    Directory snapshots live in (``.snapshots``).
fail_on_update : bool
    Report created/updated snapshots as failures (``True``) so accidental
    rewrites in CI are noticed.
create_new_automatically : bool
    Write a snapshot for a slot that has none instead of failing.
fatal_on_mismatch : bool
    Route failures to ``Reporter.fatal`` instead of ``Reporter.error``.
file_extension : str
    Suffix appended to slot file names, e.g. ``".html"``.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from snapcheck.core.naming import normalize_slot
from snapcheck.core.settings import Settings


class Config(BaseModel):
    """Immutable set of snapshot options."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    should_update: Callable[[], bool] | None = None
    update_env_var: str = "UPDATE_SNAPSHOTS"
    subdirectory: str = ".snapshots"
    fail_on_update: bool = True
    create_new_automatically: bool = True
    fatal_on_mismatch: bool = False
    file_extension: str = ""

    @classmethod
    def default(cls) -> Config:
        """Return a config with the built-in defaults, ignoring the environment."""
        return cls()

    @classmethod
    def from_settings(cls, settings: Settings) -> Config:
        """Build a config seeded from ``SNAPCHECK_*`` settings."""
        return cls(
            update_env_var=settings.update_env_var,
            subdirectory=settings.snapshot_dir,
            fail_on_update=settings.fail_on_update,
            create_new_automatically=settings.create_new_automatically,
            fatal_on_mismatch=settings.fatal_on_mismatch,
            file_extension=settings.file_extension,
        )

    def with_options(self, **overrides: Any) -> Config:
        """Return a validated copy with ``overrides`` applied.

        Unknown option names raise :class:`pydantic.ValidationError`.
        """
        current = {name: getattr(self, name) for name in type(self).model_fields}
        return type(self).model_validate({**current, **overrides})

    def update_requested(self) -> bool:
        """Return whether mismatching snapshots may be rewritten."""
        if self.should_update is not None:
            return bool(self.should_update())
        return self.update_env_var in os.environ

    def snapshot_file_path(self, name: str) -> Path:
        """Return ``<subdirectory>/<name><file_extension>`` for slot ``name``."""
        return Path(self.subdirectory) / f"{normalize_slot(name)}{self.file_extension}"


__all__ = ["Config"]
