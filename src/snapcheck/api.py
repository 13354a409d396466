"""Package-level helpers backed by a lazily created process default.

The default engine is built from :func:`snapcheck.core.settings.load_settings`
on first use. Customizing it never mutates it in place::

    import snapcheck

    # one call with different options
    snapcheck.get_default().with_options(subdirectory="testdata").snapshot(value)

    # or replace the process default explicitly
    snapcheck.set_default(snapcheck.get_default().with_options(file_extension=".txt"))

Engines derived with ``with_options`` own their ``Config`` copy, so later
changes to the default (or to another derived engine) do not affect them.
"""

from __future__ import annotations

from typing import Any

from snapcheck.core.config import Config
from snapcheck.core.engine import Reporter, Snapcheck, SnapshotReport
from snapcheck.core.naming import name_of_caller
from snapcheck.core.settings import load_settings

_default: Snapcheck | None = None


def get_default() -> Snapcheck:
    """Return the process-wide engine, creating it from settings if needed."""
    global _default
    if _default is None:
        _default = Snapcheck(Config.from_settings(load_settings()))
    return _default


def set_default(engine: Snapcheck | None) -> None:
    """Replace the process-wide engine; ``None`` re-creates it lazily."""
    global _default
    _default = engine


def new(**options: Any) -> Snapcheck:
    """Return a fresh engine with the built-in defaults plus ``options``."""
    return Snapcheck(Config.default().with_options(**options))


def snapshot(*values: Any) -> SnapshotReport:
    """Compare ``values`` against the slot named after the calling function."""
    return get_default().compare(name_of_caller(), *values).unwrap()


def snapshot_multi(snapshot_id: str, *values: Any) -> SnapshotReport:
    """Compare ``values`` against ``<calling function>-<snapshot_id>``."""
    return get_default().compare(f"{name_of_caller()}-{snapshot_id}", *values).unwrap()


def snapshot_t(reporter: Reporter, *values: Any) -> None:
    """Run :meth:`Snapcheck.snapshot_t` on the process default."""
    get_default().snapshot_t(reporter, *values)


__all__ = ["get_default", "new", "set_default", "snapshot", "snapshot_multi", "snapshot_t"]
