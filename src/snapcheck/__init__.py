"""snapcheck: assert values against snapshots recorded on disk.

Quick start
-----------
::

    import snapcheck
    snapcheck.snapshot(render_report())          # slot named after the caller
    snapcheck.snapshot_multi("json", payload)     # several slots per function

Set ``UPDATE_SNAPSHOTS`` to rewrite snapshots that no longer match.
"""

from __future__ import annotations

from snapcheck.api import get_default, new, set_default, snapshot, snapshot_multi, snapshot_t
from snapcheck.core.config import Config
from snapcheck.core.engine import Reporter, Snapcheck, SnapshotReport
from snapcheck.core.errors import (
    MalformedSnapshotError,
    NoSnapshotError,
    Outcome,
    SnapshotCreatedError,
    SnapshotError,
    SnapshotMismatchError,
    SnapshotUpdatedError,
    StorageError,
)
from snapcheck.snapshotters import Snapshotter, StructuralSnapshotter, TextSnapshotter

__version__ = "0.1.0"

__all__ = [
    "Config",
    "MalformedSnapshotError",
    "NoSnapshotError",
    "Outcome",
    "Reporter",
    "Snapcheck",
    "SnapshotCreatedError",
    "SnapshotError",
    "SnapshotMismatchError",
    "SnapshotReport",
    "SnapshotUpdatedError",
    "Snapshotter",
    "StorageError",
    "StructuralSnapshotter",
    "TextSnapshotter",
    "__version__",
    "get_default",
    "new",
    "set_default",
    "snapshot",
    "snapshot_multi",
    "snapshot_t",
]
