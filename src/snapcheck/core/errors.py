"""Outcomes and the error taxonomy of one compare-or-update cycle.

Every failure the lifecycle engine can produce is a subclass of
:class:`SnapshotError` and carries the :class:`Outcome` it stands for, so a
caller can branch on ``exc.outcome`` without an ``isinstance`` ladder.

Severity
--------
- ``NoSnapshotError`` / ``SnapshotMismatchError``: the test should fail.
- ``SnapshotCreatedError`` / ``SnapshotUpdatedError``: a file *was* written;
  these are only raised while ``fail_on_update`` is enabled.
- ``StorageError`` / ``MalformedSnapshotError``: always hard failures.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any


class Outcome(StrEnum):
    """Discriminant for the result of :meth:`Snapcheck.compare`."""

    MATCHED = "matched"
    CREATED = "created"
    UPDATED = "updated"
    MISMATCHED = "mismatched"
    NO_SNAPSHOT = "no_snapshot"
    READ_ERROR = "read_error"
    WRITE_ERROR = "write_error"
    MALFORMED = "malformed"


class SnapshotError(Exception):
    """Base class for every snapshot lifecycle failure."""

    outcome: Outcome

    def __init__(self, message: str, *, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class NoSnapshotError(SnapshotError):
    """The slot has no snapshot and automatic creation is disabled."""

    outcome = Outcome.NO_SNAPSHOT

    def __init__(self, name: str) -> None:
        super().__init__(
            f"snapshot {name!r} does not exist; "
            "re-run with snapshot updates enabled to create it",
            name=name,
        )


class SnapshotMismatchError(SnapshotError):
    """The stored snapshot differs from the current value."""

    outcome = Outcome.MISMATCHED

    def __init__(self, name: str, diff: str) -> None:
        super().__init__(f"snapshot {name!r} not equal:\n{diff}", name=name)
        self.diff = diff


class SnapshotCreatedError(SnapshotError):
    """A snapshot was written for a slot that had none."""

    outcome = Outcome.CREATED

    def __init__(self, name: str, contents: Any) -> None:
        super().__init__(f"snapshot created for test {name}", name=name)
        self.contents = contents


class SnapshotUpdatedError(SnapshotError):
    """An existing snapshot was rewritten with the current value."""

    outcome = Outcome.UPDATED

    def __init__(self, name: str, diff: str) -> None:
        super().__init__(f"snapshot {name!r} updated:\n{diff}", name=name)
        self.diff = diff


class StorageError(SnapshotError):
    """Reading the slot, creating its directory, or writing it failed."""

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        path: Path | None = None,
        outcome: Outcome = Outcome.READ_ERROR,
    ) -> None:
        super().__init__(message, name=name)
        self.path = path
        self.outcome = outcome


class MalformedSnapshotError(SnapshotError):
    """Stored bytes cannot be parsed by the active snapshotter."""

    outcome = Outcome.MALFORMED

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "MalformedSnapshotError",
    "NoSnapshotError",
    "Outcome",
    "SnapshotCreatedError",
    "SnapshotError",
    "SnapshotMismatchError",
    "SnapshotUpdatedError",
    "StorageError",
]
