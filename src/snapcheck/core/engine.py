"""Snapshot lifecycle engine: load, compare, update, report.

``Snapcheck.compare(name, *values)`` is the single state machine behind every
public helper::

    absent ──(auto-create)──────────────► created
    absent ──(no auto-create)───────────► no_snapshot
    stored ──(diff empty | text match)──► matched
    stored ──(differs, no update)───────► mismatched
    stored ──(differs, update allowed)──► updated

Created and updated slots are reported as ``Err`` while ``fail_on_update`` is
on, and as ``Ok`` otherwise. Storage and parse failures are always ``Err``.

Text-dump compatibility
-----------------------
Independently of the active snapshotter's diff, the engine renders the values
with :class:`TextSnapshotter` and compares that string byte-for-byte with the
stored file. If they are identical the slot matches, so snapshots recorded in
the plain-text format keep passing after a switch to the structural backend
without being rewritten. A coincidental match of the text rendering can
therefore hide a structural difference.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from snapcheck.core.config import Config
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
from snapcheck.core.naming import name_of_caller, normalize_slot
from snapcheck.core.result import Result, err, ok
from snapcheck.core.settings import get_logger
from snapcheck.snapshotters.base import Snap, Snapshotter
from snapcheck.snapshotters.text import TextSnapshotter

logger = get_logger(__name__)

_text = TextSnapshotter()


@dataclass(frozen=True, slots=True)
class SnapshotReport:
    """Successful outcome of one compare cycle.

    Attributes
    ----------
    name : str
        Slot name as used on disk (path separators already replaced).
    outcome : Outcome
        ``MATCHED``, or ``CREATED``/``UPDATED`` when ``fail_on_update`` is off.
    path : Path
        Snapshot file of the slot.
    diff : str
        Diff accepted by an update; empty for matches and creations.
    """

    name: str
    outcome: Outcome
    path: Path
    diff: str = ""


class Reporter(Protocol):
    """The slice of a test object ``snapshot_t`` needs."""

    def name(self) -> str: ...

    def failed(self) -> bool: ...

    def error(self, message: str) -> None: ...

    def fatal(self, message: str) -> None: ...


class Snapcheck:
    """Configured snapshot engine bound to one active snapshotter."""

    def __init__(
        self,
        config: Config | None = None,
        snapshotter: Snapshotter | None = None,
    ) -> None:
        self.config: Config = config if config is not None else Config.default()
        self.snapshotter: Snapshotter = (
            snapshotter if snapshotter is not None else TextSnapshotter()
        )

    def with_options(self, **overrides: Any) -> Snapcheck:
        """Return a new engine with a derived config and the same snapshotter."""
        return Snapcheck(self.config.with_options(**overrides), self.snapshotter)

    # ------------------------------- Core -------------------------------------

    def compare(self, name: str, *values: Any) -> Result[SnapshotReport, SnapshotError]:
        """Compare ``values`` against slot ``name`` and update it if allowed."""
        name = normalize_slot(name)
        path = self.config.snapshot_file_path(name)
        current = self.snapshotter.snapshot(*values)

        logger.debug("reading snapshot %s from %s", name, path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            if self.config.create_new_automatically:
                return self._update(name, path, None, current)
            return err(NoSnapshotError(name))
        except OSError as exc:
            error = StorageError(f"could not read snapshot {name!r}: {exc}", name=name, path=path)
            error.__cause__ = exc
            return err(error)

        try:
            previous = self.snapshotter.read_from(io.BytesIO(raw))
        except MalformedSnapshotError as exc:
            # A text-format file is unparsable for other backends but may still match.
            if self._matches_text_dump(raw, values):
                return ok(SnapshotReport(name, Outcome.MATCHED, path))
            exc.path = path
            return err(exc)

        diff = self.snapshotter.diff(previous, current)
        if not diff or self._matches_text_dump(raw, values):
            return ok(SnapshotReport(name, Outcome.MATCHED, path))

        if self.config.update_requested():
            return self._update(name, path, previous, current)

        logger.warning("snapshot %s does not match %s", name, path)
        return err(SnapshotMismatchError(name, diff))

    @staticmethod
    def _matches_text_dump(raw: bytes, values: tuple[Any, ...]) -> bool:
        return _text.snapshot(*values) == raw.decode("utf-8", "surrogateescape")

    def _update(
        self, name: str, path: Path, previous: Snap | None, current: Snap
    ) -> Result[SnapshotReport, SnapshotError]:
        # A failed encode must leave the stored snapshot untouched.
        buf = io.BytesIO()
        try:
            written = self.snapshotter.write_to(buf, current)
        except ValueError as exc:
            error = StorageError(
                f"could not encode snapshot {name!r}: {exc}",
                name=name,
                path=path,
                outcome=Outcome.WRITE_ERROR,
            )
            error.__cause__ = exc
            return err(error)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            error = StorageError(
                "could not create snapshots directory",
                name=name,
                path=path.parent,
                outcome=Outcome.WRITE_ERROR,
            )
            error.__cause__ = exc
            return err(error)

        is_new = not path.exists()
        try:
            path.write_bytes(buf.getvalue())
        except OSError as exc:
            error = StorageError(
                f"could not write snapshot {name!r}: {exc}",
                name=name,
                path=path,
                outcome=Outcome.WRITE_ERROR,
            )
            error.__cause__ = exc
            return err(error)

        outcome = Outcome.CREATED if is_new else Outcome.UPDATED
        logger.info("snapshot %s %s (%d bytes) at %s", name, outcome.value, written, path)

        diff = self.snapshotter.diff(previous, current)
        if not self.config.fail_on_update:
            return ok(SnapshotReport(name, outcome, path, "" if is_new else diff))
        if is_new:
            return err(SnapshotCreatedError(name, current))
        return err(SnapshotUpdatedError(name, diff))

    # ------------------------------ Callers -----------------------------------

    def snapshot(self, *values: Any) -> SnapshotReport:
        """Compare ``values`` against the slot named after the calling function.

        Raises the :class:`SnapshotError` for any non-success outcome. Call it at
        most once per function, or use :meth:`snapshot_multi`.
        """
        return self.compare(name_of_caller(), *values).unwrap()

    def snapshot_multi(self, snapshot_id: str, *values: Any) -> SnapshotReport:
        """Like :meth:`snapshot`, with ``snapshot_id`` appended to the slot name."""
        return self.compare(f"{name_of_caller()}-{snapshot_id}", *values).unwrap()

    def snapshot_t(self, reporter: Reporter, *values: Any) -> None:
        """Compare ``values`` against the slot named after ``reporter.name()``.

        Skipped entirely when the test has already failed. Failures are routed
        to ``reporter.fatal`` or ``reporter.error`` per ``fatal_on_mismatch``.
        """
        if reporter.failed():
            return
        result = self.compare(reporter.name().replace("/", "-"), *values)
        if result.is_ok():
            return
        message = str(result.unwrap_err())
        if self.config.fatal_on_mismatch:
            reporter.fatal(message)
        else:
            reporter.error(message)


__all__ = ["Reporter", "Snapcheck", "SnapshotReport"]
