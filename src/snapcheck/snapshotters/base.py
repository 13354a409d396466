"""Capability interface every snapshot backend implements.

A snapshotter turns captured values into a backend-specific ``Snap``, moves that
``Snap`` to and from bytes, and explains how two ``Snap`` values differ. The
engine only ever talks to this protocol; the two shipped implementations
(:class:`~snapcheck.snapshotters.text.TextSnapshotter` and
:class:`~snapcheck.snapshotters.structural.StructuralSnapshotter`) share no
state or base class.

Contract
--------
- ``snapshot(*values)`` is deterministic for equal inputs and folds all values
  into one composite ``Snap``.
- ``write_to`` output must be readable by ``read_from`` of the same backend.
- ``read_from`` raises :class:`~snapcheck.core.errors.MalformedSnapshotError`
  for bytes it cannot parse.
- ``diff(None, current)`` treats the missing side as the backend's empty value;
  an empty return string means "equal".
"""

from __future__ import annotations

from typing import Any, BinaryIO, Protocol, TypeAlias, runtime_checkable

Snap: TypeAlias = Any


@runtime_checkable
class Snapshotter(Protocol):
    """Serialize, persist, restore and diff snapshots."""

    def snapshot(self, *values: Any) -> Snap: ...

    def diff(self, previous: Snap | None, current: Snap | None) -> str: ...

    def read_from(self, reader: BinaryIO) -> Snap: ...

    def write_to(self, writer: BinaryIO, snap: Snap) -> int: ...


__all__ = ["Snap", "Snapshotter"]
