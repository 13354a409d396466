"""Plain-text snapshot backend.

Strings and byte blobs are stored verbatim on their own line; every other value
is stored as the deterministic dump from :mod:`snapcheck.snapshotters.dump`.
This is the default backend and also the format the engine's compatibility
check compares against, so snapshots written this way keep matching after a
project switches to the structural backend.
"""

from __future__ import annotations

import difflib
from typing import Any, BinaryIO

from snapcheck.snapshotters.dump import Dumper

_ENCODING = "utf-8"
# Arbitrary byte blobs must survive a write/read cycle unchanged.
_ERRORS = "surrogateescape"


def _split_lines(text: str) -> list[str]:
    """Split after each newline and terminate the final piece.

    Text ending in a newline gets an extra empty last line, so a missing
    trailing newline still shows up in the diff.
    """
    return [line + "\n" for line in text.split("\n")]


class TextSnapshotter:
    """Snapshotter whose ``Snap`` is a single string."""

    def __init__(self, indent: str = "  ", context: int = 1) -> None:
        self.dumper = Dumper(indent=indent)
        self.context = context

    def snapshot(self, *values: Any) -> str:
        parts: list[str] = []
        for value in values:
            if isinstance(value, str):
                parts.append(value + "\n")
            elif isinstance(value, bytes | bytearray):
                parts.append(bytes(value).decode(_ENCODING, _ERRORS) + "\n")
            else:
                parts.append(self.dumper.dump(value))
        return "".join(parts)

    def write_to(self, writer: BinaryIO, snap: str) -> int:
        return writer.write(snap.encode(_ENCODING, _ERRORS))

    def read_from(self, reader: BinaryIO) -> str:
        return reader.read().decode(_ENCODING, _ERRORS)

    def diff(self, previous: str | None, current: str | None) -> str:
        """Return a unified diff with one line of context, or ``""`` if equal."""
        return "".join(
            difflib.unified_diff(
                _split_lines(previous or ""),
                _split_lines(current or ""),
                fromfile="Previous",
                tofile="Current",
                n=self.context,
            )
        )


__all__ = ["TextSnapshotter"]
