"""Structural snapshot backend: JSON on disk, recursive diff in memory.

``snapshot(*values)`` canonicalizes each value into a JSON-compatible node tree
(dicts with ``str`` keys, lists, ``str``, numbers, ``bool``, ``None``) and wraps
them in one list, preserving call order. The list is written as tab-indented
JSON with sorted keys and a trailing newline.

Precision caveat
----------------
``read_from`` decodes *every* JSON number as ``float`` (``parse_int=float``), so
the integer/float distinction is not preserved on disk. The differ compares
numbers by value, which makes ``1`` and ``1.0`` equal. Integers larger than
``2**53`` cannot round-trip exactly; they come back as the nearest float and
silently compare equal to any integer that rounds to it. Integers too large for
a float at all read back as infinity and compare equal to it.

Diff format
-----------
Changed positions are marked ``-`` (previous) and ``+`` (current). Unchanged
neighbours of a change are shown as context, and longer unchanged runs are
collapsed::

    [
    	{
    -		"a": 1,
    +		"a": 2,
    		"b": 3,
    	},
    	... // 4 identical elements
    ]
"""

from __future__ import annotations

import dataclasses
import difflib
import json
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, BinaryIO

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from snapcheck.core.errors import MalformedSnapshotError

# ---- Canonicalization ---------------------------------------------------------


def _canonical_text(node: Any) -> str:
    return json.dumps(node, sort_keys=True, ensure_ascii=False)


def _canonical_key(key: Any, active: frozenset[int]) -> str:
    node = _canonicalize(key, active)
    return node if isinstance(node, str) else _canonical_text(node)


def _fallback(obj: Any, active: frozenset[int]) -> Any:
    """Serialize objects pydantic does not know through their public attributes."""
    attrs = getattr(obj, "__dict__", None)
    if isinstance(attrs, dict):
        public = {k: v for k, v in attrs.items() if not k.startswith("_")}
        return _canonicalize(public, active | {id(obj)})
    return str(obj)


def canonicalize(value: Any) -> Any:
    """Return a deterministic, JSON-compatible node tree for ``value``.

    A container or object that contains itself is rendered as the string
    ``"<cycle: TypeName>"`` at the point where it recurs.
    """
    return _canonicalize(value, frozenset())


def _canonicalize(value: Any, active: frozenset[int]) -> Any:
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, Enum):
        return _canonicalize(value.value, active)
    if id(value) in active:
        return f"<cycle: {type(value).__name__}>"
    active = active | {id(value)}

    if isinstance(value, Mapping):
        return {_canonical_key(k, active): _canonicalize(v, active) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_canonicalize(v, active) for v in value]
    if isinstance(value, set | frozenset):
        return sorted((_canonicalize(v, active) for v in value), key=_canonical_text)
    if isinstance(value, BaseModel):
        return _canonicalize(value.model_dump(), active)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _canonicalize(getattr(value, f.name), active)
            for f in dataclasses.fields(value)
        }
    jsonable = to_jsonable_python(value, fallback=lambda obj: _fallback(obj, active))
    return _canonicalize(jsonable, active)


# ---- Comparison ---------------------------------------------------------------


def _is_number(x: Any) -> bool:
    return isinstance(x, int | float) and not isinstance(x, bool)


def _as_float(x: float) -> float:
    # Integers beyond the float range decode from JSON as infinity.
    try:
        return float(x)
    except OverflowError:
        return math.inf if x > 0 else -math.inf


def _kind(x: Any) -> str:
    if isinstance(x, dict):
        return "dict"
    if isinstance(x, list):
        return "list"
    return "scalar"


class _Differ:
    """Recursive comparison and rendering with approximate float equality."""

    def __init__(self, fraction: float, margin: float) -> None:
        self.fraction = fraction
        self.margin = margin

    def close(self, a: float, b: float) -> bool:
        if a == b:
            return True
        a, b = _as_float(a), _as_float(b)
        if math.isnan(a) or math.isnan(b):
            return math.isnan(a) and math.isnan(b)
        if a == b:
            return True
        if math.isinf(a) or math.isinf(b):
            return False
        return abs(a - b) <= max(self.fraction * min(abs(a), abs(b)), self.margin)

    def equal(self, a: Any, b: Any) -> bool:
        if _is_number(a) and _is_number(b):
            return self.close(a, b)
        if _kind(a) != _kind(b):
            return False
        if isinstance(a, dict):
            return a.keys() == b.keys() and all(self.equal(a[k], b[k]) for k in a)
        if isinstance(a, list):
            return len(a) == len(b) and all(self.equal(x, y) for x, y in zip(a, b, strict=True))
        return bool(type(a) is type(b) and a == b)

    # -- rendering --------------------------------------------------------------

    def render(self, previous: Any, current: Any) -> list[str]:
        if _kind(previous) == _kind(current) != "scalar":
            return self._container("", previous, current, 0, "")
        return [f"-{_canonical_text(previous)}", f"+{_canonical_text(current)}"]

    def _container(self, label: str, a: Any, b: Any, depth: int, trailer: str) -> list[str]:
        tabs = "\t" * depth
        if isinstance(a, dict):
            opening, closing, unit = "{", "}", "entries"
            entries = self._dict_entries(a, b)
        else:
            opening, closing, unit = "[", "]", "elements"
            entries = self._list_entries(a, b)
        lines = [f"{tabs}{label}{opening}"]
        lines.extend(self._entries(entries, depth + 1, unit))
        lines.append(f"{tabs}{closing}{trailer}")
        return lines

    def _dict_entries(self, a: dict[str, Any], b: dict[str, Any]) -> list[tuple[Any, ...]]:
        entries: list[tuple[Any, ...]] = []
        for key in sorted(a.keys() | b.keys()):
            label = f"{_canonical_text(key)}: "
            if key not in b:
                entries.append(("-", label, a[key]))
            elif key not in a:
                entries.append(("+", label, b[key]))
            elif self.equal(a[key], b[key]):
                entries.append(("=", label, b[key]))
            else:
                entries.append(("~", label, a[key], b[key]))
        return entries

    def _list_entries(self, a: list[Any], b: list[Any]) -> list[tuple[Any, ...]]:
        entries: list[tuple[Any, ...]] = []
        if len(a) == len(b):
            for x, y in zip(a, b, strict=True):
                entries.append(("=", "", y) if self.equal(x, y) else ("~", "", x, y))
            return entries

        matcher = difflib.SequenceMatcher(
            None, [_canonical_text(x) for x in a], [_canonical_text(y) for y in b], autojunk=False
        )
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                entries.extend(("=", "", y) for y in b[j1:j2])
                continue
            paired = min(i2 - i1, j2 - j1)
            for x, y in zip(a[i1 : i1 + paired], b[j1 : j1 + paired], strict=True):
                entries.append(("=", "", y) if self.equal(x, y) else ("~", "", x, y))
            entries.extend(("-", "", x) for x in a[i1 + paired : i2])
            entries.extend(("+", "", y) for y in b[j1 + paired : j2])
        return entries

    def _entries(self, entries: list[tuple[Any, ...]], depth: int, unit: str) -> list[str]:
        tabs = "\t" * depth
        changed = [i for i, e in enumerate(entries) if e[0] != "="]
        shown = {j for i in changed for j in (i - 1, i, i + 1)}
        lines: list[str] = []
        hidden = 0

        def flush() -> None:
            nonlocal hidden
            if hidden:
                lines.append(f"{tabs}... // {hidden} identical {unit}")
                hidden = 0

        for i, entry in enumerate(entries):
            kind, label = entry[0], entry[1]
            if kind == "=" and i not in shown:
                hidden += 1
                continue
            flush()
            if kind == "=":
                lines.append(f"{tabs}{label}{_canonical_text(entry[2])},")
            elif kind in "-+":
                lines.append(f"{kind}{tabs}{label}{_canonical_text(entry[2])},")
            elif _kind(entry[2]) == _kind(entry[3]) != "scalar":
                lines.extend(self._container(label, entry[2], entry[3], depth, ","))
            else:
                lines.append(f"-{tabs}{label}{_canonical_text(entry[2])},")
                lines.append(f"+{tabs}{label}{_canonical_text(entry[3])},")
        flush()
        return lines


# ---- Backend ------------------------------------------------------------------


class StructuralSnapshotter:
    """Snapshotter whose ``Snap`` is a list of canonical JSON nodes.

    Parameters
    ----------
    float_fraction : float
        Relative tolerance: numbers are equal when they differ by at most this
        fraction of the smaller magnitude. Absorbs serialization round-trip noise.
    float_margin : float
        Absolute tolerance applied when it is larger than the relative one.
    """

    def __init__(self, float_fraction: float = 1e-11, float_margin: float = 0.0) -> None:
        self._differ = _Differ(float_fraction, float_margin)

    def snapshot(self, *values: Any) -> list[Any]:
        return [canonicalize(v) for v in values]

    def write_to(self, writer: BinaryIO, snap: list[Any]) -> int:
        text = json.dumps(snap, indent="\t", sort_keys=True, ensure_ascii=False) + "\n"
        return writer.write(text.encode("utf-8"))

    def read_from(self, reader: BinaryIO) -> list[Any]:
        try:
            result = json.loads(reader.read().decode("utf-8"), parse_int=float)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedSnapshotError(f"snapshot is not valid JSON: {exc}") from exc
        if not isinstance(result, list):
            raise MalformedSnapshotError(
                f"snapshot root must be a JSON array, got {type(result).__name__}"
            )
        return result

    def diff(self, previous: list[Any] | None, current: list[Any] | None) -> str:
        """Return the structural diff of two snapshots, or ``""`` if they are equal."""
        prev = [] if previous is None else previous
        cur = [] if current is None else current
        if self._differ.equal(prev, cur):
            return ""
        return "\n".join(self._differ.render(prev, cur)) + "\n"


__all__ = ["StructuralSnapshotter", "canonicalize"]
