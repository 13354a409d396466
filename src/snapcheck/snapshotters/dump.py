"""Deterministic, human-readable recursive dump of arbitrary Python values.

Every node renders as ``(type) value``; sized values also show ``(len=N)``.
Output is stable across runs: mapping keys and set members are sorted, objects
are rendered through their public attributes, and default ``repr`` memory
addresses (``at 0x7f...``) are stripped.

>>> print(sdump({"b": [1, 2], "a": None}), end="")
(dict) (len=2) {
  (str) (len=1) 'a': (NoneType) None,
  (str) (len=1) 'b': (list) (len=2) [
    (int) 1,
    (int) 2
  ]
}
"""

from __future__ import annotations

import dataclasses
import re
import types
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

_ADDRESS = re.compile(r" at 0x[0-9a-fA-F]+")


class Dumper:
    """Render values as an indented tree of ``(type) value`` lines."""

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def dump(self, value: Any) -> str:
        """Return the dump of ``value`` followed by a newline."""
        return self._render(value, 0, frozenset()) + "\n"

    def _render(self, value: Any, depth: int, active: frozenset[int]) -> str:
        type_name = type(value).__name__
        if isinstance(value, Enum):
            return f"({type_name}) {type_name}.{value.name}"
        if value is None or isinstance(value, bool | int | float | complex):
            return f"({type_name}) {value!r}"
        if isinstance(value, str):
            return f"({type_name}) (len={len(value)}) {value!r}"
        if isinstance(value, bytes | bytearray):
            return f"({type_name}) (len={len(value)}) {bytes(value)!r}"

        # Containers and objects below can be self-referential.
        if id(value) in active:
            return f"({type_name}) <already shown>"
        active = active | {id(value)}
        inner = depth + 1

        if isinstance(value, Mapping):
            body = [
                f"{self._render(k, inner, active)}: {self._render(v, inner, active)}"
                for k, v in self._sorted_items(value, inner, active)
            ]
            return self._block(type_name, len(value), "{}", body, depth)
        if isinstance(value, list | tuple):
            body = [self._render(v, inner, active) for v in value]
            return self._block(type_name, len(value), "[]", body, depth)
        if isinstance(value, set | frozenset):
            body = sorted(self._render(v, inner, active) for v in value)
            return self._block(type_name, len(value), "{}", body, depth)

        fields = _public_fields(value)
        if fields is not None:
            body = [f"{name}: {self._render(v, inner, active)}" for name, v in fields]
            return self._block(type_name, None, "{}", body, depth)
        return f"({type_name}) {_ADDRESS.sub('', repr(value))}"

    def _sorted_items(
        self, mapping: Mapping[Any, Any], depth: int, active: frozenset[int]
    ) -> list[tuple[Any, Any]]:
        try:
            return sorted(mapping.items(), key=lambda kv: kv[0])
        except TypeError:
            # Keys of mixed, unorderable types: sort by their rendered form.
            return sorted(mapping.items(), key=lambda kv: self._render(kv[0], depth, active))

    def _block(
        self, type_name: str, length: int | None, brackets: str, body: list[str], depth: int
    ) -> str:
        head = f"({type_name})" if length is None else f"({type_name}) (len={length})"
        if not body:
            return f"{head} {brackets}"
        pad = self.indent * (depth + 1)
        lines = ",\n".join(pad + line for line in body)
        return f"{head} {brackets[0]}\n{lines}\n{self.indent * depth}{brackets[1]}"


def _public_fields(value: Any) -> Iterable[tuple[str, Any]] | None:
    """Return ``(name, value)`` pairs for an object's public state, if it has any."""
    if isinstance(value, type | types.FunctionType | types.MethodType | types.ModuleType):
        return None
    if dataclasses.is_dataclass(value):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    attrs = getattr(value, "__dict__", None)
    if isinstance(attrs, dict):
        return [(k, v) for k, v in attrs.items() if not k.startswith("_")]
    return None


_default = Dumper()


def sdump(*values: Any) -> str:
    """Concatenate the dumps of ``values`` using the default two-space indent."""
    return "".join(_default.dump(v) for v in values)


__all__ = ["Dumper", "sdump"]
