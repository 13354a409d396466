"""Slot naming: caller-derived defaults and path-segment normalization.

A slot name becomes a single file name, so every character that would split it
into path segments is replaced with ``-`` before it reaches the filesystem.
"""

from __future__ import annotations

import inspect
import os

_UNSAFE = frozenset(sep for sep in ("/", "\\", os.sep, os.altsep) if sep)


def normalize_slot(name: str) -> str:
    """Return ``name`` with path separators replaced by ``-``."""
    for sep in _UNSAFE:
        name = name.replace(sep, "-")
    return name


def name_of_caller(depth: int = 2) -> str:
    """Return ``<module>-<qualname>`` for the frame ``depth`` levels up.

    ``depth=1`` is the function calling this helper; the default (``2``) is
    *its* caller, which is what the package-level ``snapshot()`` helpers want.
    Dots in the qualified name (methods, nested functions) also become ``-``.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(depth):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            raise RuntimeError("could not resolve the calling function")
        module = str(frame.f_globals.get("__name__", "__main__")).rsplit(".", 1)[-1]
        qualname = getattr(frame.f_code, "co_qualname", frame.f_code.co_name)
    finally:
        # Break the reference cycle between this frame and the inspected one.
        del frame
    return normalize_slot(f"{module}.{qualname}".replace("<locals>.", "").replace(".", "-"))


__all__ = ["name_of_caller", "normalize_slot"]
