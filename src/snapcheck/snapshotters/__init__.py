from __future__ import annotations

from .base import Snap, Snapshotter
from .dump import Dumper, sdump
from .structural import StructuralSnapshotter, canonicalize
from .text import TextSnapshotter

__all__ = [
    "Dumper",
    "Snap",
    "Snapshotter",
    "StructuralSnapshotter",
    "TextSnapshotter",
    "canonicalize",
    "sdump",
]
