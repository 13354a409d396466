"""Core package for snapcheck: config, errors, results and the lifecycle engine.

Downstream code usually imports from the top-level package; the submodules are
importable directly when only one piece is needed, e.g.
    from snapcheck.core.settings import load_settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
