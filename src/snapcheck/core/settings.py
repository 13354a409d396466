"""Environment-driven defaults using Pydantic Settings (v2).

This module exposes a cached ``Settings`` instance that reads from:
- Real environment variables prefixed with ``SNAPCHECK_`` (highest precedence)
- ``.env`` / ``.env.local`` files in the working directory

The values only seed :meth:`snapcheck.core.config.Config.from_settings`; an
explicitly constructed ``Config`` never looks at the environment except for the
update variable.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed snapshot defaults loaded from env and ``.env`` files.

    Attributes
    ----------
    log_level : LogLevelName
        Level applied by :func:`get_logger`; maps from ``SNAPCHECK_LOG_LEVEL``.
    snapshot_dir : str
        Subdirectory holding snapshot files; maps from ``SNAPCHECK_SNAPSHOT_DIR``.
    update_env_var : str
        Name of the variable whose *presence* authorizes snapshot updates.
    """

    log_level: LogLevelName = "WARNING"
    snapshot_dir: str = ".snapshots"
    update_env_var: str = "UPDATE_SNAPSHOTS"
    fail_on_update: bool = True
    create_new_automatically: bool = True
    fatal_on_mismatch: bool = False
    file_extension: str = Field(default="", description="Suffix appended to slot names")

    model_config = SettingsConfigDict(
        env_prefix="SNAPCHECK_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.WARNING)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a ``Settings`` instance.

    Tests force a rebuild via ``load_settings.cache_clear()`` after mutating
    ``os.environ``.
    """
    return Settings()


def get_logger(name: str = "snapcheck") -> logging.Logger:
    """Return a process-global logger configured to the settings log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger


__all__ = ["Settings", "get_logger", "load_settings"]
