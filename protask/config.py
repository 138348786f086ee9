"""
FILE: protask/config.py
PURPOSE: Settings read from environment variables
EXPORTS:
  - data_dir() -> Path
  - log_level() -> int
DEPENDENCIES:
  - os, logging, pathlib (stdlib)
NOTES:
  - PROTASK_HOME overrides the data directory (default ~/.protask)
  - PROTASK_LOG_LEVEL sets the console log level (default WARNING)
  - Read at call time so tests and subprocesses can set the env
"""

import logging
import os
from pathlib import Path

ENV_PREFIX = "PROTASK"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def data_dir() -> Path:
    return _env_path(_k("HOME"), Path.home() / ".protask")


def log_level() -> int:
    raw = (os.getenv(_k("LOG_LEVEL")) or "").strip().upper()
    if not raw:
        return logging.WARNING
    level = logging.getLevelName(raw)
    # getLevelName returns a string like "Level FOO" for unknown names
    return level if isinstance(level, int) else logging.WARNING
