"""
FILE: protask/logging_setup.py
PURPOSE: One-time logging configuration for CLI and REPL runs
EXPORTS:
  - setup_logging(level) -> None
DEPENDENCIES:
  - logging (stdlib)
  - rich.logging (RichHandler for readable stderr output)
NOTES:
  - Modules log through logging.getLogger(__name__)
  - Only stderr is used so --json/--raw output on stdout stays clean
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from . import config


def setup_logging(level: Optional[int] = None) -> None:
    """
    Configure the 'protask' logger with a Rich stderr handler.

    Call this ONCE, early in the entry point. Calling again replaces the
    handler instead of stacking duplicates.
    """
    if level is None:
        level = config.log_level()

    logger = logging.getLogger("protask")
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
