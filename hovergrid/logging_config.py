"""hovergrid logging configuration.

The TUI owns the terminal, so log records go to a file instead of stderr.
The path comes from ``HOVERGRID_LOG_FILE`` (default
``~/.hovergrid/hovergrid.log``) and the level from ``HOVERGRID_LOG_LEVEL``
(default WARNING).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_FILE = Path("~/.hovergrid/hovergrid.log")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure hovergrid logging.

    Args:
        level: Optional override for `HOVERGRID_LOG_LEVEL`.
    """
    if level:
        os.environ["HOVERGRID_LOG_LEVEL"] = level

    level_name = os.getenv("HOVERGRID_LOG_LEVEL", "WARNING").upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    log_file = Path(os.getenv("HOVERGRID_LOG_FILE") or DEFAULT_LOG_FILE).expanduser()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("hovergrid")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
