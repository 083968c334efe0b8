"""
FILE: kanban/utils.py
PURPOSE: Shared utility functions for CLI and REPL
EXPORTS:
  - setup_logging(config) -> None
DEPENDENCIES:
  - logging (stdlib)
  - pathlib (log directory creation)
  - kanban.config (logging settings)
NOTES:
  - Logs go to a file by default so they don't interleave with REPL output
  - Safe to call more than once (handlers are replaced, not stacked)
  - Falls back to stderr when the log file cannot be opened
"""

import logging
import sys
from pathlib import Path

from .config import Config, get_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Config = None) -> None:
    """Configure logging based on config settings."""
    config = config or get_config()

    # Map config level to logging level
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    level = level_map.get(config.logging.level.lower(), logging.INFO)

    log_error = None
    if config.logging.file:
        log_path = Path(config.logging.file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError as e:
            # Read-only home, or a file where the log directory should be
            log_error = e
            handler = logging.StreamHandler(sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stderr)

    # Configure root logger
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )

    # HTTP client internals are noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    if log_error is not None:
        logger.warning(f"Could not open log file {config.logging.file}, logging to stderr: {log_error}")
    logger.info(f"Logging configured at level: {config.logging.level}")
