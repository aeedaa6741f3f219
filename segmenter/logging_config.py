"""
segmenter/logging_config.py
---------------------------
One logger namespace, "segmenter", for the core, the CLI, the HTTP service
and the validator. Modules ask for `get_logger(__name__)`; names from outside
the package ("app", "service.api") are filed under "segmenter." so a single
level governs the whole tool.

Records go to stderr: stdout belongs to the thread the CLI prints.

The level is, in order of precedence:
    1. the `level` passed to configure_logging() (the CLI's -v flag),
    2. the SEGMENTER_LOG_LEVEL environment variable ("DEBUG", "warning", "10"),
    3. INFO.
"""

import logging
import os
import sys
from typing import Optional, Union


# ── Configuration ──────────────────────────────────────────────────────────────

_LOG_FORMAT  = "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ROOT_NAME   = "segmenter"
LEVEL_ENV    = "SEGMENTER_LOG_LEVEL"


def parse_level(value: Union[int, str]) -> int:
    """
    Turns a level name or number into a logging level.

    Raises:
        ValueError: If value names no logging level.
    """
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{value}'.")
    return level


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Sets the segmenter level and installs the stderr handler once.

    Args:
        level: Level name or number. None falls back to SEGMENTER_LOG_LEVEL,
               then INFO.

    Returns:
        The "segmenter" root logger.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV) or logging.INFO

    segmenter = logging.getLogger(_ROOT_NAME)
    segmenter.setLevel(parse_level(level))

    if not segmenter.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        segmenter.addHandler(handler)
        segmenter.propagate = False
    return segmenter


def get_logger(name: str) -> logging.Logger:
    """Logger for `name`, filed under the segmenter namespace."""
    if not logging.getLogger(_ROOT_NAME).handlers:
        configure_logging()
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)
