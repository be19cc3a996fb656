"""
Centralized logging configuration for Vision Doctor.

Library modules log through ``loguru.logger`` and never configure sinks
themselves; the CLI (or an embedding application) calls ``setup_logging``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger


LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    show_time: bool = True,
    show_level: bool = True,
) -> Any:
    """
    Configure the loguru sinks for the station engine.

    Parameters
    ----------
    level : str, default="INFO"
        Logging level, one of ``LEVELS`` (case-insensitive)
    log_file : Path | None, default=None
        If provided, also log to this file (rotated at 10 MB, kept 7 days)
    show_time : bool, default=True
        Whether to show timestamp in logs
    show_level : bool, default=True
        Whether to show log level in logs

    Returns
    -------
    logger
        Configured loguru logger instance

    Raises
    ------
    ValueError
        If ``level`` is not a known loguru level

    Examples
    --------
    >>> from visiondoctor.utils.logging_config import setup_logging
    >>> setup_logging(level="DEBUG")
    >>> from loguru import logger
    >>> logger.debug("Lighting repaired for Spot: light_config=Narrow")
    """
    level = level.upper()
    if level not in LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Available: {list(LEVELS)}")

    logger.remove()

    format_parts = []
    if show_time:
        format_parts.append("<green>{time:YYYY-MM-DD HH:mm:ss}</green>")
    if show_level:
        format_parts.append("<level>{level: <8}</level>")
    format_parts.append("<level>{message}</level>")
    format_str = " | ".join(format_parts)

    logger.add(
        sys.stderr,
        format=format_str,
        level=level,
        colorize=True,
    )

    if log_file:
        # File records carry the emitting module for post-mortem reading
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}",
            level=level,
            rotation="10 MB",
            retention="7 days",
        )

    return logger
