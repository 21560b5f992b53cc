"""Logging configuration for the Course Bid Forecaster."""

import logging
import sys
from typing import Optional, TextIO

from bid_forecaster.config import LOG_LEVEL, LOG_FORMAT


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure logging for command-line use.

    Records go to stderr unless another stream is given, so stdout carries
    only the forecast tables and the answers of `probability` / `target`.

    Args:
        level: Log level name (default: LOG_LEVEL setting)
        format_string: Custom format string for log messages
        stream: Destination stream for log records

    Raises:
        ValueError: If the level name is not a logging level
    """
    level_name = (level or LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logging.basicConfig(
        level=numeric_level,
        format=format_string or LOG_FORMAT,
        handlers=[
            logging.StreamHandler(stream or sys.stderr),
        ],
    )

    # numpy reports degenerate arithmetic through the warnings module
    logging.captureWarnings(True)
