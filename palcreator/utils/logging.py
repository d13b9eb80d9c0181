"""
PalCreator Structured Logging
Centralized logging configuration using loguru.
"""
import sys
from typing import Any, Optional

from loguru import logger

from palcreator.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message} | {extra}"

_sink_id: Optional[int] = None


def configure_logging(level: Optional[str] = None, serialize: bool = False) -> int:
    """
    Install the PalCreator stderr sink.

    The library never adds sinks on import; applications (and the CLI) call
    this once. Calling it again replaces the previous sink.

    Args:
        level: Minimum level to emit (default from config)
        serialize: Emit JSON records instead of the text format

    Returns:
        The loguru handler id of the installed sink
    """
    global _sink_id

    logger.remove()
    _sink_id = logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=(level or config.LOG_LEVEL).upper(),
        serialize=serialize,
    )
    return _sink_id


def get_logger(**extra: Any):
    """Get a logger bound to the given extra fields."""
    return logger.bind(**extra) if extra else logger
