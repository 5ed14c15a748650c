"""Logging setup for the API process."""

import logging
import sys

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: str | int) -> int:
    """Turn "INFO"/"debug"/20 into a logging level, defaulting to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger with a single stderr handler.

    Safe to call more than once; previous handlers are replaced.
    """
    level = resolve_level(level)
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(DEBUG_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT)
    )
    root_logger.addHandler(handler)

    logging.getLogger("resumevault").setLevel(level)
