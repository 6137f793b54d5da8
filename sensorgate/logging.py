"""Logging utilities for sensorgate commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "sensorgate"

# -v shows progress, -vv adds the reason each skipped sensor was skipped.
_LEVELS_BY_VERBOSITY = (logging.WARNING, logging.INFO, logging.DEBUG)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the sensorgate hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def level_for_verbosity(verbosity: int) -> int:
    """Map a repeated ``-v`` count onto a logging level."""
    index = min(max(verbosity, 0), len(_LEVELS_BY_VERBOSITY) - 1)
    return _LEVELS_BY_VERBOSITY[index]


def configure_logging(
    *, verbosity: int = 0, log_file: Path | None = None
) -> logging.Logger:
    """Configure the sensorgate logger for a CLI run.

    The console follows ``verbosity``; an optional log file always receives
    debug records so skipped sensors can be diagnosed after the fact.
    """
    console_level = level_for_verbosity(verbosity)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(
        logging.Formatter("[sensorgate:%(module)s] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger", "level_for_verbosity"]
