"""Logging utilities for the CLI and the launch pipeline."""

from __future__ import annotations

import logging
from pathlib import Path


DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LAUNCH_LOGGER_NAME = "native_launch.launch"


def resolve_log_level(name: str | int) -> int:
    """Turn a level name such as ``debug`` into a ``logging`` level number."""

    if isinstance(name, int):
        return name
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def configure_logging(log_file: Path | None, level: int | str = logging.INFO) -> logging.Logger:
    """Configure process-wide console logging, plus a log file when one is given.

    Child process output is routed through the same handlers, so the
    formatter stays the single place that decides how lines look.
    """

    numeric_level = resolve_log_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(numeric_level)
    root_logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric_level)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(LAUNCH_LOGGER_NAME)
    logger.setLevel(numeric_level)
    return logger
