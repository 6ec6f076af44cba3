"""Coloured console logging with full timestamps."""

from __future__ import annotations

import logging

LOGGER_NAME = "zaycev_parser"

_COLORS = {logging.DEBUG: 37, logging.INFO: 36, logging.WARNING: 33,
           logging.ERROR: 31, logging.CRITICAL: 31}


class _ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.color = _COLORS.get(record.levelno, 0)
        record.label = record.levelname[:4]
        return super().format(record)


class _ConsoleHandler(logging.StreamHandler):
    """Handler installed by :func:`init_logging`."""


def init_logging(level: int = logging.DEBUG) -> logging.Logger:
    """Send the package's log records to stderr at ``level``."""
    logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in logger.handlers if isinstance(h, _ConsoleHandler)]:
        logger.removeHandler(old)
        old.close()
    handler = _ConsoleHandler()
    handler.setFormatter(_ColorFormatter(
        "\x1b[%(color)dm%(label)s\x1b[0m[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    ))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger