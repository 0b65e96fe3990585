"""
Logging setup for the ``docchat`` logger tree.

Modules ask for a child logger and tag their messages with the stage
they belong to:

    logger = get_logger("docchat.pipeline.retrieval")
    logger.info("[RETRIEVAL] Search returned %d hits", n)
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "docchat"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

_handler: logging.Handler | None = None


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Attach the stderr handler once and apply ``level``.

    Safe to call again later (e.g. after settings are loaded) to change
    the level; the handler is never duplicated.
    """
    global _handler
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(_handler)
        root.propagate = False

    root.setLevel(level)
    _handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    if _handler is None:
        setup_logging()
    return logging.getLogger(name)
