"""Logging configuration using loguru.

stdout carries command output (the success line, ``--dry-run`` documents),
so every log record goes to stderr.
"""

from __future__ import annotations

import sys

from loguru import logger

_DEFAULT_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"

_DEBUG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: str = "WARNING") -> None:
    """Configure loguru as the sole logging sink.

    Call once per process before any work starts.  ``DEBUG`` and ``TRACE``
    switch to a format with call-site information.
    """
    level = level.upper()
    verbose = level in ("DEBUG", "TRACE")

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=_DEBUG_FORMAT if verbose else _DEFAULT_FORMAT,
        backtrace=verbose,
        diagnose=False,
    )

    logger.debug("Logging initialised (level={})", level)
