"""Opt-in loguru output for applications embedding the workspace.

The package logs CLI invocations, stack lifecycle events and cleanup problems
through loguru, but ``pulumi_automation/__init__.py`` disables those records
on import.  An application that wants them calls ``setup_logging()`` once; it
also routes records from stdlib loggers (asyncio, anyio) into the same sink.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

from pulumi_automation.settings import get_settings

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class _InterceptHandler(logging.Handler):
    """Forward stdlib ``LogRecord``s to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so the record points at the caller.
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str | None = None) -> None:
    """Send package and stdlib logs to stderr at ``level``.

    ``level`` defaults to ``AutomationSettings.log_level``
    (``PULUMI_AUTOMATION_LOG_LEVEL``).  Existing loguru sinks are replaced.
    """
    level = (level or get_settings().log_level).upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT)
    logger.enable("pulumi_automation")

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    # Slow-callback reports from asyncio's debug mode.
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.debug("pulumi_automation logging enabled (level={})", level)
