"""
Loguru setup for the API process.

Loguru is the single logging backend. Stdlib `logging` records (uvicorn,
asyncpg) are routed into it by `InterceptHandler`.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

from . import config


def setup_logging() -> None:
    """Configure Loguru sinks and intercept stdlib logging.

    Safe to call more than once; every call replaces the previous sinks.
    """
    logger.remove()

    level = config.log_level()
    production = config.is_production()

    if production:
        # JSON lines; the container runtime collects stdout.
        logger.add(sys.stdout, level=level, format="{message}", serialize=True)
    else:
        logger.add(
            sys.stdout,
            level=level,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            colorize=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for noisy in ("uvicorn.access", "asyncpg"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.info("Logging configured", level=level, production=production)


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames inside the logging module so Loguru reports the caller.
        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())
