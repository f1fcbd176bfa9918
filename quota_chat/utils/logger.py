"""Logging utilities for the application.

This module configures Loguru to emit logs to the console and, when
``LOG_FILE`` is set, to a rotating file.  Records from the standard
``logging`` module (uvicorn, httpx) are forwarded to Loguru so every line
shares one format.
"""

from __future__ import annotations

import sys
import logging
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config.app_config import AppConfig, get_app_config


class LoguruHandler(logging.Handler):
    """Handler to forward standard logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except (KeyError, ValueError):
            level = record.levelno

        # Find the caller from where the logging call was made
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(app_config: Optional[AppConfig] = None) -> "loguru.Logger":
    """Configure Loguru logging for the application.

    Removes the default Loguru handler, adds a console sink and an
    optional file sink with rotation and retention, then routes the
    standard ``logging`` module through :class:`LoguruHandler`.  Calling it
    again replaces the sinks instead of duplicating them.
    """
    app_config = app_config or get_app_config()

    logger.remove()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stdout,
        level=app_config.log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=app_config.app_debug,
    )

    if app_config.log_file:
        Path(app_config.log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            app_config.log_file,
            level=app_config.log_level,
            format=log_format,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=app_config.app_debug,
        )

    logging.basicConfig(handlers=[LoguruHandler()], level=logging.WARNING, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [LoguruHandler()]
        std_logger.propagate = False

    logger.info("Logging configured successfully")
    logger.debug(f"App environment: {app_config.app_env}")
    logger.debug(f"Log level: {app_config.log_level}")
    logger.debug(
        f"Prompt quota: {app_config.prompt_limit} per {app_config.block_window_hours}h lockout window"
    )

    return logger
