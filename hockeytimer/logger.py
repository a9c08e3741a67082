"""Logging setup.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, by the entry point.  Logs go to:

    ~/Library/Application Support/HockeyTimer/logs/hockeytimer.log  (rotating)
    ~/Library/Application Support/HockeyTimer/logs/latest.log       (this run)
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import APP_SUPPORT_DIR

LOG_DIR = APP_SUPPORT_DIR / "logs"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "hockeytimer"


def configure_logging(
    level: int = logging.INFO,
    log_dir: Path | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
    console: bool = False,
) -> logging.Logger:
    """Attach file (and optionally console) handlers to the package logger.

    Calling it again does not add duplicate handlers.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    def _has(name: str) -> bool:
        return any(h.get_name() == name for h in logger.handlers)

    persistent_name = f"{ROOT_LOGGER}:persistent"
    if not _has(persistent_name):
        persistent = RotatingFileHandler(
            filename=log_dir / f"{ROOT_LOGGER}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        persistent.setFormatter(fmt)
        persistent.set_name(persistent_name)
        logger.addHandler(persistent)

    latest_name = f"{ROOT_LOGGER}:latest"
    if not _has(latest_name):
        latest = logging.FileHandler(
            filename=log_dir / "latest.log",
            mode="w",  # overwritten on each run
            encoding="utf-8",
        )
        latest.setFormatter(fmt)
        latest.set_name(latest_name)
        logger.addHandler(latest)

    console_name = f"{ROOT_LOGGER}:console"
    if console and not _has(console_name):
        stream = logging.StreamHandler()
        stream.setFormatter(fmt)
        stream.set_name(console_name)
        logger.addHandler(stream)

    return logger
