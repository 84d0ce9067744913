from __future__ import annotations

import contextlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator
import os


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LEVEL_ENV = "STREAMGANTT_LOG_LEVEL"
_configured = False


def _env_level() -> int:
    level = os.getenv(LEVEL_ENV, "WARNING").upper()
    return getattr(logging, level, logging.WARNING)


def _ensure_base_logger() -> None:
    global _configured
    if _configured:
        return
    logging.basicConfig(level=_env_level(), format=LOG_FORMAT)
    _configured = True


def set_level(level: str | None = None) -> None:
    """Set the root level; with no argument, re-read STREAMGANTT_LOG_LEVEL.

    Loggers are created at import time, so a level that only becomes
    visible later (e.g. from a `.env` file) has to be applied here.
    """
    _ensure_base_logger()
    if level is None:
        logging.getLogger().setLevel(_env_level())
    else:
        logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    _ensure_base_logger()
    return logging.getLogger(name)


@contextlib.contextmanager
def log_to_file(log_file: Path, name: str = "streamgantt") -> Iterator[RotatingFileHandler]:
    """Copy records of logger `name` and its children into `log_file` while active."""
    _ensure_base_logger()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger(name)
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        handler.close()
