"""
Utility helpers: directory setup, logging config, plain-text responses and time utils.
"""

from __future__ import annotations

import getpass
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime
from flask import Flask, Response

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def ensure_dirs(*paths: Path) -> None:
    """Ensure each directory exists."""
    for p in paths:
        p.mkdir(parents=True, exist_ok=True)


def init_logging(app: Flask) -> logging.Logger:
    """Configure a console logger + rotating file handler (when LOG_FILE is set)."""
    log_level = getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO)
    logger = logging.getLogger("linkdump")
    logger.setLevel(log_level)
    logger.propagate = False  # avoid duplicate logs if root has handlers

    # Repeated app creation (tests, reloads) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(ch)

    # File (rotating)
    if app.config.get("LOG_FILE"):
        log_file = Path(app.config["LOG_FILE"])
        ensure_dirs(log_file.parent)
        fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)

    return logger


def default_email_address() -> str:
    """Return '<login>@localhost' for the invoking user, or 'root@localhost'."""
    try:
        username = getpass.getuser()
    except (KeyError, OSError):
        username = ""
    return f"{username or 'root'}@localhost"


def text_response(body: str, status: int = 200) -> Response:
    """Plain-text response; every linkdump endpoint speaks text/plain."""
    return Response(body, status=status, mimetype="text/plain")


def unix_date(when: datetime | None = None) -> str:
    """
    Format a timestamp like `date(1)`: 'Mon Jan  2 15:04:05 UTC 2006'.

    Naive datetimes are taken as local time.
    """
    when = when or datetime.now()
    if when.tzinfo is None:
        when = when.astimezone()
    return (
        f"{when:%a %b} {when.day:2d} {when:%H:%M:%S} "
        f"{when.tzname() or 'UTC'} {when.year}"
    )
