"""
Configuration objects for the Flask application.

Every knob can be overridden through a LINKDUMP_* environment variable;
the command-line flags in `linkdump.cli` take precedence over both.
Numeric values are left as the raw strings from the environment here and
coerced (or rejected) by `linkdump.settings.LinkdumpSettings` at app start.
"""

from __future__ import annotations
import os

from linkdump.utils import default_email_address


class Config:
    """Base configuration (safe defaults)."""

    # Listener
    HOST = os.getenv("LINKDUMP_HOST", "localhost")
    PORT = os.getenv("LINKDUMP_PORT", "1234")

    # Requests
    MAX_CONTENT_LENGTH = os.getenv("LINKDUMP_MAX_CONTENT_LENGTH", str(10 * 1024 * 1024))  # 10 MiB

    # Flush
    LINK_MIN = os.getenv("LINKDUMP_LINK_MIN", "10")
    EMAIL_ADDR = os.getenv("LINKDUMP_EMAIL", default_email_address())

    # Mail transport
    MAILER_COMMAND = os.getenv("LINKDUMP_MAILER", "msmtp")
    MAILER_TIMEOUT = os.getenv("LINKDUMP_MAILER_TIMEOUT", "60")  # seconds

    # Logging
    LOG_FILE = os.getenv("LINKDUMP_LOG_FILE", "logs/linkdump.log")
    LOG_LEVEL = os.getenv("LINKDUMP_LOG_LEVEL", "INFO")


class ProductionConfig(Config):
    """Production overrides."""
    LOG_LEVEL = os.getenv("LINKDUMP_LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development overrides."""
    LOG_LEVEL = os.getenv("LINKDUMP_LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """Used by the test-suite: no log file, tiny threshold, a mailer that cannot exist."""
    TESTING = True
    LOG_FILE = ""
    LOG_LEVEL = "DEBUG"
    LINK_MIN = 3
    EMAIL_ADDR = "tester@localhost"
    MAILER_COMMAND = "linkdump-test-mailer-not-installed"
    MAILER_TIMEOUT = 5.0
