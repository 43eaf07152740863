"""
Validated startup settings.

`LinkdumpSettings` checks the whole process configuration once, before the
app is built; `FlushConfig` is the immutable slice the flush controller
needs. Neither is reloaded while the process runs.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FlushConfig(BaseModel):
    """Threshold and destination for dumps; frozen after startup."""

    model_config = ConfigDict(frozen=True)

    min_links: int = Field(
        default=10,
        description="Minimum queue size for a non-forced flush.",
    )
    email_addr: str = Field(
        min_length=1,
        description="Recipient handed to the mail transport.",
    )


class LinkdumpSettings(BaseModel):
    """
    Process-wide settings, mirrored onto Flask config keys.

    Field names are the lowercase form of the Flask config key they feed
    (`link_min` -> `LINK_MIN`).
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=1234, ge=1, le=65535)
    max_content_length: int = Field(default=10 * 1024 * 1024, gt=0, description="Largest accepted request body, in bytes.")
    link_min: int = Field(default=10, description="Minimum links before a non-forced dump.")
    email_addr: str = Field(min_length=1)
    mailer_command: str = Field(default="msmtp", min_length=1)
    mailer_timeout: float = Field(default=60.0, gt=0, description="Seconds before delivery is abandoned.")
    log_file: str = Field(default="logs/linkdump.log")
    log_level: str = Field(default="INFO")

    @field_validator("email_addr", "mailer_command", "host")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level {value!r}")
        return value

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LinkdumpSettings":
        """Build from a Flask-style config mapping (uppercase keys)."""
        return cls(**{name: config[name.upper()] for name in cls.model_fields if name.upper() in config})

    def as_config(self) -> dict[str, Any]:
        """Uppercase mapping suitable for `app.config.update`."""
        return {name.upper(): value for name, value in self.model_dump().items()}

    def flush_config(self) -> FlushConfig:
        return FlushConfig(min_links=self.link_min, email_addr=self.email_addr)
