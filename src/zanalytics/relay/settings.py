"""Relay configuration loaded from environment variables with pydantic-settings.

OAuth credentials are not part of these settings: they are read through
:func:`zanalytics.config.load_credentials` so the CLI and the relay share one
source of truth.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_ORIGIN = "https://www.sportdogfood.com"


class RelaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    port: int = Field(default=3000, validation_alias="PORT")
    host: str = Field(default="0.0.0.0", validation_alias="RELAY_HOST")
    allowed_origins: str = Field(
        default=DEFAULT_ALLOWED_ORIGIN, validation_alias="RELAY_ALLOWED_ORIGINS"
    )
    rate_limit: str = Field(default="100/minute", validation_alias="RELAY_RATE_LIMIT")
    debug: bool = Field(default=False, validation_alias="RELAY_DEBUG")

    @field_validator("rate_limit")
    @classmethod
    def validate_rate_limit(cls, value: str) -> str:
        count, sep, period = value.partition("/")
        if not sep or not count.strip().isdigit() or not period.strip():
            raise ValueError("RELAY_RATE_LIMIT must look like '<count>/<period>', e.g. 100/minute")
        return value.strip()

    def get_allowed_origins(self) -> list[str]:
        """Return the comma-separated CORS allow-list as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]
