"""
Configuration settings for canvas-tui.

Uses Pydantic Settings for environment variable management with .env file support.
Only two variables are read: CANVAS_URL and CANVAS_ACCESS_TOKEN.
"""
from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing."""


_API_SUFFIX = re.compile(r"/api/v1/?$", re.IGNORECASE)


def normalize_base_url(base_url: str) -> str:
    """Reduce a pasted Canvas URL to the institution root (no /api/v1, no trailing slash)."""
    return _API_SUFFIX.sub("", base_url.strip()).rstrip("/")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    canvas_url: str = Field(
        default="",
        description="Canvas institution root, e.g. https://school.instructure.com",
    )
    canvas_access_token: str = Field(
        default="",
        description="Canvas personal access token",
    )

    @field_validator("canvas_url")
    @classmethod
    def _strip_api_suffix(cls, value: str) -> str:
        return normalize_base_url(value) if value else value

    def missing(self) -> list[str]:
        """Names of required variables that are unset."""
        missing = []
        if not self.canvas_url:
            missing.append("CANVAS_URL")
        if not self.canvas_access_token:
            missing.append("CANVAS_ACCESS_TOKEN")
        return missing

    def require(self) -> Settings:
        """Return self, or raise ConfigurationError naming unset variables."""
        missing = self.missing()
        if missing:
            raise ConfigurationError(
                f"Missing environment variable(s): {', '.join(missing)}"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
