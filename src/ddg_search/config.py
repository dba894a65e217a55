"""Client configuration powered by Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import cast

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    base_url: str = Field(
        "https://duckduckgo.com",
        alias="DDG_BASE_URL",
        description="Root HTML page probed for the vqd session token.",
    )
    images_url: str = Field("https://duckduckgo.com/i.js", alias="DDG_IMAGES_URL")
    text_url: str = Field("https://links.duckduckgo.com/d.js", alias="DDG_TEXT_URL")
    retry_attempts: int = Field(3, alias="DDG_RETRY_ATTEMPTS", ge=1, le=10)
    retry_delay_seconds: float = Field(
        3.0,
        alias="DDG_RETRY_DELAY_SECONDS",
        ge=0.0,
        le=60.0,
        description="Fixed pause between two attempts of the same request.",
    )
    http_timeout: float = Field(
        10.0,
        alias="DDG_HTTP_TIMEOUT",
        ge=1.0,
        le=120.0,
        description="Timeout in seconds handed to the HTTP transport.",
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, alias="DDG_USER_AGENT")
    images_max_rounds: int = Field(10, alias="DDG_IMAGES_MAX_ROUNDS", ge=1, le=50)
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("user_agent", mode="before")
    @classmethod
    def ensure_user_agent_has_value(cls, value: str | None) -> str:
        """Fallback to the default browser string when an empty value is provided.

        Shell wrappers commonly export ``DDG_USER_AGENT=`` when the variable is
        unset upstream. An empty header makes the backend answer with its bot
        page, so the blank value is replaced by the default.
        """
        default_agent = cast(str, cls.model_fields["user_agent"].default)
        if value is None or not str(value).strip():
            return default_agent
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["DEFAULT_USER_AGENT", "Settings", "get_settings"]
