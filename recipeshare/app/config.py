from __future__ import annotations

from typing import Any

from pydantic import AnyUrl, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from recipeshare.app.domain.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    SUPABASE_URL: AnyUrl
    SUPABASE_KEY: str = Field(min_length=1)
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    FEED_LIMIT: int = Field(default=20, ge=1)
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
    )


def load_settings(**overrides: Any) -> Settings:
    """
    Read settings once at startup.

    A missing or malformed required value is unrecoverable, so it is
    raised as ConfigurationError naming every offending key.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
        raise ConfigurationError(missing) from exc
