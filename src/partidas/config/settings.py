"""Configuration models and loading utilities for the fixtures service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class DatabaseSettings(BaseSettings):
    """Runtime configuration for the relational store."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    dsn: str = Field(
        "sqlite+aiosqlite:///./partidas.db",
        description="SQLAlchemy async DSN for the primary store.",
    )
    echo: bool = Field(False, description="Log every SQL statement emitted by the engine.")


class ApiSettings(BaseSettings):
    """HTTP listener and pagination defaults."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = Field("0.0.0.0", description="Interface the API server binds to.")
    port: int = Field(8000, description="Port the API server listens on.")
    default_page_size: int = Field(10, ge=1, description="Page size used when none is given.")
    max_page_size: int = Field(100, ge=1, description="Upper bound accepted for page size.")


class SchedulingSettings(BaseSettings):
    """Parameters of the match scheduling rules."""

    model_config = SettingsConfigDict(env_prefix="SCHEDULING_")

    fatigue_window_hours: int = Field(
        48,
        ge=0,
        description="Minimum whole hours between two matches of the same club.",
    )
    civil_timezone: str = Field(
        "America/Sao_Paulo",
        description="Civil calendar that timezone-aware timestamps are converted into.",
    )

    @field_validator("civil_timezone")
    @classmethod
    def check_civil_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown IANA timezone: {value!r}") from exc
        return value


@dataclass(slots=True)
class Settings:
    """Aggregated application settings loaded from environment variables."""

    database: DatabaseSettings
    api: ApiSettings
    scheduling: SchedulingSettings
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        """Hydrate the composed settings model from environment variables."""

        load_dotenv()

        database = DatabaseSettings()
        api = ApiSettings()
        scheduling = SchedulingSettings()

        if api.default_page_size > api.max_page_size:
            logger.warning(
                "default_page_size_clamped",
                default_page_size=api.default_page_size,
                max_page_size=api.max_page_size,
            )
            api = api.model_copy(update={"default_page_size": api.max_page_size})

        log_level = os.getenv("LOG_LEVEL", "INFO")

        allowed_origins_raw = os.getenv("ALLOWED_ORIGINS", "*")
        allowed_origins = [
            origin.strip()
            for origin in allowed_origins_raw.split(",")
            if origin.strip()
        ]
        if not allowed_origins:
            allowed_origins = ["*"]

        return cls(
            database=database,
            api=api,
            scheduling=scheduling,
            log_level=log_level,
            allowed_origins=allowed_origins,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


__all__ = [
    "ApiSettings",
    "DatabaseSettings",
    "SchedulingSettings",
    "Settings",
    "get_settings",
]
