# backend/drivedesk/core/config.py
import os
from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_running_tests() -> bool:
    """True inside a pytest run (PYTEST_CURRENT_TEST is set per test)."""
    return os.getenv("PYTEST_CURRENT_TEST") is not None


_BACKEND_ROOT = Path(__file__).resolve().parents[2]

# CI supplies its environment directly
if not os.getenv("CI"):
    load_dotenv(_BACKEND_ROOT / ".env")


class Settings(BaseSettings):
    environment: Literal["development", "test", "staging", "production"] = "development"
    log_level: str = Field(default="INFO", description="Root log level for the API process")

    # Storage
    database_url: str = Field(
        default=f"sqlite:///{_BACKEND_ROOT / 'drivedesk.db'}",
        description="SQLAlchemy URL (PostgreSQL in production, SQLite locally)",
    )
    database_echo: bool = False

    # Access tokens are issued by the hosted auth provider; we only verify them.
    auth_jwt_secret: SecretStr = Field(
        default=SecretStr("local-development-secret-not-for-production"),
        description="HS256 secret shared with the auth provider",
    )
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str = "authenticated"

    # Calendar
    default_timezone: str = Field(
        default="Europe/London", description="Fallback time zone for new instructor profiles"
    )
    calendar_default_min_hour: int = Field(default=9, ge=0, le=24)
    calendar_default_max_hour: int = Field(default=18, ge=0, le=24)
    agenda_lookahead_months: int = Field(default=2, ge=1, le=12)

    # Bookings and packages
    max_repeat_bookings: int = Field(default=12, ge=1)
    low_prepaid_hours_threshold: float = Field(default=2.0, ge=0)

    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:8080", "capacitor://localhost"]
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [token.strip() for token in value.split(",") if token.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return normalized

    @model_validator(mode="after")
    def _check_calendar_window(self) -> "Settings":
        if self.calendar_default_min_hour >= self.calendar_default_max_hour:
            raise ValueError("calendar_default_min_hour must be earlier than calendar_default_max_hour")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
