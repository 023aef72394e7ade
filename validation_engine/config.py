"""
Environment-driven settings for the validation engine.

Values come from environment variables, optionally seeded from a ``.env``
file via python-dotenv.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

_TRUE_VALUES = ("1", "true", "yes", "on")


class Settings(BaseModel):
    """
    Runtime configuration.

    Attributes:
        log_level: Root log level for engine loggers
        log_format: "json" or "text"
        fail_fast: Default runner mode (True = stop at the first failing rule)
        default_timezone: Timezone used when a time rule omits ``timezone``
        metrics_port: Port for the Prometheus endpoint
        db_host, db_port, db_name, db_user, db_password: PostgreSQL store settings
    """

    log_level: str = "INFO"
    log_format: str = "json"
    fail_fast: bool = True
    default_timezone: str = "UTC"
    metrics_port: int = Field(8000, ge=1, le=65535)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "validation_engine"
    db_user: str = "validation_engine"
    db_password: str | None = None

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError(f"log_format must be 'json' or 'text', got '{v}'")
        return v


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional path to a .env file; variables already set in the
                  environment take precedence over the file

    Returns:
        Populated Settings
    """
    if env_file is not None and Path(env_file).exists():
        load_dotenv(env_file, override=False)
    elif env_file is None:
        load_dotenv(override=False)

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "json"),
        fail_fast=os.getenv("VALIDATION_FAIL_FAST", "true").strip().lower() in _TRUE_VALUES,
        default_timezone=os.getenv("DEFAULT_TIMEZONE", "UTC"),
        metrics_port=int(os.getenv("METRICS_PORT", "8000")),
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_name=os.getenv("DB_NAME", "validation_engine"),
        db_user=os.getenv("DB_USER", "validation_engine"),
        db_password=os.getenv("DB_PASSWORD"),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, loaded on first use"""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
