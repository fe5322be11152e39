# app/settings.py
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[1]

Environment = Literal["development", "test", "staging", "production"]

DEFAULT_DATABASE_URL = f"sqlite:///{PROJECT_ROOT / 'customers.sqlite3'}"


class Settings(BaseModel):
    """
    Process-wide configuration, built once at start-up and handed to
    the app factory, the engine and the registration service.
    """
    model_config = ConfigDict(frozen=True)

    environment: Environment = "development"
    database_url: str = DEFAULT_DATABASE_URL
    demo_enabled: bool = False
    default_locale: str = "en"
    db_timeout_seconds: float = 3.0
    health_timeout_seconds: float = 2.0
    log_level: str = "INFO"
    sql_echo: bool = False


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def load_settings() -> Settings:
    """Read `.env` (if any) and the environment into a Settings object."""
    load_dotenv()
    return Settings(
        environment=os.getenv("APP_ENV", "development"),
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        demo_enabled=_flag("DEMO_ENABLED"),
        default_locale=os.getenv("DEFAULT_LOCALE", "en"),
        db_timeout_seconds=float(os.getenv("DB_TIMEOUT_SECONDS", "3")),
        health_timeout_seconds=float(os.getenv("HEALTH_TIMEOUT_SECONDS", "2")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        sql_echo=_flag("SQL_ECHO"),
    )
