from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below

    Settings are built once at startup and handed to create_app();
    services receive plain values from them and never import this module.
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Link Shortener"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite:///./links.db"
    db_timeout_seconds: int = 5  # Upper bound for connect/lock waits
    create_tables: bool = True

    # Short links
    base_url: Optional[str] = None  # None = derive from the incoming request
    max_attempts: int = 5

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
