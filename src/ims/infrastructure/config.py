"""Runtime configuration, read from ``IMS_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="IMS_", env_file=".env", extra="ignore")

    # Database
    database_url: str = "sqlite:///data/ims.db"
    sql_echo: bool = False

    # Logging
    log_level: str = "INFO"

    # Queries
    move_history_limit: int = 100


@lru_cache()
def get_settings() -> Settings:
    return Settings()
