"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - column_source selects where auto-detected columns come from; it never
      changes how explicit __searchable__ declarations are treated

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: a local SQLite file works out-of-the-box
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Search settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SCOPESEARCH_", case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite:///./scopesearch.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Heroku-style postgres:// URLs are rejected by SQLAlchemy 2.x."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    database_echo: bool = False
    database_pool_pre_ping: bool = True

    # Column auto-detection: live reflection or declared MetaData
    column_source: Literal["database", "metadata"] = "database"

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
