"""
Configuration settings for the Product Catalog API.

Uses Pydantic Settings to load environment variables for the HTTP surface,
logging, query limits, rate limiting and seed data. Values can also come from
a local `.env` file.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    # HTTP
    api_key: Optional[str] = Field(None, alias="API_KEY")
    host: str = Field("127.0.0.1", alias="HOST")
    port: int = Field(3000, alias="PORT")

    # Query defaults
    max_page_limit: Optional[int] = Field(100, alias="MAX_PAGE_LIMIT")

    # Rate limiting (per client address, shared by all routes)
    rate_limit_enabled: bool = Field(True, alias="RATE_LIMIT_ENABLED")
    rate_limit: str = Field("100/15 minutes", alias="RATE_LIMIT")
    rate_limit_storage_uri: str = Field("memory://", alias="RATE_LIMIT_STORAGE_URI")

    # Seed data
    seed_sample_data: bool = Field(True, alias="SEED_SAMPLE_DATA")
    seed_file: Optional[Path] = Field(None, alias="SEED_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
