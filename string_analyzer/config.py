"""Application settings from environment variables (and .env when present)."""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_title: str = "String Analyzer Service"
    app_version: str = "1.0.0"

    # Observability
    log_level: str = "INFO"

    # API
    cors_origins: List[str] = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
