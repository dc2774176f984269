"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "alumni_db"
    db_timeout_seconds: float = 5
    db_connect_timeout_seconds: float = 10

    # JWT Auth (tokens are valid for 24 hours)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Uploaded photos / certificates land in <upload_dir>/photos and <upload_dir>/certificates
    upload_dir: str = "./uploads"

    # App
    debug: bool = True
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
