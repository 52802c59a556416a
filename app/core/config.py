# app/core/config.py
from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PORT: int = 4000

    # MongoDB connection string, e.g. mongodb://localhost:27017/wellness
    MONGO_URI: str = ""
    # Used when MONGO_URI does not name a database
    MONGO_DB_NAME: str = "wellness"

    # Bearer tokens. No default: an unset secret refuses to sign or verify
    JWT_SECRET: str = ""
    JWT_EXPIRES_IN_HOURS: int = 24

    DEBUG_LOG: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # Values in .env are overridden by real environment variables
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
