"""Application configuration.

Defines `Settings` read from environment variables (and `.env`).
"""
# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Formdesk"
    DEBUG: bool = False
    DATABASE_URL: str = "sqlite:///./formdesk.db"
    LOG_PATH: str = "logging"
    LOG_LEVEL: str = "INFO"


settings = Settings()
