from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    # --------------------------------------
    # FASTAPI APP SETTINGS
    # --------------------------------------
    APP_NAME: str = "BlueprintStore"
    APP_ENV: str = "development"
    APP_PORT: int = 8000
    APP_HOST: str = "0.0.0.0"
    DEBUG: bool = False

    # --------------------------------------
    # DATABASE SETTINGS
    # --------------------------------------
    DATABASE_URL: str = "sqlite+aiosqlite:///./blueprints.db"
    DB_ECHO: bool = False

    # --------------------------------------
    # MISC SETTINGS
    # --------------------------------------
    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# Cached instance to avoid re-reading on each import
@lru_cache()
def get_settings():
    return Settings()
