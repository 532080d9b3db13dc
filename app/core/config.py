# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Env vars (.env):
      - DATABASE_URL (SQLite file by default, Postgres in deployments)
      - JWT_SECRET (symmetric key used to sign bearer tokens)

    Optional:
      - JWT_ALG, JWT_EXPIRE_DAYS
      - CORS_ORIGINS (JSON list)
      - LOG_LEVEL
    """

    PROJECT_NAME: str = "Delivery Orders API"
    API_PREFIX: str = "/api"

    # DB config
    DATABASE_URL: str = "sqlite:///./delivery.db"
    DATABASE_ECHO: bool = False

    # Token signing
    JWT_SECRET: str = "secret"
    JWT_ALG: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
