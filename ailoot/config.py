"""Application configuration loaded from environment variables and .env file."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = Path.home() / ".ai-loot" / "loot.db"


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = f"sqlite:///{DEFAULT_DB_PATH}"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # AI Provider settings
    AI_PROVIDER: str = "ollama"
    AI_MODEL: Optional[str] = None
    AI_BASE_URL: Optional[str] = None
    AI_API_KEY: Optional[str] = None
    AI_TIMEOUT: float = 120.0


settings = Settings()
