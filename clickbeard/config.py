# clickbeard/config.py

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./clickbeard.db"

    jwt_secret: str = "change-me-later"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 7 * 24 * 60  # 7 days

    api_prefix: str = "/api"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    cancellation_cutoff_hours: int = 2

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )


settings = Settings()
