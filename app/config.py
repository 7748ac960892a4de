from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./twelve_week_year.db"

    # App
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    # Comma-separated list of allowed origins for the dashboard frontend
    CORS_ORIGINS: str = "*"

    # Daily reset job (local time)
    DAILY_RESET_HOUR: int = 0
    DAILY_RESET_MINUTE: int = 5
    # Run one reset pass when the process starts (covers days the job was missed)
    RESET_ON_STARTUP: bool = True

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str) -> str:
        return v or ""

    def get_cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return []
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
