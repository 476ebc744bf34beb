from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "AssessMate API"
    DATABASE_URL: str = "sqlite:///./assessmate.db"

    JWT_SECRET: str = "assessmate-dev-secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 120

    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # Seeded on startup when no admin row exists
    DEFAULT_ADMIN_EMAIL: str = "admin@assessmate.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_ADMIN_MOBILE: str = "9999999999"

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip().rstrip("/") for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
