"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    STORAGE_BACKEND: str = "json"  # "json" or "sql"
    JSON_DB_PATH: str = "data/timemaster.json"
    DATABASE_URL: str = "sqlite:///./timemaster.db"
    JWT_SECRET: str = "timemaster-dev-secret"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 30
    MIN_PASSWORD_LENGTH: int = 4
    TIMEZONE: str = "UTC"  # IANA tz used for "today" and record timestamps
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    class Config:
        env_file = ".env"


settings = Settings()
