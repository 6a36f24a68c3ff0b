"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import List
import os


class Settings(BaseSettings):
    """Application settings.

    Non-sensitive configuration is defined here with sensible defaults.
    Secrets (passwords) are loaded from environment variables.

    Priority: Environment variables > .env file > defaults defined here
    """

    # App Configuration
    APP_NAME: str = "Autonomic Administration"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Database Configuration
    DB_BACKEND: str = "sqlite"  # sqlite, postgresql
    SQLITE_PATH: str = "autonomic_admin.db"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "autonomic"
    DB_USER: str = "autonomic"
    DB_PASSWORD: str = ""  # MUST be set via POSTGRES_PASSWORD env var for postgresql

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL from components."""
        if self.DB_BACKEND == "postgresql":
            password = os.getenv("POSTGRES_PASSWORD", self.DB_PASSWORD)
            return f"postgresql+asyncpg://{self.DB_USER}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"

    # Stuck cluster sweep
    # The sweep interval must stay below the stuck threshold, otherwise live
    # administration passes can be reclaimed.
    SWEEP_ENABLED: bool = True
    SWEEP_INITIAL_DELAY_SECONDS: int = 60
    SWEEP_INTERVAL_MINUTES: int = 180
    STUCK_THRESHOLD_HOURS: int = 6

    # CORS Configuration
    CORS_ORIGINS: List[str] = [
        "http://localhost:3001",
        "http://localhost:3000",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
