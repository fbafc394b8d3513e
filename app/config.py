"""
Application configuration settings.
"""
from pydantic_settings import BaseSettings
from typing import List
import logging
import os


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # CSV source (data.gouv.fr "sp-pos-quot-dep" dataset)
    DATAGOUV_URL: str = ""
    SOURCE_TIMEOUT_SECONDS: float = 60.0

    # Database - PostgreSQL for production, SQLite for local
    DATABASE_URL: str = ""  # PostgreSQL connection string (production)
    DATABASE_PATH: str = "data/covid_analytics.db"  # SQLite path (local fallback)
    USE_POSTGRES: bool = False  # Set to True to use PostgreSQL
    UPSERT_BATCH_SIZE: int = 1000

    # HTTP server
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 8000

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "COVID Testing Analytics"
    VERSION: str = "1.0.0"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        """Get database URL - PostgreSQL if configured, else SQLite."""
        if self.USE_POSTGRES and self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATABASE_PATH}"

    @property
    def is_postgres(self) -> bool:
        """Check if using PostgreSQL."""
        return self.USE_POSTGRES and bool(self.DATABASE_URL)

    class Config:
        env_file = ".env"
        extra = "allow"


def ensure_directories(settings: Settings):
    """Create the SQLite data directory if it doesn't exist."""
    if settings.is_postgres:
        return
    dir_path = os.path.dirname(settings.DATABASE_PATH)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)


def configure_logging(settings: Settings):
    """Configure root logging once for the whole process."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
