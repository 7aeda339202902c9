"""Application configuration from environment variables."""
from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./readtrace.db"

    # Authentication
    jwt_secret: str = "change-me-in-production-use-random-string"
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Imports
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB CSV limit

    # Platforms used when a user's preference list normalizes to nothing
    default_preferred_platforms: List[str] = ["mangadex"]

    # HTTP
    cors_origins: str = "*"

    # Logging
    log_level: str = "info"
    log_path: str = ""

    class Config:
        env_file = (".env", "../.env")  # Check both backend/ and parent dir
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
