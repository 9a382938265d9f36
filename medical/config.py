"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        auto_create_tables: Create missing tables at startup

        jwt_signing_key: Shared secret for signing tokens (at least 32 bytes)
        jwt_issuer: Value of the ``iss`` claim
        jwt_audience: Value of the ``aud`` claim
        jwt_algorithm: Algorithm used for JWT encoding (HS256)
        jwt_duration_minutes: Token lifetime in minutes

        api_prefix: Path prefix for every API router
        cors_origins: Frontend origins allowed by CORS
        log_level: Root logging level
    """
    # Database settings
    database_url: str = "sqlite:///./medical.db"
    auto_create_tables: bool = True

    # JWT settings
    jwt_signing_key: Optional[str] = None
    jwt_issuer: str = "medical-api"
    jwt_audience: str = "medical-clients"
    jwt_algorithm: str = "HS256"
    jwt_duration_minutes: int = 60

    # HTTP settings
    api_prefix: str = "/api"
    cors_origins: List[str] = [
        "http://localhost:4200",
        "http://127.0.0.1:5500",
    ]

    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
