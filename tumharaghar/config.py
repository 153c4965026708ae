"""
Configuration management using Pydantic settings.
Handles the backend database URL, token secrets, cookies and presentation defaults.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    # Application configuration
    app_name: str = "TUMHARAGHAR"
    app_tagline: str = "Your dream home awaits"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Hosted backend database
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/tumharaghar"
    create_tables_on_startup: bool = False

    # Token configuration
    jwt_secret_key: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    delete_confirmation_expire_minutes: int = 5
    flash_expire_minutes: int = 5

    # Cookies carrying the session and pending notifications
    session_cookie_name: str = "tg_session"
    flash_cookie_name: str = "tg_flash"

    # Presentation
    currency: str = "PKR"
    placeholder_images: List[str] = [
        "/assets/property-1.jpg",
        "/assets/property-2.jpg",
        "/assets/property-3.jpg",
    ]
    featured_listing_count: int = 6

    # API configuration
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        """Ensure an async driver is used."""
        if not v:
            raise ValueError("DATABASE_URL is required")
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if not v.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
            raise ValueError("DATABASE_URL must use the asyncpg or aiosqlite driver")
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v):
        """Validate JWT secret key strength."""
        if not v:
            raise ValueError("JWT_SECRET_KEY is required")
        if len(v) < 32 and v != "your-secret-key-change-in-production":
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters long")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("placeholder_images")
    @classmethod
    def validate_placeholder_images(cls, v):
        """At least one placeholder is needed for listings without photos."""
        if not v:
            raise ValueError("At least one placeholder image is required")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
