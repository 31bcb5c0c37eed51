"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.

Settings are read at wiring points (API startup, CollectorConfig) and passed
into clients explicitly; library code never reads them on its own.
"""

from typing import Optional
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Keyword research
    SEMRUSH_API_KEY: Optional[str] = None
    SEMRUSH_DATABASE: str = "us"

    # Backlinks
    AHREFS_API_KEY: Optional[str] = None

    # Search Console
    GOOGLE_ACCESS_TOKEN: Optional[str] = None

    # Claude API (AI helpers)
    ANTHROPIC_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-sonnet-4-20250514"

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Limits
    MAX_SEED_KEYWORDS: int = 5
    MAX_RELATED_KEYWORDS: int = 100
    MAX_BACKLINKS: int = 1000
    DEFAULT_BACKLOG_SIZE: int = 20

    # Timeouts
    API_TIMEOUT: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
