"""
Configuration management for SpaceSync.

Loads settings from environment variables and .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SpaceSync API"
    app_version: str = "0.1.0"
    api_prefix: str = "/api/v1"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Suggestion agent (Gemini)
    google_api_key: Optional[str] = None
    model_name: str = "gemini-2.5-flash"
    suggestion_temperature: float = 0.2
    max_suggestions: int = 5

    # Proximity scoring
    adjacency_threshold: float = 200.0
    desk_size: float = 32.0

    # Collaboration flow
    flow_noise_floor: int = 3
    distant_collaborator_min_percentage: int = 20


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
