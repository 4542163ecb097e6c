"""
Settings configuration for Deckforge.
"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # App settings
    APP_ENV: str = Field("development", env="APP_ENV")
    DEBUG: bool = Field(False, env="DEBUG")
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")

    # Logging
    LOGFIRE_TOKEN: Optional[str] = Field(None, env="LOGFIRE_TOKEN")

    # Theme + canvas defaults (used when a request does not name one)
    DEFAULT_THEME_ID: str = Field(
        "modern",
        env="DEFAULT_THEME_ID",
        description="Default theme: modern, corporate, startup"
    )
    DEFAULT_ASPECT_RATIO: str = Field(
        "16:9",
        env="DEFAULT_ASPECT_RATIO",
        description="Default slide aspect ratio: 16:9, 4:3, widescreen"
    )

    # Slide rendering
    # Slides are independent through the Renderer stage and can be built in parallel
    PARALLEL_SLIDE_PROCESSING: bool = Field(
        True,
        env="PARALLEL_SLIDE_PROCESSING",
        description="Render slides concurrently in build_async()"
    )
    MAX_PARALLEL_SLIDES: int = Field(
        8,
        ge=1,
        le=64,
        env="MAX_PARALLEL_SLIDES",
        description="Upper bound on slides rendered at the same time"
    )

    # Speaker notes (natural-language generation collaborator)
    INCLUDE_SPEAKER_NOTES: bool = Field(
        True,
        env="INCLUDE_SPEAKER_NOTES",
        description="Ask the text generator for per-slide speaker notes"
    )
    SPEAKER_NOTES_MAX_CHARS: int = Field(
        600,
        ge=50,
        env="SPEAKER_NOTES_MAX_CHARS",
        description="Generated notes longer than this are truncated"
    )

    # Image search collaborator
    IMAGE_SEARCH_ENABLED: bool = Field(True, env="IMAGE_SEARCH_ENABLED")
    IMAGE_SEARCH_URL: str = Field("http://localhost:8600", env="IMAGE_SEARCH_URL")
    IMAGE_SEARCH_TIMEOUT: int = Field(15, env="IMAGE_SEARCH_TIMEOUT")
    IMAGE_SEARCH_LIMIT: int = Field(
        3,
        ge=1,
        le=20,
        env="IMAGE_SEARCH_LIMIT",
        description="Candidate images requested per slide"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
