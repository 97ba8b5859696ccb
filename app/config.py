"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TRAINEE_KEYWORDS = [
    "trainee",
    "intern",
    "internship",
    "apprentice",
    "student",
    "co-op",
    "coop",
    "summer intern",
    "winter intern",
    "fall intern",
    "spring intern",
    "graduate trainee",
    "management trainee",
    "engineering trainee",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Resume Parser Experience Analytics"
    app_version: str = "1.0.0"
    debug: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Employment history analytics
    gap_threshold_days: int = 30  # Merge adjacency and gap threshold
    overlap_tolerance_days: int = 1  # Overlap when gap < -tolerance
    trainee_max_days: int = 180  # Shorter roles count as trainee-like
    trainee_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TRAINEE_KEYWORDS)
    )
    exclude_trainee_from_gaps: bool = False
    unknown_company_label: str = "Unknown Company"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
