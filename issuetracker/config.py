"""
Application configuration using Pydantic settings.

Usage:
    from issuetracker.config import get_settings
    settings = get_settings()
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = "Issue Tracker"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)
    log_json: bool = Field(default=False, validation_alias="LOG_JSON")

    # Database
    database_url: str = Field(default="sqlite:///issue_tracker.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    # No migrations ship with the project; the schema is created from the models
    auto_create_tables: bool = Field(default=True, validation_alias="AUTO_CREATE_TABLES")

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:5173", validation_alias="CORS_ALLOWED_ORIGINS")

    # Candidate assignee recommendation
    recommendation_title_weight: int = Field(default=10, validation_alias="RECOMMENDATION_TITLE_WEIGHT")
    recommendation_description_weight: int = Field(
        default=1, validation_alias="RECOMMENDATION_DESCRIPTION_WEIGHT"
    )

    # Statistics
    statistics_top_commented_limit: int = Field(default=5, validation_alias="STATISTICS_TOP_COMMENTED_LIMIT")

    @field_validator(
        "recommendation_title_weight",
        "recommendation_description_weight",
        "statistics_top_commented_limit",
    )
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Weights and limits must not be negative."""
        if v < 0:
            raise ValueError(f"must be >= 0 (got {v})")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
