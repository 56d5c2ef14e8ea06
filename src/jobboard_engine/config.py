"""Configuration management for the job board engine."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    debug: bool = Field(False, description="Enable debug mode")
    log_level: str = Field("INFO", description="Logging level")

    # Ranking Configuration
    ranking_default_limit: int = Field(10, description="Default size of a top-matches list")

    # Lifecycle Configuration
    stale_post_days: int = Field(90, description="Age after which active posts are deactivated")

    # Search Cache Configuration
    cache_enabled: bool = Field(False, description="Enable the search result cache")
    cache_ttl: int = Field(900, description="Default cache TTL in seconds")
    cache_min_records: int = Field(1000, description="Minimum result size before caching kicks in")
    cache_max_size: int = Field(1000, description="Maximum number of cached entries")

    cache_candidates_enabled: bool = Field(False, description="Cache candidate searches")
    cache_candidates_ttl: int = Field(900, description="Candidate cache TTL in seconds")
    cache_candidates_min_records: int = Field(1000, description="Candidate minimum record count")

    cache_employers_enabled: bool = Field(False, description="Cache employer searches")
    cache_employers_ttl: int = Field(900, description="Employer cache TTL in seconds")
    cache_employers_min_records: int = Field(500, description="Employer minimum record count")

    cache_jobs_enabled: bool = Field(False, description="Cache job searches")
    cache_jobs_ttl: int = Field(900, description="Job cache TTL in seconds")
    cache_jobs_min_records: int = Field(1000, description="Job minimum record count")


# Global settings instance
settings = Settings()
