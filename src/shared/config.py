"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB - job catalog
    mongodb_uri: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = Field(default="resume_matcher")
    jobs_collection: str = Field(default="jobs")

    # OpenAI / LLM
    openai_api_key: SecretStr = Field(default=SecretStr(""))
    openai_base_url: Optional[str] = Field(
        default=None, description="Override for OpenAI-compatible endpoints"
    )
    openai_model: str = Field(default="gpt-4o-mini")
    llm_temperature: float = Field(default=0.2)
    llm_max_tokens: int = Field(default=1500)

    # Rate limiting (shared bucket for the AI provider)
    rate_limit_key: str = Field(default="openai-api")
    rate_limit_points: int = Field(default=15, description="Calls allowed per window")
    rate_limit_duration_secs: int = Field(default=60)
    rate_limit_block_secs: int = Field(
        default=60, description="Block time once the window is exhausted"
    )
    quota_retry_ms: int = Field(
        default=60_000,
        description="Wait used when the provider rejects a call without retry-after",
    )

    # Caching
    cache_ttl_hours: float = Field(default=24)

    # Matching
    analysis_batch_size: int = Field(default=5, description="Jobs per AI prompt")
    local_points_per_match: int = Field(default=20)
    local_match_threshold: int = Field(
        default=60, description="Local score that skips AI analysis"
    )
    ai_match_threshold: int = Field(
        default=50, description="Minimum AI relevance to keep a job"
    )
    categories_path: Optional[Path] = Field(
        default=None, description="Optional YAML override for category keywords"
    )

    # Extraction
    resume_text_limit: int = Field(default=10_000)
    role_text_limit: int = Field(default=5_000)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_hours * 3600


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
