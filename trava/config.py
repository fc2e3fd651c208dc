"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # AI completion
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 1200

    # Timeouts (milliseconds)
    ai_timeout_ms: int = 15000

    # Prompt bounds
    min_activities: int = 8
    max_activities: int = 12

    # Synthetic fallback
    synthetic_min_activities: int = 10
    synthetic_shuffle: bool = True
    synthetic_seed: int | None = None

    # Geocoding enrichment
    geocoding_enabled: bool = False
    geocoding_base_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    geocoding_timeout_s: float = 4.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
