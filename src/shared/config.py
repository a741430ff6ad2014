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

    # Reasoning service (any OpenAI-compatible endpoint)
    reasoning_api_key: SecretStr = Field(default=SecretStr(""))
    reasoning_base_url: str = Field(default="https://openrouter.ai/api/v1")
    reasoning_models: str = Field(
        default=(
            "tngtech/deepseek-r1t2-chimera:free,"
            "meta-llama/llama-3.3-70b-instruct:free,"
            "nousresearch/hermes-3-llama-3.1-405b:free,"
            "google/gemini-2.0-flash-exp:free"
        ),
        description="Comma-separated, ordered list of model candidates",
    )
    reasoning_models_path: Optional[Path] = Field(
        default=None, description="Optional YAML file listing model candidates"
    )
    reasoning_timeout_seconds: float = Field(
        default=300.0, description="Per-call ceiling; reasoning models are slow"
    )
    reasoning_temperature: float = Field(default=0.2)
    reasoning_retries: int = Field(
        default=0, description="Extra attempts per candidate before moving on"
    )
    reasoning_backoff_base: float = Field(default=1.0)
    reasoning_backoff_max: float = Field(default=30.0)

    # Sent as HTTP-Referer / X-Title (OpenRouter attribution)
    site_url: str = Field(default="http://localhost:3000")
    site_name: str = Field(default="SkillMatch")

    @property
    def reasoning_models_list(self) -> list[str]:
        """Parse comma-separated model names into a list."""
        return [m.strip() for m in self.reasoning_models.split(",") if m.strip()]

    @property
    def has_reasoning_credential(self) -> bool:
        return bool(self.reasoning_api_key.get_secret_value().strip())

    # MongoDB
    mongodb_uri: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = Field(default="skillmatch")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
