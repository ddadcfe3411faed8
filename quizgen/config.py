"""Configuration management for the quiz question generation service."""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Text generation provider: "google", "openai" or "anthropic"
    llm_provider: str = "google"

    # LLM API Keys
    google_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("google_api_key", "gemini_api_key"),
    )
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Models
    google_model: str = "gemini-1.5-pro"
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    # Generation Settings
    generation_temperature: float = 0.7
    generation_top_p: float = 0.95
    generation_max_tokens: int = 8192

    # Retry Settings
    generation_max_retries: int = 2
    retry_base_delay: float = 1.0
    retry_max_delay: float = 60.0
    retry_jitter: float = 0.0  # Fraction of the delay, e.g. 0.25 for +-25%

    def get_api_key(self, provider: Optional[str] = None) -> Optional[str]:
        """Return the API key configured for a provider (default: llm_provider)."""
        provider = (provider or self.llm_provider).lower()
        return {
            "google": self.google_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }.get(provider)


# Global settings instance
settings = Settings()
