"""Text generation provider integrations."""

from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from .anthropic_provider import AnthropicProvider
from .base import BaseLLMProvider, LLMProviderError
from .google_provider import GoogleProvider
from .openai_provider import OpenAIProvider

if TYPE_CHECKING:
    from ..config import Settings

__all__ = [
    "AnthropicProvider",
    "BaseLLMProvider",
    "GoogleProvider",
    "LLMProviderError",
    "OpenAIProvider",
    "create_provider",
]


def create_provider(settings: "Settings") -> BaseLLMProvider:
    """Instantiate the provider selected by ``settings.llm_provider``.

    Raises:
        ConfigurationError: If the provider is unknown or has no API key
    """
    provider_name = settings.llm_provider.lower()
    api_key = settings.get_api_key(provider_name)

    if provider_name not in ("google", "openai", "anthropic"):
        raise ConfigurationError(f"Unknown LLM provider: '{settings.llm_provider}'")
    if not api_key:
        raise ConfigurationError(f"No API key configured for provider '{provider_name}'")

    if provider_name == "google":
        return GoogleProvider(
            api_key=api_key,
            model=settings.google_model,
            top_p=settings.generation_top_p,
        )
    if provider_name == "openai":
        return OpenAIProvider(api_key=api_key, model=settings.openai_model)
    return AnthropicProvider(api_key=api_key, model=settings.anthropic_model)
