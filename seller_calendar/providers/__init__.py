"""AI provider adapters.

Three interchangeable backends behind ``complete(prompt, json_mode)``:

- gemini: builtin provider, keyed by the server's API_KEY
- openai: OpenAI chat completions, keyed from settings
- openrouter: OpenRouter chat completions, keyed from settings
"""

from typing import Optional

from seller_calendar.config import CalendarConfig
from seller_calendar.exceptions import (
    ProviderNotConfiguredError,
    UnknownProviderError,
)
from seller_calendar.models.settings import AIProviderName, Settings
from seller_calendar.providers.base import AIProvider, parse_json_text
from seller_calendar.providers.chat_completions import (
    ChatCompletionsProvider,
    openai_provider,
    openrouter_provider,
)
from seller_calendar.providers.gemini import GeminiProvider


def _credential_for(
    provider: AIProviderName, settings: Settings, config: CalendarConfig
) -> str:
    if provider is AIProviderName.GEMINI:
        return config.gemini_api_key or ""
    if provider is AIProviderName.OPENAI:
        return settings.openai_api_key
    return settings.openrouter_api_key


def has_credentials(settings: Settings, config: CalendarConfig) -> bool:
    """True if the selected provider has the credentials it needs."""
    return bool(_credential_for(settings.ai_provider, settings, config))


def get_provider(
    settings: Settings,
    config: CalendarConfig,
    provider_name: Optional[str] = None,
    api_key: Optional[str] = None,
) -> AIProvider:
    """
    Build the provider selected in settings.

    Args:
        settings: Current settings (provider selection, keys, models)
        config: Server config (builtin key, timeout)
        provider_name: Override the selected provider (connection tests)
        api_key: Override the stored key (connection tests)

    Raises:
        UnknownProviderError: If provider_name is not recognised
        ProviderNotConfiguredError: If the provider has no credentials
    """
    try:
        provider = AIProviderName(provider_name or settings.ai_provider)
    except ValueError:
        raise UnknownProviderError(f"Unknown AI provider: {provider_name}")

    key = api_key or _credential_for(provider, settings, config)
    if not key:
        raise ProviderNotConfiguredError(
            f"AI provider '{provider.value}' is not configured"
        )

    timeout = config.request_timeout
    if provider is AIProviderName.GEMINI:
        return GeminiProvider(key, model=config.gemini_model, timeout=timeout)
    if provider is AIProviderName.OPENAI:
        return openai_provider(key, settings.openai_model, timeout=timeout)
    return openrouter_provider(key, settings.openrouter_model, timeout=timeout)


__all__ = [
    "AIProvider",
    "ChatCompletionsProvider",
    "GeminiProvider",
    "get_provider",
    "has_credentials",
    "openai_provider",
    "openrouter_provider",
    "parse_json_text",
]
