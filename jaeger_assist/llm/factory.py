"""Build a completion provider from settings."""

from __future__ import annotations

import logging

from jaeger_assist.config import Settings
from jaeger_assist.errors import ConfigurationError
from jaeger_assist.llm.anthropic_provider import AnthropicCompletionProvider
from jaeger_assist.llm.mock import MockCompletionProvider
from jaeger_assist.llm.provider import CompletionProvider

logger = logging.getLogger(__name__)

PROVIDERS = ("mock", "anthropic")


def create_provider(settings: Settings) -> CompletionProvider:
    """Instantiate the provider named by ``settings.llm.provider``.

    Raises:
        ConfigurationError: If the provider name is unknown.
    """
    name = settings.llm.provider.lower()
    if name == "mock":
        provider: CompletionProvider = MockCompletionProvider()
    elif name == "anthropic":
        provider = AnthropicCompletionProvider(config=settings.llm, api_key=settings.anthropic_api_key)
    else:
        raise ConfigurationError(name, f"Unknown provider, expected one of: {', '.join(PROVIDERS)}")

    logger.info("Using %s completion provider", provider.get_provider())
    return provider
