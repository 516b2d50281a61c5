"""LLM providers."""

import httpx

from yt_summary_mcp.models import ProviderConfig, ProviderKind
from .base import LLMProvider
from .anthropic import AnthropicProvider
from .openai_compat import OpenAICompatibleProvider


def _anthropic(config: ProviderConfig, client):
    return AnthropicProvider(config.api_key, model=config.model, client=client)


def _openai(config: ProviderConfig, client):
    return OpenAICompatibleProvider(
        config.api_key, config.base_url, model=config.model, client=client
    )


PROVIDERS = {
    ProviderKind.ANTHROPIC: _anthropic,
    ProviderKind.OPENAI: _openai,
}


def build_provider(
    config: ProviderConfig, client: httpx.AsyncClient | None = None
) -> LLMProvider:
    """Instantiate the provider named by ``config.provider``."""
    return PROVIDERS[config.provider](config, client)


__all__ = [
    "LLMProvider",
    "AnthropicProvider",
    "OpenAICompatibleProvider",
    "PROVIDERS",
    "build_provider",
]
