"""Configuration via environment variables."""

from enum import Enum

from pydantic_settings import BaseSettings

from yt_summary_mcp.errors import ConfigurationError
from yt_summary_mcp.models import ProviderConfig, ProviderKind
from yt_summary_mcp.providers import AnthropicProvider, OpenAICompatibleProvider


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class Settings(BaseSettings):
    model_config = {"env_prefix": "YT_SUMMARY_"}

    provider: ProviderKind | None = None
    api_key: str = ""
    model: str = ""
    base_url: str = ""

    # Legacy flat layout, read only when api_key is unset
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_model: str = ""

    transcript_timeout_seconds: float = 15.0
    caption_fallback: bool = False
    cache_max_size: int = 100
    cache_ttl_seconds: int = 3600
    rate_limit_per_minute: int = 30
    transport: Transport = Transport.STDIO

    def resolve_provider_config(self) -> ProviderConfig:
        if self.api_key:
            return ProviderConfig(
                provider=self.provider or ProviderKind.ANTHROPIC,
                api_key=self.api_key,
                model=self.model or None,
                base_url=self.base_url or None,
            )

        if self.provider == ProviderKind.OPENAI and self.openai_api_key:
            return ProviderConfig(
                provider=ProviderKind.OPENAI,
                api_key=self.openai_api_key,
                base_url=self.openai_base_url or None,
                model=self.openai_model or OpenAICompatibleProvider.default_model,
            )
        if self.provider != ProviderKind.OPENAI and self.anthropic_api_key:
            return ProviderConfig(
                provider=ProviderKind.ANTHROPIC,
                api_key=self.anthropic_api_key,
                model=AnthropicProvider.default_model,
            )

        raise ConfigurationError(
            "No LLM provider configured. Set YT_SUMMARY_PROVIDER and YT_SUMMARY_API_KEY."
        )


settings = Settings()
