"""Tests for settings and provider config resolution."""

import pytest

from yt_summary_mcp.config import Settings, Transport
from yt_summary_mcp.errors import ConfigurationError
from yt_summary_mcp.models import ProviderKind


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "PROVIDER", "API_KEY", "MODEL", "BASE_URL",
        "ANTHROPIC_API_KEY", "OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_MODEL",
        "TRANSPORT", "TRANSCRIPT_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(f"YT_SUMMARY_{name}", raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.transcript_timeout_seconds == 15.0
        assert settings.caption_fallback is False
        assert settings.transport == Transport.STDIO

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("YT_SUMMARY_PROVIDER", "openai")
        monkeypatch.setenv("YT_SUMMARY_API_KEY", "sk-test")
        monkeypatch.setenv("YT_SUMMARY_BASE_URL", "https://api.openai.com/v1")
        config = Settings().resolve_provider_config()
        assert config.provider == ProviderKind.OPENAI
        assert config.api_key == "sk-test"
        assert config.model is None


class TestResolveProviderConfig:
    def test_new_layout_defaults_to_anthropic(self):
        config = Settings(api_key="sk-ant").resolve_provider_config()
        assert config.provider == ProviderKind.ANTHROPIC

    def test_legacy_anthropic(self):
        config = Settings(anthropic_api_key="sk-ant-old").resolve_provider_config()
        assert config.provider == ProviderKind.ANTHROPIC
        assert config.api_key == "sk-ant-old"
        assert config.model == "claude-sonnet-4-20250514"

    def test_legacy_openai(self):
        settings = Settings(
            provider="openai",
            openai_api_key="sk-old",
            openai_base_url="https://api.moonshot.ai/v1",
        )
        config = settings.resolve_provider_config()
        assert config.provider == ProviderKind.OPENAI
        assert config.base_url == "https://api.moonshot.ai/v1"
        assert config.model == "kimi-k2-0905-preview"

    def test_new_key_wins_over_legacy(self):
        settings = Settings(api_key="sk-new", anthropic_api_key="sk-old")
        assert settings.resolve_provider_config().api_key == "sk-new"

    def test_nothing_configured(self):
        with pytest.raises(ConfigurationError):
            Settings().resolve_provider_config()

    def test_openai_without_base_url(self):
        with pytest.raises(ValueError):
            Settings(provider="openai", api_key="sk").resolve_provider_config()
