"""Tests for server startup."""

import pytest
from unittest.mock import patch

from yt_summary_mcp.server import mcp, app_lifespan
from yt_summary_mcp.config import Transport
from yt_summary_mcp.models import ProviderConfig, ProviderKind


def configure(mock_settings, resolve):
    mock_settings.transcript_timeout_seconds = 1.0
    mock_settings.caption_fallback = False
    mock_settings.cache_max_size = 10
    mock_settings.cache_ttl_seconds = 60
    mock_settings.rate_limit_per_minute = 30
    mock_settings.transport = Transport.STDIO
    mock_settings.resolve_provider_config.side_effect = resolve


class TestServerStartup:
    @pytest.mark.asyncio
    async def test_lifespan(self):
        config = ProviderConfig(provider=ProviderKind.ANTHROPIC, api_key="test")
        with patch("yt_summary_mcp.server.Settings") as MockSettings:
            configure(MockSettings.return_value, lambda: config)

            async with app_lifespan(mcp):
                from yt_summary_mcp import server
                assert server._session is not None
                assert server._session.cache.stats()["max_size"] == 10
                assert server._session._config == config

            assert server._session is None

    @pytest.mark.asyncio
    async def test_lifespan_without_provider(self):
        from yt_summary_mcp.errors import ConfigurationError

        def missing():
            raise ConfigurationError("nothing configured")

        with patch("yt_summary_mcp.server.Settings") as MockSettings:
            configure(MockSettings.return_value, missing)

            async with app_lifespan(mcp):
                from yt_summary_mcp import server
                assert server._session is not None
                assert server._session._config is None

    def test_mcp_has_tools(self):
        # FastMCP should have our tools registered
        assert mcp is not None
        assert mcp.name == "YouTube Summary"
