"""YouTube Summary MCP Server."""

import json
import logging
import sys
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Annotated

import httpx
from pydantic import Field
from mcp.server.fastmcp import FastMCP

from yt_summary_mcp.bridge import BroadcastChannel, PageWorker, TranscriptBridge
from yt_summary_mcp.cache import SummaryCache
from yt_summary_mcp.config import Settings, Transport
from yt_summary_mcp.errors import ConfigurationError
from yt_summary_mcp.session import SummarySession
from yt_summary_mcp.utils import extract_video_id

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("yt-summary-mcp")

# Module-level state
_session = None
_settings = None
_rate_window = deque()

# Tool annotations for read-only API tools
TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "openWorldHint": True,
}


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    global _session, _settings, _rate_window
    _settings = Settings()
    _rate_window = deque()

    try:
        provider_config = _settings.resolve_provider_config()
        logger.info(f"LLM provider: {provider_config.provider.value}")
    except (ConfigurationError, ValueError) as e:
        provider_config = None
        logger.warning(f"Summaries disabled: {e}")

    channel = BroadcastChannel()
    page_client = httpx.AsyncClient(timeout=30.0, follow_redirects=True)
    llm_client = httpx.AsyncClient(timeout=120.0)
    worker = PageWorker(channel, page_client, caption_fallback=_settings.caption_fallback)
    bridge = TranscriptBridge(channel, timeout=_settings.transcript_timeout_seconds)
    await worker.start()
    await bridge.start()

    _session = SummarySession(
        bridge,
        provider_config,
        cache=SummaryCache(
            max_size=_settings.cache_max_size,
            ttl=_settings.cache_ttl_seconds,
        ),
        client=llm_client,
    )

    logger.info("Server started")
    yield

    await bridge.close()
    await worker.close()
    await page_client.aclose()
    await llm_client.aclose()
    _session = None
    logger.info("Server stopped")


mcp = FastMCP(
    "YouTube Summary",
    instructions="Extract YouTube video transcripts and summarize them with an LLM",
    lifespan=app_lifespan,
)


def _check_rate_limit():
    """Sliding window rate limit."""
    now = time.time()
    limit = (_settings.rate_limit_per_minute if _settings else 30)
    while _rate_window and _rate_window[0] < now - 60:
        _rate_window.popleft()
    if len(_rate_window) >= limit:
        raise ValueError(
            f"Rate limit exceeded ({limit}/min). Try again in a few seconds."
        )
    _rate_window.append(now)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_transcript(
    url: Annotated[str, Field(description="YouTube video URL or video ID (e.g. https://youtube.com/watch?v=dQw4w9WgXcQ or just dQw4w9WgXcQ)")],
) -> str:
    """Get the full plain-text transcript of a YouTube video."""
    _check_rate_limit()

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        text = await _session.transcript(video_id)
    except Exception as e:
        return f"Error fetching transcript for {video_id}: {e}"

    return f"## Transcript: {video_id}\n\n{text}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def summarize_video(
    url: Annotated[str, Field(description="YouTube video URL or video ID to summarize")],
) -> str:
    """Summarize a YouTube video into Overview, Key Points and Takeaways (markdown)."""
    _check_rate_limit()

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    _session.navigate(video_id)
    try:
        summary = await _session.summarize(video_id)
    except Exception as e:
        return f"Error summarizing {video_id}: {e}"

    return f"## Summary: {video_id}\n\n{summary}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def cache_stats() -> str:
    """Show summary cache size and hit rate for this server session."""
    return json.dumps(_session.cache.stats())


# -- MCP Prompts --


@mcp.prompt()
def summarize_for_audience(
    url: Annotated[str, Field(description="YouTube video URL or video ID to summarize")],
    audience: Annotated[str, Field(description="Who the summary is for (e.g. engineers, students, executives)")],
) -> str:
    """Summarize a video and tailor the result to a specific audience."""
    return f"""Please use the summarize_video tool to summarize this YouTube video: {url}

Then rewrite the summary for {audience}:
1. Keep the Overview, Key Points and Takeaways sections
2. Adjust vocabulary and depth to the audience
3. Call out anything especially relevant to {audience}"""


# -- MCP Resources --


@mcp.resource("youtube://help")
def help_resource() -> str:
    """Usage guide for the YouTube Summary MCP server."""
    return """# YouTube Summary MCP Server - Help Guide

## Available Tools

### get_transcript
Extract the plain-text transcript of a YouTube video.
- Example: get_transcript(url="https://youtube.com/watch?v=VIDEO_ID")

### summarize_video
Summarize a video with the configured LLM provider.
- Output sections: Overview, Key Points, Takeaways
- Transcripts over 100,000 characters are truncated before summarizing
- Summaries are cached for the lifetime of the server
- Example: summarize_video(url="VIDEO_ID")

### cache_stats
Summary cache size and hit rate.

## Configuration
- YT_SUMMARY_PROVIDER: anthropic or openai (OpenAI-compatible)
- YT_SUMMARY_API_KEY: provider API key
- YT_SUMMARY_MODEL: optional model override
- YT_SUMMARY_BASE_URL: required for openai, e.g. https://api.openai.com/v1
"""


def main():
    settings = Settings()
    if settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
