"""Prompt construction and provider dispatch for transcript summaries."""

import logging

import httpx

from yt_summary_mcp.models import ProviderConfig, SummaryRequest
from yt_summary_mcp.providers import build_provider

logger = logging.getLogger(__name__)

MAX_TRANSCRIPT_CHARS = 100_000
TRUNCATION_NOTICE = "\n\n[Transcript truncated due to length]"

SYSTEM_PROMPT = (
    "You are a helpful assistant that summarizes YouTube video transcripts. "
    "Provide a clear, well-structured summary with the following sections:\n"
    "1. **Overview** - A 2-3 sentence summary of the video.\n"
    "2. **Key Points** - Bullet points of the main ideas.\n"
    "3. **Takeaways** - 2-3 actionable or notable takeaways.\n\n"
    "Be concise and informative. Use markdown formatting."
)

USER_TEMPLATE = "Please summarize the following YouTube video transcript:\n\n{transcript}"


def truncate_transcript(text: str) -> str:
    if len(text) <= MAX_TRANSCRIPT_CHARS:
        return text
    logger.info(f"Transcript truncated from {len(text)} to {MAX_TRANSCRIPT_CHARS} chars")
    return text[:MAX_TRANSCRIPT_CHARS] + TRUNCATION_NOTICE


def build_user_message(text: str) -> str:
    return USER_TEMPLATE.format(transcript=text)


async def summarize(
    request: SummaryRequest, client: httpx.AsyncClient | None = None
) -> str:
    """Summarize ``request.transcript_text`` with the configured provider.

    Returns the provider's markdown. Raises ``ProviderError`` on any non-2xx
    response; nothing is retried.
    """
    user_message = build_user_message(truncate_transcript(request.transcript_text))
    provider = build_provider(request.config, client=client)
    try:
        return await provider.complete(SYSTEM_PROMPT, user_message)
    finally:
        await provider.close()


async def summarize_transcript(
    config: ProviderConfig, transcript: str, client: httpx.AsyncClient | None = None
) -> str:
    return await summarize(
        SummaryRequest(config=config, transcript_text=transcript), client=client
    )
