"""Summary orchestration: cache, transcript bridge and provider in sequence."""

import asyncio
import logging

import httpx

from yt_summary_mcp.bridge import TranscriptBridge, fetch_transcript
from yt_summary_mcp.cache import SummaryCache
from yt_summary_mcp.errors import ConfigurationError
from yt_summary_mcp.models import ProviderConfig
from yt_summary_mcp.summarizer import summarize_transcript

logger = logging.getLogger(__name__)


class SummarySession:
    """Owns the summary cache for one session.

    Concurrent ``summarize`` calls for the same uncached video share a single
    in-flight task, so a burst of requests costs one transcript fetch and one
    provider call. Failures are never cached.
    """

    def __init__(
        self,
        bridge: TranscriptBridge,
        config: ProviderConfig | None,
        cache: SummaryCache | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._bridge = bridge
        self._config = config
        self._cache = cache or SummaryCache()
        self._client = client
        self._inflight: dict[str, asyncio.Task] = {}
        self.current_video_id: str | None = None

    @property
    def cache(self) -> SummaryCache:
        return self._cache

    def navigate(self, video_id: str) -> None:
        """Switch to ``video_id``; the video being left loses its cached summary."""
        previous = self.current_video_id
        if previous is not None and previous != video_id:
            self._cache.discard(previous)
            logger.debug(f"Navigated {previous} -> {video_id}, cache entry dropped")
        self.current_video_id = video_id

    async def transcript(self, video_id: str) -> str:
        return await fetch_transcript(self._bridge, video_id)

    async def summarize(self, video_id: str) -> str:
        cached = self._cache.get(video_id)
        if cached is not None:
            logger.info(f"Summary cache hit for {video_id}")
            return cached

        task = self._inflight.get(video_id)
        if task is None:
            task = asyncio.create_task(self._summarize_uncached(video_id))
            self._inflight[video_id] = task
            task.add_done_callback(lambda t: self._finish(video_id, t))
        return await asyncio.shield(task)

    def _finish(self, video_id: str, task: asyncio.Task) -> None:
        self._inflight.pop(video_id, None)
        # Retrieve the exception so it is reported even when every waiter was cancelled
        if not task.cancelled() and task.exception() is not None:
            logger.warning(f"Summary for {video_id} failed: {task.exception()}")

    async def _summarize_uncached(self, video_id: str) -> str:
        if self._config is None:
            raise ConfigurationError("Please configure an LLM provider API key.")
        transcript = await self.transcript(video_id)
        summary = await summarize_transcript(self._config, transcript, client=self._client)
        self._cache.set(video_id, summary)
        return summary
