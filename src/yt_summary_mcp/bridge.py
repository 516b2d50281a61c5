"""Correlation-ID request/response bus between the requester and the page context.

The page side (``PageWorker``) is the only code allowed to touch host page
state and the host's private API. The requester side (``TranscriptBridge``)
posts a request envelope on a shared ``BroadcastChannel`` and waits for the
single response carrying the same correlation ID. The channel also carries
unrelated traffic, which both sides ignore.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from yt_summary_mcp.errors import (
    RemoteExtractionError,
    TranscriptEmptyError,
    TransportTimeoutError,
)
from yt_summary_mcp.extractor import TranscriptExtractor
from yt_summary_mcp.models import (
    BridgeMessage,
    MessageType,
    TranscriptMethod,
    TranscriptRequest,
    TranscriptResponse,
    TranscriptResult,
)
from yt_summary_mcp.page import HostPage
from yt_summary_mcp.parser import parse_transcript
from yt_summary_mcp.utils import make_correlation_id

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


class BroadcastChannel:
    """Every posted message is delivered to every subscriber, poster included."""

    def __init__(self):
        self._subscribers: list[asyncio.Queue] = []

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def post(self, message: Any) -> None:
        for queue in list(self._subscribers):
            queue.put_nowait(message)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


def _parse_envelope(raw: Any) -> BridgeMessage | None:
    if not isinstance(raw, dict):
        return None
    try:
        return BridgeMessage.model_validate(raw)
    except ValidationError:
        return None


class _Endpoint(ABC):
    """Channel subscription drained by a single background task."""

    def __init__(self, channel: BroadcastChannel):
        self._channel = channel
        self._queue: asyncio.Queue | None = None
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._queue = self._channel.subscribe()
        self._task = asyncio.create_task(self._run())

    async def close(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._channel.unsubscribe(self._queue)
        self._task = None
        self._queue = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _run(self) -> None:
        while True:
            raw = await self._queue.get()
            message = _parse_envelope(raw)
            if message is not None:
                self._dispatch(message)

    @abstractmethod
    def _dispatch(self, message: BridgeMessage) -> None:
        """Handle one well-formed envelope from the channel."""
        ...


class TranscriptBridge(_Endpoint):
    """Requester side: one pending future per in-flight correlation ID."""

    def __init__(self, channel: BroadcastChannel, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(channel)
        self._timeout = timeout
        self._pending: dict[str, asyncio.Future] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _dispatch(self, message: BridgeMessage) -> None:
        if message.type != MessageType.RESPONSE:
            return
        future = self._pending.pop(message.correlation_id, None)
        if future is None or future.done():
            return

        try:
            response = TranscriptResponse(
                correlation_id=message.correlation_id,
                method=message.method,
                text=message.text,
                error=message.error,
            )
        except ValidationError:
            future.set_exception(RemoteExtractionError("Malformed transcript response."))
            return

        if response.ok:
            future.set_result(response)
        else:
            future.set_exception(RemoteExtractionError(response.error))

    async def request(self, video_id: str) -> TranscriptResult:
        if self._task is None:
            raise RuntimeError("TranscriptBridge is not started")

        request = TranscriptRequest(video_id=video_id, correlation_id=make_correlation_id())
        future = asyncio.get_running_loop().create_future()
        self._pending[request.correlation_id] = future
        try:
            self._channel.post(request.to_message().to_wire())
            logger.debug(f"Posted transcript request {request.correlation_id} for {video_id}")
            response = await asyncio.wait_for(future, self._timeout)
        except asyncio.TimeoutError:
            raise TransportTimeoutError(
                f"Transcript request timed out after {self._timeout:g} seconds."
            )
        finally:
            self._pending.pop(request.correlation_id, None)

        return TranscriptResult(
            video_id=video_id,
            method=response.method,
            text=response.text or "",
        )


class PageWorker(_Endpoint):
    """Page side: answers every transcript request with exactly one response."""

    def __init__(
        self,
        channel: BroadcastChannel,
        client: httpx.AsyncClient,
        caption_fallback: bool = False,
    ):
        super().__init__(channel)
        self._client = client
        self._extractor = TranscriptExtractor(client, caption_fallback=caption_fallback)
        self._jobs: set[asyncio.Task] = set()

    async def close(self) -> None:
        jobs = list(self._jobs)
        for job in jobs:
            job.cancel()
        await asyncio.gather(*jobs, return_exceptions=True)
        await super().close()

    def _dispatch(self, message: BridgeMessage) -> None:
        if message.type != MessageType.REQUEST or not message.video_id:
            return
        job = asyncio.create_task(self._answer(message.correlation_id, message.video_id))
        self._jobs.add(job)
        job.add_done_callback(self._jobs.discard)

    async def load_page(self, video_id: str) -> HostPage:
        return await HostPage.load(self._client, video_id)

    async def _answer(self, correlation_id: str, video_id: str) -> None:
        try:
            page = await self.load_page(video_id)
            method, text = await self._extractor.extract(page)
            response = TranscriptResponse(
                correlation_id=correlation_id, method=method, text=text
            )
        except Exception as e:
            logger.warning(f"Transcript extraction failed for {video_id}: {e}")
            response = TranscriptResponse(
                correlation_id=correlation_id, error=str(e) or type(e).__name__
            )
        self._channel.post(response.to_message().to_wire())


async def fetch_transcript(bridge: TranscriptBridge, video_id: str) -> str:
    """Request a transcript over the bridge and return it as plain text."""
    result = await bridge.request(video_id)
    text = parse_transcript(result.method, result.text)
    if not text.strip():
        raise TranscriptEmptyError("Transcript data was empty.")
    if result.method == TranscriptMethod.LEGACY_XML:
        logger.info(f"Transcript for {video_id} parsed from caption XML")
    return text
