"""Transcript extraction through YouTube's private InnerTube API.

Runs on the page side of the bridge: it sees the host page state and talks to
the host's own endpoints. The response schema is owned by YouTube and has
changed shape before without any HTTP-level signal, so every path lookup ends
in an explicit failure instead of an empty transcript.
"""

import logging
from urllib.parse import unquote

import httpx

from yt_summary_mcp.errors import (
    HostAPIError,
    NoSegmentsError,
    TranscriptUnavailableError,
)
from yt_summary_mcp.models import TranscriptMethod
from yt_summary_mcp.page import HostPage
from yt_summary_mcp.parser import parse_segments
from yt_summary_mcp.utils import dig

logger = logging.getLogger(__name__)

TRANSCRIPT_URL = "https://www.youtube.com/youtubei/v1/get_transcript?prettyPrint=false"

CLIENT_CONTEXT = {
    "client": {
        "clientName": "ANDROID",
        "clientVersion": "19.09.37",
        "hl": "en",
        "gl": "US",
    }
}

TOKEN_PATH = (
    "engagementPanelSectionListRenderer",
    "content",
    "continuationItemRenderer",
    "continuationEndpoint",
    "getTranscriptEndpoint",
    "params",
)

# Older responses used actions[0].updateEngagementPanelAction; this is the
# elementsCommand shape.
SEGMENTS_PATH = (
    "actions",
    0,
    "elementsCommand",
    "transformEntityCommand",
    "arguments",
    "transformTranscriptSegmentListArguments",
    "overwrite",
    "initialSegments",
)

CAPTION_TRACKS_PATH = ("captions", "playerCaptionsTracklistRenderer", "captionTracks")


def locate_token(host_state: dict) -> str | None:
    """Return the transcript params token of the first panel that has one."""
    panels = dig(host_state, "engagementPanels")
    if not isinstance(panels, list):
        return None
    for panel in panels:
        token = dig(panel, *TOKEN_PATH)
        if isinstance(token, str) and token:
            return token
    return None


def select_caption_track(player_response: dict) -> dict | None:
    """Prefer a manual English track, then any English, then the first."""
    tracks = dig(player_response, *CAPTION_TRACKS_PATH)
    if not isinstance(tracks, list):
        return None
    tracks = [t for t in tracks if isinstance(t, dict) and t.get("baseUrl")]
    if not tracks:
        return None

    def is_english(track):
        return str(track.get("languageCode", "")).lower().startswith("en")

    for track in tracks:
        if is_english(track) and track.get("kind") != "asr":
            return track
    for track in tracks:
        if is_english(track):
            return track
    return tracks[0]


class TranscriptExtractor:
    def __init__(self, client: httpx.AsyncClient, caption_fallback: bool = False):
        self._client = client
        self._caption_fallback = caption_fallback

    async def fetch_segments(self, token: str) -> list:
        """Call get_transcript and return the raw segment list."""
        resp = await self._client.post(
            TRANSCRIPT_URL,
            json={"context": CLIENT_CONTEXT, "params": unquote(token)},
        )
        if not resp.is_success:
            raise HostAPIError(resp.status_code)

        segments = dig(resp.json(), *SEGMENTS_PATH)
        if not isinstance(segments, list) or not segments:
            raise NoSegmentsError("No transcript segments returned.")
        logger.debug(f"get_transcript returned {len(segments)} segments")
        return segments

    async def fetch_caption_track(self, track: dict) -> str:
        resp = await self._client.get(track["baseUrl"])
        if not resp.is_success:
            raise HostAPIError(resp.status_code)
        return resp.text

    async def extract(self, page: HostPage) -> tuple[TranscriptMethod, str]:
        """Return the transcript payload for ``page`` and the method used."""
        token = locate_token(page.initial_data)
        if token:
            segments = await self.fetch_segments(token)
            return TranscriptMethod.STRUCTURED_JSON, parse_segments(segments)

        if self._caption_fallback:
            track = select_caption_track(page.player_response)
            if track:
                logger.info(
                    f"No transcript panel for {page.video_id}, "
                    f"using caption track {track.get('languageCode', '?')}"
                )
                xml_text = await self.fetch_caption_track(track)
                return TranscriptMethod.LEGACY_XML, xml_text

        raise TranscriptUnavailableError("Transcript not available for this video.")
