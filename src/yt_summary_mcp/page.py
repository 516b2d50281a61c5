"""Host watch page state: the JSON objects YouTube embeds in its HTML."""

import json
import logging
import re
from dataclasses import dataclass, field

import httpx

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch"

_INITIAL_DATA = re.compile(r"ytInitialData\s*=\s*({.*?});\s*</script>", re.DOTALL)
_PLAYER_RESPONSE = re.compile(
    r"ytInitialPlayerResponse\s*=\s*({.*?});\s*(?:var\s|</script>)", re.DOTALL
)


def _extract_json(pattern: re.Pattern, html: str, name: str) -> dict:
    match = pattern.search(html)
    if not match:
        logger.debug(f"{name} not found in page")
        return {}
    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        logger.warning(f"{name} is not valid JSON: {e}")
        return {}
    return data if isinstance(data, dict) else {}


@dataclass
class HostPage:
    video_id: str
    initial_data: dict = field(default_factory=dict)
    player_response: dict = field(default_factory=dict)

    @classmethod
    def from_html(cls, video_id: str, html: str) -> "HostPage":
        return cls(
            video_id=video_id,
            initial_data=_extract_json(_INITIAL_DATA, html, "ytInitialData"),
            player_response=_extract_json(_PLAYER_RESPONSE, html, "ytInitialPlayerResponse"),
        )

    @classmethod
    async def load(cls, client: httpx.AsyncClient, video_id: str) -> "HostPage":
        resp = await client.get(
            WATCH_URL,
            params={"v": video_id, "hl": "en"},
            headers={"Accept-Language": "en-US,en;q=0.9"},
        )
        resp.raise_for_status()
        return cls.from_html(video_id, resp.text)
