"""Turn raw transcript payloads into plain text."""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any

from yt_summary_mcp.errors import CaptionParseError
from yt_summary_mcp.models import TranscriptMethod
from yt_summary_mcp.utils import dig

SEGMENT_TEXT_PATH = (
    "transcriptSegmentRenderer",
    "snippet",
    "elementsAttributedString",
    "content",
)

_CHAR_REF = re.compile(r"&#(\d+);")
_TAG = re.compile(r"<[^>]*>")


def _segment_text(segment: Any) -> str:
    content = dig(segment, *SEGMENT_TEXT_PATH)
    return content if isinstance(content, str) else ""


def parse_segments(segments: list) -> str:
    """Join the text of structured transcript segments, in document order."""
    text = " ".join(t for t in (_segment_text(s) for s in segments) if t)
    if not text:
        raise CaptionParseError(json.dumps(segments))
    return text


def _decode_char_ref(match: re.Match) -> str:
    code_point = int(match.group(1))
    # Out-of-range and surrogate code points are dropped
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        return ""
    return chr(code_point)


def _clean_caption(raw: str) -> str:
    decoded = _CHAR_REF.sub(_decode_char_ref, raw)
    return _TAG.sub("", decoded).strip()


def parse_caption_xml(xml_text: str) -> str:
    """Flatten a timedtext caption document into plain text.

    Caption bodies often arrive double-escaped, so after XML parsing they may
    still hold ``&#NN;`` references and inline markup such as ``<b>``.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError:
        raise CaptionParseError(xml_text)

    nodes = root.iter("text")
    parts = [_clean_caption("".join(node.itertext())) for node in nodes]
    text = " ".join(p for p in parts if p)
    if not text:
        raise CaptionParseError(xml_text)
    return text


def parse_transcript(method: TranscriptMethod | str, payload: str) -> str:
    """Normalize a payload received over the bridge."""
    if TranscriptMethod(method) == TranscriptMethod.LEGACY_XML:
        return parse_caption_xml(payload)
    return payload
