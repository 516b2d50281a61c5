"""Utility functions."""

import random
import re
import time
from typing import Any


def extract_video_id(url_or_id: str) -> str | None:
    """Extract YouTube video ID from URL or return as-is if valid ID."""
    patterns = [
        r"(?:v=|/v/|youtu\.be/)([a-zA-Z0-9_-]{11})",
        r"(?:embed/)([a-zA-Z0-9_-]{11})",
        r"(?:shorts/)([a-zA-Z0-9_-]{11})",
    ]
    for pattern in patterns:
        match = re.search(pattern, url_or_id)
        if match:
            return match.group(1)
    if re.match(r"^[a-zA-Z0-9_-]{11}$", url_or_id):
        return url_or_id
    return None


class _Missing:
    """Marker for a path that does not exist in a host-owned JSON tree."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def dig(data: Any, *path: str | int) -> Any:
    """Walk ``path`` through nested dicts and lists.

    Returns ``MISSING`` as soon as a key is absent, an index is out of range,
    a value is ``None``, or a step lands on the wrong container type.
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return MISSING
            current = current[step]
        else:
            if not isinstance(current, dict) or step not in current:
                return MISSING
            current = current[step]
        if current is None:
            return MISSING
    return current


def make_correlation_id() -> str:
    """Millisecond timestamp plus a random suffix."""
    return f"yts-{int(time.time() * 1000)}-{random.getrandbits(64):016x}"
