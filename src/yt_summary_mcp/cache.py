"""In-memory summary cache, scoped to the server process."""

from cachetools import TTLCache


class SummaryCache:
    def __init__(self, max_size: int = 100, ttl: int = 3600):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._hits = 0
        self._misses = 0

    def get(self, video_id: str) -> str | None:
        result = self._cache.get(video_id)
        if result is not None:
            self._hits += 1
        else:
            self._misses += 1
        return result

    def set(self, video_id: str, summary: str) -> None:
        self._cache[video_id] = summary

    def discard(self, video_id: str) -> None:
        self._cache.pop(video_id, None)

    def clear(self) -> None:
        self._cache.clear()

    def __contains__(self, video_id: str) -> bool:
        return video_id in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def stats(self) -> dict:
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / max(self._hits + self._misses, 1) * 100, 1),
        }
