"""
In-memory response cache for recommendation and advice results.

Scope is the process (one UI session in practice): entries never expire and
are never evicted, and a restart clears everything. Keys are typed tuples
compared by value, with no normalisation, so "Movies" and "movies " are
distinct requests.

The cache is only touched from the event loop, so no locking is done. Two
concurrent misses for the same key both reach Gemini and the later write
wins; results for a key are interchangeable, so that is harmless.

Chat replies are never cached.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)


class RecommendationCacheKey(NamedTuple):
    category: str
    query: str = ""
    genre: str = ""
    year: str = ""

    @classmethod
    def from_filters(
        cls,
        category: str,
        query: Optional[str] = None,
        genre: Optional[str] = None,
        year: Optional[str] = None,
    ) -> "RecommendationCacheKey":
        """Build a key; missing filters become empty strings."""
        return cls(category, query or "", genre or "", year or "")


class AdviceCacheKey(NamedTuple):
    topic: str


CacheKey = Union[RecommendationCacheKey, AdviceCacheKey]


class ResponseCache:
    """Unbounded key -> result store. Hits return the stored object itself."""

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, Any] = {}

    def get(self, key: CacheKey, default: Any = None) -> Any:
        if key in self._entries:
            logger.debug(f"Cache hit for {type(key).__name__}")
            return self._entries[key]
        return default

    def set(self, key: CacheKey, value: Any) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Process-wide cache used by the HTTP routes
_response_cache = ResponseCache()


def get_response_cache() -> ResponseCache:
    """FastAPI dependency returning the process-wide cache."""
    return _response_cache
