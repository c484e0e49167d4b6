"""In-process cache for geocoding and irradiance lookups.

Entries expire after a TTL and, when the cache is full, the least used entry
(lowest access count, then oldest access) is evicted. There is no background
cleanup thread; callers that keep a cache alive for long should call
``cleanup_expired()`` periodically.
"""
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STREET_PREFIXES = re.compile(r"\b(rua|av|avenida)\b")


@dataclass
class CacheEntry(Generic[T]):
    result: T
    timestamp: float
    access_count: int
    last_accessed: float


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    hit_rate: float  # percent


class GeocodingCache(Generic[T]):
    def __init__(
        self,
        ttl_seconds: float = 24 * 60 * 60,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.ttl = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not self._is_expired(entry)

    def get(self, key: str) -> Optional[T]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if self._is_expired(entry):
            del self._entries[key]
            self._misses += 1
            return None
        entry.access_count += 1
        entry.last_accessed = self._clock()
        self._hits += 1
        return entry.result

    def set(self, key: str, value: T) -> None:
        if key not in self._entries and len(self._entries) >= self.max_size:
            self._evict_least_used()
        now = self._clock()
        self._entries[key] = CacheEntry(result=value, timestamp=now, access_count=1, last_accessed=now)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        total = self._hits + self._misses
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            size=len(self._entries),
            hit_rate=(self._hits / total) * 100 if total > 0 else 0.0,
        )

    def cleanup_expired(self) -> int:
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info("Geocoding cache cleanup: %d entries removed", len(expired))
        return len(expired)

    @staticmethod
    def address_key(address: str, region: Optional[str] = None) -> str:
        normalized = address.lower().strip()
        normalized = re.sub(r"\s+", " ", normalized)
        normalized = re.sub(r"[.,;]", "", normalized)
        normalized = _STREET_PREFIXES.sub("", normalized).strip()
        return f"{normalized}|{region.lower()}" if region else normalized

    @staticmethod
    def coordinate_key(lat: float, lng: float, precision: int = 4) -> str:
        # float() drops trailing zeros so -23.5500 and -23.55 share a key
        return f"{float(round(lat, precision))},{float(round(lng, precision))}"

    def _is_expired(self, entry: CacheEntry[Any]) -> bool:
        return self._clock() - entry.timestamp > self.ttl

    def _evict_least_used(self) -> None:
        if not self._entries:
            return
        key = min(
            self._entries,
            key=lambda k: (self._entries[k].access_count, self._entries[k].last_accessed),
        )
        del self._entries[key]
        logger.info("Geocoding cache full (%d): evicted %r", self.max_size, key)
