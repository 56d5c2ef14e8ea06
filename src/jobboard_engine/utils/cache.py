"""Search result cache used to skip recomputing expensive aggregate queries."""

import hashlib
import json
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from jobboard_engine.config import Settings, settings
from jobboard_engine.utils.logging import get_logger

logger = get_logger(__name__)


def generate_cache_key(params: Mapping[str, Any]) -> str:
    """Stable key for a query: sha1 over the parameters sorted by name."""
    ordered = {key: params[key] for key in sorted(params)}
    digest = hashlib.sha1(
        json.dumps(ordered, separators=(",", ":"), default=str).encode("utf-8")
    ).hexdigest()
    return f"cache:{digest}"


class CacheManager:
    """Simple in-memory cache with TTL support."""

    def __init__(self, max_size: int = 1000, default_ttl: int = 300, clock: Callable[[], float] = time.time):
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.clock = clock
        self.cache: Dict[str, Dict[str, Any]] = {}
        self.access_times: Dict[str, float] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        with self._lock:
            entry = self.cache.get(key)
            if entry is None:
                return None

            now = self.clock()
            if now > entry["expires_at"]:
                self._delete(key)
                return None

            self.access_times[key] = now
            return entry["value"]

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value in cache."""
        with self._lock:
            if key not in self.cache and len(self.cache) >= self.max_size:
                self._evict_oldest()

            now = self.clock()
            ttl = ttl or self.default_ttl
            self.cache[key] = {
                "value": value,
                "expires_at": now + ttl,
                "created_at": now
            }
            self.access_times[key] = now

    def delete(self, key: str) -> None:
        """Delete key from cache."""
        with self._lock:
            self._delete(key)

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self.cache.clear()
            self.access_times.clear()

    def _delete(self, key: str) -> None:
        self.cache.pop(key, None)
        self.access_times.pop(key, None)

    def _evict_oldest(self) -> None:
        """Evict oldest accessed entry."""
        if not self.access_times:
            return

        oldest_key = min(self.access_times.keys(), key=lambda k: self.access_times[k])
        self._delete(oldest_key)


@dataclass(frozen=True)
class CachePolicy:
    """Enable flag, TTL and minimum result size for one entity type."""
    enabled: bool
    ttl: int
    minimum_records: int


class SearchCache:
    """
    Per-entity-type caching policy in front of a CacheManager.

    A lookup only hits the store when caching is enabled globally and for the
    entity type. Results smaller than the type's minimum record count are never
    stored.
    """

    def __init__(self, config: Optional[Settings] = None, store: Optional[CacheManager] = None):
        self.logger = logger.bind(component="search_cache")
        self.config = config or settings
        self.store = store or CacheManager(
            max_size=self.config.cache_max_size,
            default_ttl=self.config.cache_ttl
        )
        self.policies = self._load_policies()

    def _load_policies(self) -> Dict[str, CachePolicy]:
        cfg = self.config
        return {
            "candidate": CachePolicy(
                cfg.cache_candidates_enabled, cfg.cache_candidates_ttl, cfg.cache_candidates_min_records
            ),
            "employer": CachePolicy(
                cfg.cache_employers_enabled, cfg.cache_employers_ttl, cfg.cache_employers_min_records
            ),
            "job": CachePolicy(cfg.cache_jobs_enabled, cfg.cache_jobs_ttl, cfg.cache_jobs_min_records),
        }

    def policy(self, entity_type: Optional[str] = None) -> CachePolicy:
        """Policy for an entity type; the global defaults when no type is given."""
        if entity_type is None:
            return CachePolicy(self.config.cache_enabled, self.config.cache_ttl, self.config.cache_min_records)
        return self.policies.get(
            entity_type,
            CachePolicy(self.config.cache_enabled, self.config.cache_ttl, self.config.cache_min_records),
        )

    def is_enabled(self, entity_type: Optional[str] = None) -> bool:
        if not self.config.cache_enabled:
            return False
        return self.policy(entity_type).enabled

    def get(self, key: str, entity_type: Optional[str] = None) -> Optional[Any]:
        if not self.is_enabled(entity_type):
            return None
        value = self.store.get(key)
        self.logger.debug("Cache lookup", key=key, entity_type=entity_type, hit=value is not None)
        return value

    def set(self, key: str, value: Any, record_count: int, entity_type: Optional[str] = None) -> bool:
        """Store ``value`` if caching applies; returns whether it was stored."""
        if not self.is_enabled(entity_type):
            return False
        policy = self.policy(entity_type)
        if record_count < policy.minimum_records:
            self.logger.debug(
                "Result set below caching threshold",
                key=key,
                record_count=record_count,
                minimum_records=policy.minimum_records
            )
            return False
        self.store.set(key, value, ttl=policy.ttl)
        return True
