"""
In-memory result cache for the analytics service.
Entries expire after a per-entry TTL; keys are derived from the operation
name and its parameters.
"""
from typing import Optional, Any, Callable, Dict, List, Mapping
from datetime import datetime, timezone
import json
import logging
import re
import time

logger = logging.getLogger(__name__)


def generate_cache_key(operation: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build a deterministic cache key.
    
    Parameters are serialized with sorted keys so that argument order never
    changes the key, e.g. ``price_action:{"symbol":"BTC","timeframe":"90d"}``.
    """
    if not params:
        return f"{operation}:{{}}"
    serialized = json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)
    return f"{operation}:{serialized}"


class CacheManager:
    """
    TTL cache with hit/miss statistics.
    
    When ``max_keys`` live entries are stored, expired entries are purged
    first; if the cache is still full the new entry is rejected.
    """
    
    def __init__(
        self,
        default_ttl: int = 300,
        max_keys: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        if max_keys <= 0:
            raise ValueError("max_keys must be positive")
        self.default_ttl = default_ttl
        self.max_keys = max_keys
        self._clock = clock
        
        # key -> {"value": ..., "expires_at": float, "ttl": int}
        self._entries: Dict[str, Dict[str, Any]] = {}
        
        self._cache_hits: Dict[str, int] = {}  # Track hits per key pattern
        self._cache_misses: Dict[str, int] = {}  # Track misses per key pattern
        self._total_hits = 0
        self._total_misses = 0
    
    def _is_expired(self, entry: Dict[str, Any], now: Optional[float] = None) -> bool:
        if now is None:
            now = self._clock()
        return now >= entry["expires_at"]
    
    def get(self, key: str) -> Optional[Any]:
        """
        Get a value from the cache.
        
        Returns:
            Cached value or None if absent or expired
        """
        entry = self._entries.get(key)
        if entry is not None:
            if not self._is_expired(entry):
                logger.debug(f"Cache HIT: {key}")
                self._track_hit(key)
                return entry["value"]
            del self._entries[key]
            logger.debug(f"Cache EXPIRED: {key}")
        
        logger.debug(f"Cache MISS: {key}")
        self._track_miss(key)
        return None
    
    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Store a value.
        
        Args:
            key: Cache key
            value: Value to cache
            ttl: TTL in seconds (default: the cache's default TTL)
        
        Returns:
            True if stored, False if the cache is full
        """
        actual_ttl = ttl or self.default_ttl
        if key not in self._entries and len(self._entries) >= self.max_keys:
            self.clean_expired()
            if len(self._entries) >= self.max_keys:
                logger.warning(f"Cache full ({self.max_keys} keys), not caching: {key}")
                return False
        
        self._entries[key] = {
            "value": value,
            "expires_at": self._clock() + actual_ttl,
            "ttl": actual_ttl,
        }
        logger.debug(f"Cache SET: {key} (TTL: {actual_ttl}s)")
        return True
    
    def has(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not self._is_expired(entry)
    
    def keys(self) -> List[str]:
        now = self._clock()
        return [k for k, entry in self._entries.items() if not self._is_expired(entry, now)]
    
    def invalidate(self, key: str) -> bool:
        """Remove a single entry. Returns True if it existed."""
        existed = self._entries.pop(key, None) is not None
        if existed:
            logger.debug(f"Cache INVALIDATED: {key}")
        return existed
    
    def invalidate_pattern(self, pattern: str) -> int:
        """
        Invalidate all entries whose key matches a regular expression.
        
        Args:
            pattern: Regex searched in each key (e.g., "^risk_metrics:")
        """
        regex = re.compile(pattern)
        matching = [k for k in self._entries if regex.search(k)]
        for key in matching:
            del self._entries[key]
        logger.debug(f"Cache INVALIDATED (pattern): {pattern} ({len(matching)} keys deleted)")
        return len(matching)
    
    def clean_expired(self) -> int:
        now = self._clock()
        expired = [k for k, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info(f"Cleaned {len(expired)} expired cache keys")
        return len(expired)
    
    def _track_hit(self, key: str):
        """Track cache hit for statistics."""
        self._total_hits += 1
        pattern = self._get_key_pattern(key)
        self._cache_hits[pattern] = self._cache_hits.get(pattern, 0) + 1
    
    def _track_miss(self, key: str):
        """Track cache miss for statistics."""
        self._total_misses += 1
        pattern = self._get_key_pattern(key)
        self._cache_misses[pattern] = self._cache_misses.get(pattern, 0) + 1
    
    def _get_key_pattern(self, key: str) -> str:
        """Operation part of a key (e.g., 'risk_metrics:{...}' -> 'risk_metrics:*')."""
        operation, sep, _ = key.partition(":")
        return f"{operation}:*" if sep else key
    
    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.
        
        Returns:
            Dictionary with cache statistics
        """
        total_requests = self._total_hits + self._total_misses
        hit_rate = (self._total_hits / total_requests * 100) if total_requests > 0 else 0
        
        return {
            "size": len(self._entries),
            "active": len(self.keys()),
            "max_keys": self.max_keys,
            "default_ttl": self.default_ttl,
            "total_hits": self._total_hits,
            "total_misses": self._total_misses,
            "hit_rate": f"{hit_rate:.2f}%",
            "detailed_hits": dict(self._cache_hits),
            "detailed_misses": dict(self._cache_misses),
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
    
    def clear_all(self):
        """Remove every entry."""
        self._entries.clear()
        logger.info("Cache cleared")


# Global cache manager instance
_cache_manager: Optional[CacheManager] = None


def get_cache_manager() -> CacheManager:
    """Get global cache manager instance configured from settings."""
    global _cache_manager
    if _cache_manager is None:
        from cryptoquant.config import settings
        _cache_manager = CacheManager(
            default_ttl=settings.CACHE_TTL_SECONDS,
            max_keys=settings.CACHE_MAX_KEYS,
        )
    return _cache_manager
