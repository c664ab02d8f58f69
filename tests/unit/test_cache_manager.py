"""
Unit tests for the result cache.
"""
import pytest

from cryptoquant import cache_manager
from cryptoquant.cache_manager import CacheManager, generate_cache_key, get_cache_manager


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return CacheManager(default_ttl=300, max_keys=3, clock=clock)


@pytest.mark.unit
class TestCacheKeys:
    
    def test_parameter_order_does_not_matter(self):
        a = generate_cache_key("risk_metrics", {"symbol": "BTC", "timeframe": "90d"})
        b = generate_cache_key("risk_metrics", {"timeframe": "90d", "symbol": "BTC"})
        assert a == b
        assert a == 'risk_metrics:{"symbol":"BTC","timeframe":"90d"}'
    
    def test_no_parameters(self):
        assert generate_cache_key("cache_stats") == "cache_stats:{}"
    
    def test_different_parameters(self):
        assert generate_cache_key("ohlcv", {"symbol": "BTC"}) != generate_cache_key(
            "ohlcv", {"symbol": "ETH"}
        )


@pytest.mark.unit
class TestCacheManager:
    
    def test_set_and_get(self, cache):
        assert cache.set("price_action:a", {"value": 1}) is True
        assert cache.get("price_action:a") == {"value": 1}
        assert cache.has("price_action:a")
    
    def test_entries_expire(self, cache, clock):
        cache.set("price_action:a", 1, ttl=10)
        clock.advance(9)
        assert cache.get("price_action:a") == 1
        clock.advance(1)
        assert cache.get("price_action:a") is None
        assert not cache.has("price_action:a")
    
    def test_default_ttl(self, cache, clock):
        cache.set("a:1", 1)
        clock.advance(299)
        assert cache.has("a:1")
        clock.advance(1)
        assert not cache.has("a:1")
    
    def test_full_cache_rejects_new_keys(self, cache):
        for i in range(3):
            assert cache.set(f"op:{i}", i)
        
        assert cache.set("op:3", 3) is False
        assert cache.get("op:3") is None
        # Existing keys can still be overwritten
        assert cache.set("op:0", "new") is True
    
    def test_full_cache_purges_expired_first(self, cache, clock):
        cache.set("op:0", 0, ttl=5)
        cache.set("op:1", 1)
        cache.set("op:2", 2)
        clock.advance(5)
        
        assert cache.set("op:3", 3) is True
        assert sorted(cache.keys()) == ["op:1", "op:2", "op:3"]
    
    def test_invalidate(self, cache):
        cache.set("op:a", 1)
        assert cache.invalidate("op:a") is True
        assert cache.invalidate("op:a") is False
    
    def test_invalidate_pattern(self, cache):
        cache.set("risk_metrics:BTC", 1)
        cache.set("risk_metrics:ETH", 2)
        cache.set("price_action:BTC", 3)
        
        assert cache.invalidate_pattern("^risk_metrics:") == 2
        assert cache.keys() == ["price_action:BTC"]
    
    def test_clean_expired(self, cache, clock):
        cache.set("op:a", 1, ttl=1)
        cache.set("op:b", 2, ttl=100)
        clock.advance(2)
        
        assert cache.clean_expired() == 1
        assert cache.keys() == ["op:b"]
    
    def test_stats(self, cache):
        cache.set("price_action:a", 1)
        cache.get("price_action:a")
        cache.get("risk_metrics:b")
        
        stats = cache.get_stats()
        
        assert stats["total_hits"] == 1
        assert stats["total_misses"] == 1
        assert stats["hit_rate"] == "50.00%"
        assert stats["detailed_hits"] == {"price_action:*": 1}
        assert stats["detailed_misses"] == {"risk_metrics:*": 1}
        assert stats["size"] == 1
        assert stats["max_keys"] == 3
    
    def test_clear_all(self, cache):
        cache.set("op:a", 1)
        cache.clear_all()
        assert cache.keys() == []
    
    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            CacheManager(default_ttl=0)
        with pytest.raises(ValueError):
            CacheManager(max_keys=0)
    
    def test_global_instance(self, monkeypatch):
        monkeypatch.setattr(cache_manager, "_cache_manager", None)
        
        first = get_cache_manager()
        
        assert first is get_cache_manager()
        assert first.default_ttl == 300
