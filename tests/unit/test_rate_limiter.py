"""
Unit tests for the sliding-window rate limiter.
"""
import pytest

from cryptoquant.data_providers import RateLimitExceededError, SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now
    
    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(max_requests=3, window_seconds=60, clock=clock)


@pytest.mark.unit
class TestSlidingWindowRateLimiter:
    
    def test_allows_up_to_limit(self, limiter):
        for _ in range(3):
            assert limiter.can_make_request()
            limiter.record_request()
        
        assert not limiter.can_make_request()
        assert limiter.remaining_requests() == 0
    
    def test_rejects_over_limit(self, limiter, clock):
        limiter.record_request()
        clock.now = 10
        limiter.record_request()
        limiter.record_request()
        clock.now = 20
        
        with pytest.raises(RateLimitExceededError) as exc_info:
            limiter.record_request()
        
        # The oldest request (t=0) leaves the window at t=60
        assert exc_info.value.retry_after == pytest.approx(40)
        assert limiter.request_count() == 3
    
    def test_window_slides(self, limiter, clock):
        for _ in range(3):
            limiter.record_request()
        
        clock.now = 60
        
        assert limiter.can_make_request()
        assert limiter.remaining_requests() == 3
        assert limiter.wait_time() == 0.0
    
    def test_stats(self, limiter):
        limiter.record_request()
        stats = limiter.get_stats()
        
        assert stats["current_requests"] == 1
        assert stats["max_requests"] == 3
        assert stats["remaining_requests"] == 2
        assert stats["window_seconds"] == 60
        assert stats["wait_time"] == 0.0
        assert stats["request_rate"] == pytest.approx(1 / 60)
    
    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(max_requests=0)
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(window_seconds=0)
