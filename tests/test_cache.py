"""
TTLCache (주입 시계) 와 그 위에서 동작하는 RateLimiter.
"""
from types import SimpleNamespace

from core.cache import TTLCache
from core.rate_limit import RateLimiter, client_key_from_request


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


# ──────────────────────────────────────────────
# 1. TTLCache
# ──────────────────────────────────────────────

class TestTTLCache:
    def test_expires_after_default_ttl(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock, default_ttl=30)
        cache.set("classes_list", ["화목 4시반"])

        clock.advance(30)
        assert cache.get("classes_list") == ["화목 4시반"]

        clock.advance(0.1)
        assert cache.get("classes_list") is None
        assert len(cache) == 0

    def test_ttl_is_chosen_at_read_time(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock, default_ttl=30)
        cache.set("k", 1)
        clock.advance(45)
        assert cache.get("k", ttl=60) == 1
        assert cache.get("k") is None

    def test_invalidate_by_prefix_and_all(self):
        cache = TTLCache(clock=FakeClock())
        cache.set("students:1", "a")
        cache.set("students:2", "b")
        cache.set("classes", "c")

        cache.invalidate("students:")
        assert cache.get("students:1") is None
        assert cache.get("students:2") is None
        assert cache.get("classes") == "c"

        cache.invalidate()
        assert len(cache) == 0

    def test_cached_calls_loader_once_and_skips_none(self):
        cache = TTLCache(clock=FakeClock())
        calls = []

        def loader():
            calls.append(1)
            return ["a"]

        assert cache.cached("k", loader) == ["a"]
        assert cache.cached("k", loader) == ["a"]
        assert len(calls) == 1

        assert cache.cached("none", lambda: None) is None
        assert len(cache) == 1

    def test_set_sweeps_entries_nobody_can_read(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock, default_ttl=30)
        for i in range(1000):
            cache.set(f"k{i}", i)
        assert len(cache) == 1000

        clock.advance(31)
        cache.set("fresh", 1)
        assert len(cache) == 1
        assert cache.get("fresh") == 1

    def test_sweep_keeps_entries_within_longest_read_ttl(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock, default_ttl=30)
        clock.advance(20)
        cache.set("window", {"count": 1})
        assert cache.get("window", ttl=60) == {"count": 1}

        clock.advance(45)
        cache.set("other", 1)
        assert cache.get("window", ttl=60) == {"count": 1}


# ──────────────────────────────────────────────
# 2. RateLimiter
# ──────────────────────────────────────────────

class TestRateLimiter:
    def test_fixed_window(self):
        clock = FakeClock()
        limiter = RateLimiter(TTLCache(clock=clock), limit=3, window_seconds=60)

        assert [limiter.allow("1.1.1.1") for _ in range(4)] == [True, True, True, False]
        # 다른 클라이언트는 별도 카운트
        assert limiter.allow("2.2.2.2") is True

        clock.advance(61)
        assert limiter.allow("1.1.1.1") is True

    def test_rotating_client_keys_do_not_pile_up(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        limiter = RateLimiter(cache, limit=50, window_seconds=60)
        for i in range(10000):
            assert limiter.allow(f"198.51.{i // 256}.{i % 256}") is True
        assert len(cache) == 10000

        clock.advance(10000)
        limiter.allow("fresh")
        assert len(cache) == 1

    def test_reset_only_touches_rate_limit_keys(self):
        cache = TTLCache(clock=FakeClock())
        cache.set("classes", "c")
        limiter = RateLimiter(cache, limit=1, window_seconds=60)
        limiter.allow("x")
        assert limiter.allow("x") is False

        limiter.reset()
        assert limiter.allow("x") is True
        assert cache.get("classes") == "c"


def _request(headers=None, host="10.0.0.9"):
    client = SimpleNamespace(host=host) if host else None
    return SimpleNamespace(headers=headers or {}, client=client)


def test_client_key_prefers_forwarded_for():
    req = _request({"x-forwarded-for": "203.0.113.5, 10.0.0.1", "x-real-ip": "198.51.100.1"})
    assert client_key_from_request(req) == "203.0.113.5"


def test_client_key_falls_back_in_order():
    assert client_key_from_request(_request({"x-real-ip": "198.51.100.1"})) == "198.51.100.1"
    assert client_key_from_request(_request()) == "10.0.0.9"
    assert client_key_from_request(_request(host=None)) == "unknown"
