from portfolio_engine.services.cache import TTLCache, make_cache_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(60, clock=clock)
    cache.set("k", {"value": 1})

    clock.now += 59
    assert cache.get("k") == {"value": 1}

    clock.now += 1
    assert cache.get("k") is None
    assert len(cache) == 0


def test_cached_values_are_isolated_copies():
    cache = TTLCache(60)
    original = {"items": [1, 2]}
    cache.set("k", original)
    original["items"].append(3)

    first = cache.get("k")
    first["items"].append(4)
    assert cache.get("k") == {"items": [1, 2]}


def test_zero_ttl_disables_storage():
    cache = TTLCache(0)
    cache.set("k", 1)
    assert cache.get("k") is None


def test_oldest_entry_evicted_when_full():
    clock = FakeClock()
    cache = TTLCache(60, max_items=2, clock=clock)
    cache.set("a", 1)
    clock.now += 1
    cache.set("b", 2)
    clock.now += 1
    cache.set("c", 3)

    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_cache_key_ignores_asset_order():
    assert make_cache_key("defi", ["USDC", "ETH"], "low") == make_cache_key("defi", ["ETH", "USDC"], "low")
    assert make_cache_key("defi", ["ETH"], "low") != make_cache_key("defi", ["ETH"], "high")
