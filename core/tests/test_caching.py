from unittest.mock import patch

import pytest
from django.core.cache import cache

from core.caching import CacheKeys, acquire_lock, cache_lock, release_lock


def test_cache_keys_constants_exist():
    assert CacheKeys.INVENTORY_ALERT_INDEX == "inventory:alerts:index:v1"
    assert CacheKeys.INVENTORY_ALERT_PREFIX.startswith("inventory:alerts:")


def test_acquire_lock_is_exclusive_until_released():
    assert acquire_lock("sweep") is True
    assert acquire_lock("sweep") is False

    release_lock("sweep")

    assert acquire_lock("sweep") is True


def test_acquire_lock_returns_false_when_cache_fails():
    with patch("core.caching.cache") as mock_cache:
        mock_cache.add.side_effect = ConnectionError("redis down")

        assert acquire_lock("sweep") is False


def test_cache_lock_releases_on_exit():
    with cache_lock("index"):
        assert cache.get("lock:index") is not None

    assert cache.get("lock:index") is None


def test_cache_lock_raises_when_held_elsewhere():
    cache.add("lock:index", "other-owner", timeout=5)

    with pytest.raises(BlockingIOError):
        with cache_lock("index", acquire_timeout=0.1):
            pass

    # No libera un lock ajeno
    assert cache.get("lock:index") == "other-owner"
