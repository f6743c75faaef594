import pytest

from swanengine.cache import LruCache


def test_free_slots_cover_all_indices():
    cache = LruCache(4)
    got = [cache.next() for _ in range(4)]
    assert sorted(got) == list(range(len(cache)))


def test_next_free_exhausts():
    cache = LruCache(2)
    cache.next_free()
    cache.next_free()
    assert cache.next_free() is None


def test_next_used_empty_is_none():
    assert LruCache(3).next_used() is None


def test_eviction_order_is_least_recently_used():
    cache = LruCache(3)
    allocated = [cache.next() for _ in range(3)]
    first_evicted = cache.next()
    assert first_evicted == allocated[0]
    second_evicted = cache.next()
    assert second_evicted == allocated[1]


def test_bump_protects_from_eviction():
    cache = LruCache(3)
    allocated = [cache.next() for _ in range(3)]
    cache.bump(allocated[0])
    assert cache.next() == allocated[1]
    assert cache.next() == allocated[2]
    assert cache.next() == allocated[0]


def test_bump_most_recent_is_harmless():
    cache = LruCache(2)
    a = cache.next()
    b = cache.next()
    cache.bump(b)
    cache.bump(b)
    assert cache.next() == a
    assert cache.next() == b


def test_single_slot_recycles_itself():
    cache = LruCache(1)
    idx = cache.next()
    assert cache.next() == idx
    assert cache.next_used() == idx


def test_values_are_stored_per_slot():
    cache = LruCache(2)
    idx = cache.next()
    cache[idx] = "tile"
    assert cache[idx] == "tile"


def test_reset_frees_everything():
    cache = LruCache(2)
    cache.next()
    cache.next()
    cache.reset(3)
    assert len(cache) == 3
    assert cache.next_used() is None
    assert sorted(cache.next_free() for _ in range(3)) == [0, 1, 2]


def test_non_positive_size_rejected():
    with pytest.raises(ValueError):
        LruCache(0)