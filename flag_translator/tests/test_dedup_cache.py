import pytest

from flag_translator.core.dedup_cache import DedupCache, EntryStatus, make_key


KEY = make_key(1001, "\U0001F1EA\U0001F1F8")


def test_reserve_is_exclusive_within_window(clock):
    cache = DedupCache(60, clock=clock)

    assert cache.try_reserve(KEY) is True
    assert cache.try_reserve(KEY) is False
    assert cache.status(KEY) is EntryStatus.PENDING


def test_distinct_keys_are_independent(clock):
    cache = DedupCache(60, clock=clock)
    assert cache.try_reserve(KEY)
    assert cache.try_reserve(make_key(1001, "\U0001F1EB\U0001F1F7"))
    assert cache.try_reserve(make_key(1002, "\U0001F1EA\U0001F1F8"))
    assert len(cache) == 3


def test_completed_entry_blocks_until_expiry(clock):
    cache = DedupCache(60, clock=clock)
    cache.try_reserve(KEY)
    clock.advance(30)
    cache.mark_completed(KEY)

    assert cache.status(KEY) is EntryStatus.COMPLETED
    assert cache.try_reserve(KEY) is False

    # Expiry is measured from the reservation, not from completion.
    clock.advance(30)
    assert KEY not in cache
    assert cache.try_reserve(KEY) is True


def test_release_allows_immediate_retry(clock):
    cache = DedupCache(60, clock=clock)
    cache.try_reserve(KEY)
    cache.release(KEY)

    assert KEY not in cache
    assert cache.try_reserve(KEY) is True


def test_release_and_mark_completed_are_noops_for_unknown_keys(clock):
    cache = DedupCache(60, clock=clock)
    cache.release(KEY)
    cache.mark_completed(KEY)
    assert cache.status(KEY) is None
    assert len(cache) == 0


def test_mark_completed_does_not_revive_expired_entry(clock):
    cache = DedupCache(10, clock=clock)
    cache.try_reserve(KEY)
    clock.advance(11)
    cache.mark_completed(KEY)
    assert cache.status(KEY) is None


def test_expiry_is_checked_on_read_without_sweep(clock):
    cache = DedupCache(5, clock=clock)
    cache.try_reserve(KEY)
    clock.advance(4.9)
    assert cache.try_reserve(KEY) is False
    clock.advance(0.1)
    assert cache.try_reserve(KEY) is True


def test_sweep_removes_only_expired_entries(clock):
    cache = DedupCache(60, clock=clock)
    old = make_key(1, "\U0001F1EA\U0001F1F8")
    fresh = make_key(2, "\U0001F1EA\U0001F1F8")
    cache.try_reserve(old)
    clock.advance(45)
    cache.try_reserve(fresh)
    clock.advance(20)

    assert cache.sweep_expired() == 1
    assert cache.keys() == [fresh]
    assert cache.sweep_expired() == 0


def test_keys_use_integer_message_ids():
    assert make_key("77", "x") == (77, "x")


def test_duration_must_be_positive():
    with pytest.raises(ValueError):
        DedupCache(0)
