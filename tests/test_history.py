from __future__ import annotations

from pytrains.models.sample import PositionSample
from pytrains.state.history import SampleHistoryStore

KEY = "2024-05-01_101"


def _sample(ts: int, lat: float = 59.3) -> PositionSample:
    return PositionSample(lat=lat, lon=18.0, timestamp_ms=ts)


def test_unknown_key_has_empty_history() -> None:
    store = SampleHistoryStore()
    assert store.history(KEY) == ()


def test_history_is_oldest_first() -> None:
    store = SampleHistoryStore()
    for ts in (1_000, 2_000, 3_000):
        store.record(KEY, _sample(ts))
    assert [s.timestamp_ms for s in store.history(KEY)] == [1_000, 2_000, 3_000]


def test_seventh_sample_drops_oldest() -> None:
    store = SampleHistoryStore(capacity=6)
    for ts in range(1, 8):
        store.record(KEY, _sample(ts * 1_000))

    history = store.history(KEY)
    assert len(history) == 6
    assert history[0].timestamp_ms == 2_000
    assert history[-1].timestamp_ms == 7_000


def test_equal_timestamp_replaces_last_sample() -> None:
    store = SampleHistoryStore()
    store.record(KEY, _sample(1_000, lat=59.30))
    store.record(KEY, _sample(2_000, lat=59.31))
    store.record(KEY, _sample(2_000, lat=59.32))

    history = store.history(KEY)
    assert len(history) == 2
    assert history[-1].lat == 59.32


def test_only_last_timestamp_is_checked_for_duplicates() -> None:
    store = SampleHistoryStore()
    store.record(KEY, _sample(1_000))
    store.record(KEY, _sample(2_000))
    store.record(KEY, _sample(1_000))
    assert len(store.history(KEY)) == 3


def test_evict_removes_key() -> None:
    store = SampleHistoryStore()
    store.record(KEY, _sample(1_000))
    store.record("other", _sample(1_000))

    store.evict(KEY)
    store.evict("never-seen")

    assert store.history(KEY) == ()
    assert KEY not in store
    assert store.keys() == frozenset({"other"})
