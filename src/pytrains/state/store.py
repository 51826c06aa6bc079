"""Deterministic in-memory train table.

This is the only component allowed to mutate per-train state. Given the
same sequence of polls (and clock readings) it produces the same table.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

from pytrains.config import TrainsConfig
from pytrains.ingestion.records import normalize_record, record_key
from pytrains.models.sample import PositionSample, SpeedEstimate
from pytrains.models.train import SpeedSource, TrainRecord, TrainState
from pytrains.state.estimator import SpeedEstimator
from pytrains.state.events import CycleResult
from pytrains.state.history import SampleHistoryStore
from pytrains.state.smoother import SpeedSmoother

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TrainStore:
    """Reconcile each poll into a live table of trains.

    Owns three per-train stores (table, positional history, last speed
    estimate) and evicts them together when a train leaves the feed.
    """

    def __init__(
        self,
        config: TrainsConfig | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config or TrainsConfig()
        self._clock = clock
        policy = self._config.speed
        self._table: dict[str, TrainState] = {}
        self._history = SampleHistoryStore(policy.history_capacity)
        self._estimator = SpeedEstimator(self._history, policy)
        self._smoother = SpeedSmoother(policy)

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def _resolve_speed(self, key: str, record: TrainRecord) -> tuple[float | None, SpeedSource]:
        if record.speed is not None:
            return record.speed, SpeedSource.OBSERVED

        timestamp_ms = record.timestamp_ms
        if timestamp_ms is None:
            return None, SpeedSource.UNKNOWN

        sample = PositionSample(lat=record.lat, lon=record.lon, timestamp_ms=timestamp_ms)
        self._history.record(key, sample)

        # A repeated sample carries no new information.
        previous = self._smoother.last(key)
        if previous is not None and previous.timestamp_ms == timestamp_ms:
            return previous.speed_kmh, SpeedSource.ESTIMATED

        raw = self._estimator.estimate(key, record.product, sample)
        if raw is not None:
            smoothed = self._smoother.smooth(key, raw, timestamp_ms)
            self._smoother.remember(key, SpeedEstimate(speed_kmh=smoothed, timestamp_ms=timestamp_ms))
            return smoothed, SpeedSource.ESTIMATED

        carried = self._smoother.carry_forward(key, timestamp_ms)
        if carried is not None:
            return carried, SpeedSource.ESTIMATED
        return None, SpeedSource.UNKNOWN

    def _evict(self, key: str) -> None:
        self._table.pop(key, None)
        self._history.evict(key)
        self._smoother.evict(key)

    def reconcile(self, raw_records: Iterable[Any], *, meta: dict[str, Any] | None = None) -> CycleResult:
        """Apply one poll's full record list.

        Every admissible record is upserted; every known train absent from
        this poll is evicted from all stores.
        """
        observed_at = self._clock()
        seen: set[str] = set()
        dropped = 0

        for raw in raw_records:
            record = normalize_record(raw, self._config, observed_at)
            if record is None:
                dropped += 1
                continue
            key = record_key(record)
            speed, source = self._resolve_speed(key, record)
            self._table[key] = TrainState(key=key, train=record, speed=speed, speed_source=source)
            seen.add(key)

        evicted = frozenset(key for key in self._table if key not in seen)
        for key in evicted:
            self._evict(key)

        if dropped:
            _logger.debug("Dropped %d inadmissible train records", dropped)
        if evicted:
            _logger.info("Evicted %d trains no longer in feed", len(evicted))

        return CycleResult(
            ok=True,
            trains=self.snapshot(),
            evicted=evicted,
            meta=dict(meta or {}),
            dropped=dropped,
            completed_at=observed_at,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get(self, key: str) -> TrainState | None:
        return self._table.get(key)

    def snapshot(self) -> dict[str, TrainState]:
        """Copy of the table; entries are immutable so a shallow copy suffices."""
        return dict(self._table)

    def keys(self) -> frozenset[str]:
        return frozenset(self._table)

    def history(self, key: str) -> tuple[PositionSample, ...]:
        return self._history.history(key)

    def last_estimate(self, key: str) -> SpeedEstimate | None:
        return self._smoother.last(key)

    def tracked_keys(self) -> frozenset[str]:
        """Every key held by any per-train store."""
        return self.keys() | self._history.keys() | self._smoother.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)
