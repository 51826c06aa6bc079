"""Bounded per-train positional history."""

from __future__ import annotations

from collections import deque

from pytrains.models.sample import PositionSample


class SampleHistoryStore:
    """Ring buffer of recent positions per train, most recent last.

    Timestamps are only compared for equality with the newest sample;
    ordering is not enforced.
    """

    def __init__(self, capacity: int = 6) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._samples: dict[str, deque[PositionSample]] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, key: str, sample: PositionSample) -> None:
        """Insert *sample*; an equal timestamp replaces the newest entry."""
        samples = self._samples.get(key)
        if samples is None:
            samples = deque(maxlen=self._capacity)
            self._samples[key] = samples
        if samples and samples[-1].timestamp_ms == sample.timestamp_ms:
            samples[-1] = sample
            return
        samples.append(sample)

    def history(self, key: str) -> tuple[PositionSample, ...]:
        samples = self._samples.get(key)
        if samples is None:
            return ()
        return tuple(samples)

    def evict(self, key: str) -> None:
        self._samples.pop(key, None)

    def keys(self) -> frozenset[str]:
        return frozenset(self._samples)

    def __contains__(self, key: object) -> bool:
        return key in self._samples

    def __len__(self) -> int:
        return len(self._samples)
