"""Speed estimation from positional history."""

from __future__ import annotations

import logging

from pytrains.config import SpeedPolicy
from pytrains.models.sample import PositionSample
from pytrains.state.history import SampleHistoryStore
from pytrains.state.policy import haversine_km, plausible_speed, speed_kmh

_logger = logging.getLogger(__name__)


class SpeedEstimator:
    """Derive speed from a train's retained samples.

    The estimator reads from the history store but never writes to it; the
    current sample is expected to have been recorded already.
    """

    def __init__(self, history: SampleHistoryStore, policy: SpeedPolicy) -> None:
        self._history = history
        self._policy = policy

    def _base_sample(self, samples: tuple[PositionSample, ...], current: PositionSample) -> PositionSample | None:
        """Most recent sample at least ``min_time_gap_ms`` older than *current*."""
        for candidate in reversed(samples[:-1]):
            if current.timestamp_ms - candidate.timestamp_ms >= self._policy.min_time_gap_ms:
                return candidate
        return None

    def estimate(self, key: str, category: str | None, current: PositionSample) -> float | None:
        """Return a plausible speed in km/h, or ``None`` when there is no usable signal."""
        samples = self._history.history(key)
        if len(samples) < 2:
            return None

        base = self._base_sample(samples, current)
        if base is None:
            return None

        elapsed_ms = current.timestamp_ms - base.timestamp_ms
        if elapsed_ms <= 0:
            return None

        distance = haversine_km(base.lat, base.lon, current.lat, current.lon)
        if distance < self._policy.min_distance_km:
            return None

        raw = speed_kmh(distance, elapsed_ms)
        result = plausible_speed(
            raw,
            ceiling_kmh=self._policy.ceiling_for(category),
            tolerance=self._policy.ceiling_tolerance,
            min_speed_kmh=self._policy.min_speed_kmh,
        )
        if result is None:
            _logger.debug("Rejected speed %.1f km/h for %s (%s)", raw, key, category)
        return result
