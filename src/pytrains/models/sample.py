"""Positional samples and speed estimates kept per train."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PositionSample:
    """A single observed position.

    ``timestamp_ms`` is epoch milliseconds of the observation.
    """

    lat: float
    lon: float
    timestamp_ms: int


@dataclass(frozen=True, slots=True)
class SpeedEstimate:
    """Last accepted (smoothed) speed for a train."""

    speed_kmh: float
    timestamp_ms: int
