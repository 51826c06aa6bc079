"""Deterministic speed policy.

Pure decisions used by the estimator and smoother. This module holds no
state and does no feed parsing.
"""

from __future__ import annotations

import math

from pytrains._constants import EARTH_RADIUS_KM

_MS_PER_HOUR = 3_600_000.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, a)))


def speed_kmh(distance_km: float, elapsed_ms: float) -> float:
    return distance_km / (elapsed_ms / _MS_PER_HOUR)


def plausible_speed(
    speed: float,
    *,
    ceiling_kmh: float,
    tolerance: float,
    min_speed_kmh: float,
) -> float | None:
    """Clamp *speed* to the ceiling, or reject it.

    Policy:
    - non-finite or below ``min_speed_kmh``: rejected (noise);
    - above ``ceiling_kmh * tolerance``: rejected (implausible);
    - otherwise clamped to ``ceiling_kmh``.
    """
    if not math.isfinite(speed) or speed < min_speed_kmh:
        return None
    if speed > ceiling_kmh * tolerance:
        return None
    return min(speed, ceiling_kmh)


def within_window(previous_ms: int, current_ms: int, window_ms: int) -> bool:
    """Whether a value stamped *previous_ms* is still usable at *current_ms*."""
    age = current_ms - previous_ms
    return 0 <= age <= window_ms


def blend(previous: float, raw: float, weight: float) -> float:
    """Exponential moving average step; *weight* applies to *previous*."""
    return weight * previous + (1.0 - weight) * raw
