"""Speed smoothing and the last-estimate store."""

from __future__ import annotations

from pytrains.config import SpeedPolicy
from pytrains.models.sample import SpeedEstimate
from pytrains.state.policy import blend, within_window


class SpeedSmoother:
    """Blend successive estimates and remember the last accepted one.

    :meth:`smooth` is a pure read: callers decide whether to
    :meth:`remember` its result.
    """

    def __init__(self, policy: SpeedPolicy) -> None:
        self._policy = policy
        self._last: dict[str, SpeedEstimate] = {}

    def last(self, key: str) -> SpeedEstimate | None:
        return self._last.get(key)

    def remember(self, key: str, estimate: SpeedEstimate) -> None:
        self._last[key] = estimate

    def evict(self, key: str) -> None:
        self._last.pop(key, None)

    def keys(self) -> frozenset[str]:
        return frozenset(self._last)

    def _fresh(self, key: str, timestamp_ms: int) -> SpeedEstimate | None:
        previous = self._last.get(key)
        if previous is None:
            return None
        if not within_window(previous.timestamp_ms, timestamp_ms, self._policy.reuse_window_ms):
            return None
        return previous

    def smooth(self, key: str, raw: float, timestamp_ms: int) -> float:
        previous = self._fresh(key, timestamp_ms)
        if previous is None:
            return raw
        return blend(previous.speed_kmh, raw, self._policy.smoothing_weight)

    def carry_forward(self, key: str, timestamp_ms: int) -> float | None:
        """Previous estimate if it is still inside the reuse window."""
        previous = self._fresh(key, timestamp_ms)
        return previous.speed_kmh if previous is not None else None
