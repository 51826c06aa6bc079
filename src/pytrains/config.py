"""Client configuration for pytrains."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytrains._constants import (
    ARLANDA_EXPRESS,
    CATEGORY_ALIASES,
    DEFAULT_CEILING_KMH,
    SPEED_CEILINGS_KMH,
    SPEED_SENTINELS,
    USER_AGENT,
    WORKER_URL,
)
from pytrains.exceptions import TrainsConfigError


def _env_float(value: str | None, name: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise TrainsConfigError(f"{name} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RouteOverride:
    """Force a category and destination onto a reserved train-number band.

    Some shuttle services are published under a generic operator with no
    useful destination. Within ``first..last`` (inclusive) the category is
    replaced and the destination follows train-number parity.
    """

    first: int
    last: int
    category: str
    odd_destination: str
    even_destination: str

    def applies_to(self, train_no: int) -> bool:
        return self.first <= train_no <= self.last

    def destination_for(self, train_no: int) -> str:
        return self.odd_destination if train_no % 2 else self.even_destination


DEFAULT_ROUTE_OVERRIDES: tuple[RouteOverride, ...] = (
    RouteOverride(
        first=7700,
        last=7799,
        category=ARLANDA_EXPRESS,
        odd_destination="Arlanda C",
        even_destination="Stockholm C",
    ),
)


@dataclasses.dataclass(frozen=True)
class SpeedPolicy:
    """Tunables for speed estimation and smoothing.

    Parameters
    ----------
    history_capacity : int
        Positional samples retained per train.
    min_time_gap_ms : int
        Minimum age of the base sample relative to the current one.
    min_distance_km : float
        Displacement below this is treated as standing still.
    min_speed_kmh : float
        Estimates below this are discarded as noise.
    ceiling_tolerance : float
        Estimates above ``ceiling * ceiling_tolerance`` are rejected;
        estimates between the ceiling and that bound are clamped.
    reuse_window_ms : int
        How long a previous estimate may be blended with or carried forward.
    smoothing_weight : float
        Weight of the previous estimate in the moving average.
    default_ceiling_kmh : float
        Ceiling for products without an entry in ``ceilings``.
    ceilings : dict
        Plausibility ceiling (km/h) per canonical product name.
    """

    history_capacity: int = 6
    min_time_gap_ms: int = 15_000
    min_distance_km: float = 0.05
    min_speed_kmh: float = 2.0
    ceiling_tolerance: float = 1.35
    reuse_window_ms: int = 90_000
    smoothing_weight: float = 0.65
    default_ceiling_kmh: float = DEFAULT_CEILING_KMH
    ceilings: dict[str, float] = dataclasses.field(default_factory=lambda: dict(SPEED_CEILINGS_KMH))

    def __post_init__(self) -> None:
        if self.history_capacity < 2:
            raise TrainsConfigError("history_capacity must be at least 2")
        if self.ceiling_tolerance < 1.0:
            raise TrainsConfigError("ceiling_tolerance must be >= 1.0")
        if not 0.0 <= self.smoothing_weight <= 1.0:
            raise TrainsConfigError("smoothing_weight must be between 0 and 1")
        if self.reuse_window_ms < 0 or self.min_time_gap_ms < 0:
            raise TrainsConfigError("time windows must be non-negative")

    def ceiling_for(self, category: str | None) -> float:
        if category is None:
            return self.default_ceiling_kmh
        return self.ceilings.get(category, self.default_ceiling_kmh)


@dataclasses.dataclass(frozen=True)
class TrainsConfig:
    """Client configuration.

    Parameters
    ----------
    worker_url : str
        Endpoint returning the live train payload.
    refresh_interval : float
        Seconds to wait after a cycle completes before starting the next.
    request_timeout : float
        Total HTTP timeout per poll in seconds.
    user_agent : str
        User-Agent header sent with each poll.
    speed : SpeedPolicy
        Speed estimation and smoothing tunables.
    route_overrides : tuple of RouteOverride
        Reserved train-number bands with a forced category/destination.
    speed_sentinels : dict
        Per-product placeholder speed meaning "unknown".
    category_aliases : dict
        Lower-cased feed spelling to canonical product name.
    """

    worker_url: str = WORKER_URL
    refresh_interval: float = 5.0
    request_timeout: float = 10.0
    user_agent: str = USER_AGENT
    speed: SpeedPolicy = dataclasses.field(default_factory=SpeedPolicy)
    route_overrides: tuple[RouteOverride, ...] = DEFAULT_ROUTE_OVERRIDES
    speed_sentinels: dict[str, float] = dataclasses.field(default_factory=lambda: dict(SPEED_SENTINELS))
    category_aliases: dict[str, str] = dataclasses.field(default_factory=lambda: dict(CATEGORY_ALIASES))

    def __post_init__(self) -> None:
        if not self.worker_url:
            raise TrainsConfigError("worker_url must be set")
        if self.refresh_interval <= 0:
            raise TrainsConfigError("refresh_interval must be positive")
        if self.request_timeout <= 0:
            raise TrainsConfigError("request_timeout must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> TrainsConfig:
        """Create configuration from ``TRAINS_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TrainsConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("TRAINS_WORKER_URL")
        if url is not None:
            config_kwargs["worker_url"] = url

        interval = _env_float(env.get("TRAINS_REFRESH_INTERVAL"), "TRAINS_REFRESH_INTERVAL")
        if interval is not None:
            config_kwargs["refresh_interval"] = interval

        timeout = _env_float(env.get("TRAINS_REQUEST_TIMEOUT"), "TRAINS_REQUEST_TIMEOUT")
        if timeout is not None:
            config_kwargs["request_timeout"] = timeout

        # Speed policy knobs are nested; only build a custom policy when asked.
        speed_kwargs: dict[str, Any] = {}
        tolerance = _env_float(env.get("TRAINS_SPEED_TOLERANCE"), "TRAINS_SPEED_TOLERANCE")
        if tolerance is not None:
            speed_kwargs["ceiling_tolerance"] = tolerance
        reuse = _env_float(env.get("TRAINS_REUSE_WINDOW_MS"), "TRAINS_REUSE_WINDOW_MS")
        if reuse is not None:
            speed_kwargs["reuse_window_ms"] = int(reuse)

        speed_overrides = overrides.pop("speed", None)
        if isinstance(speed_overrides, dict):
            speed_kwargs.update(speed_overrides)
        elif isinstance(speed_overrides, SpeedPolicy):
            speed_kwargs = dataclasses.asdict(speed_overrides)
        if speed_kwargs:
            config_kwargs["speed"] = SpeedPolicy(**speed_kwargs)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
