"""pytrains - Async live train tracking with reconciled state and speed estimation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytrains")
except PackageNotFoundError:
    __version__ = "0+local"
from pytrains.client import TrainsClient
from pytrains.config import RouteOverride, SpeedPolicy, TrainsConfig
from pytrains.exceptions import TrainsConfigError, TrainsError, TrainsTransportError
from pytrains.models import PositionSample, SpeedEstimate, SpeedSource, TrainRecord, TrainState
from pytrains.state.events import CycleResult
from pytrains.state.store import TrainStore

__all__ = [
    "__version__",
    "CycleResult",
    "PositionSample",
    "RouteOverride",
    "SpeedEstimate",
    "SpeedPolicy",
    "SpeedSource",
    "TrainRecord",
    "TrainState",
    "TrainStore",
    "TrainsClient",
    "TrainsConfig",
    "TrainsConfigError",
    "TrainsError",
    "TrainsTransportError",
]
