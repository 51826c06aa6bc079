"""Data models for the live train feed."""

from pytrains.models._base import FeedTimestamp, TrainsBaseModel, parse_feed_timestamp
from pytrains.models.sample import PositionSample, SpeedEstimate
from pytrains.models.train import SpeedSource, TrainRecord, TrainState

__all__ = [
    "FeedTimestamp",
    "PositionSample",
    "SpeedEstimate",
    "SpeedSource",
    "TrainRecord",
    "TrainState",
    "TrainsBaseModel",
    "parse_feed_timestamp",
]
