"""Train record and reconciled train state models."""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pytrains.ingestion.normalize import safe_float, safe_str
from pytrains.models._base import FeedTimestamp, TrainsBaseModel, to_epoch_ms


class SpeedSource(StrEnum):
    """Where a train's reported speed came from."""

    OBSERVED = "observed"
    ESTIMATED = "estimated"
    UNKNOWN = "unknown"


class TrainRecord(TrainsBaseModel):
    """One train as published in a single poll.

    Parameters
    ----------
    train_no : str
        Advertised train number.
    product : str or None
        Product/category name (e.g. ``"Pågatågen"``).
    operator : str or None
        Operating company.
    to : str or None
        Destination.
    lat, lon : float
        Position in degrees.
    bearing : float or None
        Heading in degrees from north.
    speed : float or None
        Reported speed in km/h; ``None`` when unknown.
    canceled : bool
        Whether the run is cancelled.
    timestamp : datetime or None
        Observation instant (UTC).
    dep_date : str or None
        Operational departure date.
    """

    train_no: str
    product: str | None = None
    operator: str | None = None
    to: str | None = Field(default=None, validation_alias=AliasChoices("to", "destination"))
    lat: float
    lon: float
    bearing: float | None = None
    speed: float | None = None
    canceled: bool = Field(default=False, validation_alias=AliasChoices("canceled", "cancelled"))
    timestamp: FeedTimestamp = Field(
        default=None,
        validation_alias=AliasChoices("timestamp", "timeStamp", "ts", "time", "updatedAt"),
    )
    dep_date: str | None = Field(default=None, validation_alias=AliasChoices("depDate", "dep_date", "date"))

    @field_validator("train_no", mode="before")
    @classmethod
    def _coerce_train_no(cls, value: Any) -> str:
        text = safe_str(value)
        if text is None:
            raise ValueError("train number must be non-empty")
        return text

    @field_validator("product", "operator", "to", "dep_date", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("bearing", "speed", mode="before")
    @classmethod
    def _coerce_optional_floats(cls, value: Any) -> float | None:
        parsed = safe_float(value)
        if parsed is None or not math.isfinite(parsed):
            return None
        return parsed

    @field_validator("canceled", mode="before")
    @classmethod
    def _coerce_canceled(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "y"}
        return bool(value)

    @field_validator("bearing")
    @classmethod
    def _wrap_bearing(cls, value: float | None) -> float | None:
        if value is None:
            return None
        return value % 360.0

    @property
    def train_number(self) -> int | None:
        """Numeric train number, or ``None`` for non-numeric identifiers."""
        try:
            return int(self.train_no)
        except ValueError:
            return None

    @property
    def timestamp_ms(self) -> int | None:
        if self.timestamp is None:
            return None
        return to_epoch_ms(self.timestamp)


class TrainState(BaseModel):
    """Reconciled view of one live train after a poll cycle."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    train: TrainRecord
    speed: float | None = None
    speed_source: SpeedSource = SpeedSource.UNKNOWN

    @property
    def is_estimated(self) -> bool:
        return self.speed_source == SpeedSource.ESTIMATED
