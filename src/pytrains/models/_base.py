"""Base model for train feed records.

Every feed model inherits from :class:`TrainsBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase feed keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips placeholder
  values (``""``, ``"--"``, NaN) so the field default is used.
* A ``raw`` dict that captures the original record.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Strings the feed uses for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan", "null"})

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 100_000_000_000


def parse_feed_timestamp(value: Any) -> datetime | None:
    """Convert a feed timestamp to a timezone-aware UTC datetime.

    Accepts datetimes, epoch seconds or milliseconds (numbers or numeric
    strings) and ISO-8601 strings. Naive values are taken as UTC.
    Returns ``None`` when the value cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
            return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        return None
    ts = float(value)
    if ts >= _MS_THRESHOLD:
        ts /= 1000.0
    try:
        return datetime.fromtimestamp(ts, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


FeedTimestamp = Annotated[datetime | None, BeforeValidator(parse_feed_timestamp)]
"""Annotated type that coerces feed timestamps (ISO or epoch) to UTC datetimes."""


def to_epoch_ms(value: datetime) -> int:
    return int(round(value.timestamp() * 1000))


class TrainsBaseModel(BaseModel):
    """Base for train feed models.

    Handles:
    * camelCase → snake_case via ``alias_generator=to_camel``
    * placeholder values (``""``, ``"--"``, NaN) → dropped so
      the field default is used instead
    * Stashes the original record in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original feed record."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_feed_values(cls, values: Any) -> Any:
        """Strip placeholder values and stash the raw record."""
        if not isinstance(values, dict):
            return values
        cleaned = TrainsBaseModel._clean_dict(values)
        # A feed field named "raw" must not shadow the stash.
        cleaned["raw"] = dict(values)
        return cleaned
