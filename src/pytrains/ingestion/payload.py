"""Payload shape handling.

The worker answers either with a bare list of trains or with
``{"meta": {...}, "trains": [...]}``. Anything else is an empty poll.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class TrainsPayload(BaseModel):
    """Envelope for the object-shaped worker response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    trains: list[Any] = Field(...)
    meta: dict[str, Any] = Field(default_factory=dict)


def parse_payload(data: Any) -> tuple[list[Any], dict[str, Any]]:
    """Split a decoded payload into ``(records, meta)``.

    Records are returned as-is; admissibility is checked per record later.
    """
    if isinstance(data, list):
        return list(data), {}
    if not isinstance(data, dict):
        return [], {}
    if not isinstance(data.get("meta"), dict):
        data = {k: v for k, v in data.items() if k != "meta"}
    try:
        envelope = TrainsPayload.model_validate(data)
    except ValidationError:
        return [], {}
    return list(envelope.trains), dict(envelope.meta)
