"""Poll cycle results handed to the presentation layer."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pytrains.models.train import TrainState


class CycleResult(BaseModel):
    """Outcome of one fetch-reconcile-evict pass.

    On failure (``ok=False``) ``trains`` is the unchanged table from before
    the cycle and ``evicted`` is empty.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool = True
    trains: dict[str, TrainState] = Field(default_factory=dict)
    evicted: frozenset[str] = Field(default_factory=frozenset)
    meta: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None
    dropped: int = 0
    completed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("completed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
