"""Raw feed record → normalized :class:`TrainRecord`.

This is the only place that interprets feed quirks (aliases, reserved
train-number bands, placeholder speeds). Everything downstream keys and
estimates on the record returned here.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from pytrains.config import TrainsConfig
from pytrains.ingestion.normalize import canonical_category, entity_key, is_admissible, is_speed_sentinel
from pytrains.models.train import TrainRecord

_logger = logging.getLogger(__name__)


def record_key(record: TrainRecord) -> str:
    return entity_key(record.dep_date, record.train_no)


def normalize_record(raw: Any, config: TrainsConfig, observed_at: datetime) -> TrainRecord | None:
    """Validate and normalize one raw feed record.

    Returns ``None`` for inadmissible records (missing train number or
    non-numeric coordinates). *observed_at* stands in for a missing or
    unparseable record timestamp.
    """
    if not is_admissible(raw):
        return None

    try:
        record = TrainRecord.model_validate(raw)
    except ValidationError:
        _logger.debug("Dropping unparseable train record", exc_info=True)
        return None

    updates: dict[str, Any] = {}

    category = canonical_category(record.product or record.operator, config.category_aliases)

    number = record.train_number
    if number is not None:
        for override in config.route_overrides:
            if override.applies_to(number):
                category = override.category
                updates["to"] = override.destination_for(number)
                break

    if category != record.product:
        updates["product"] = category

    if is_speed_sentinel(category, record.speed, config.speed_sentinels):
        updates["speed"] = None

    if record.timestamp is None:
        updates["timestamp"] = observed_at

    if not updates:
        return record
    return record.model_copy(update=updates)
