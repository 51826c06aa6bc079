"""Normalization helpers.

Centralizes defensive parsing, identity keying and category handling.
Nothing here imports models, so models can depend on it freely.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def is_finite_number(value: Any) -> bool:
    """Return True for real ints/floats that are finite.

    Numeric strings and booleans are *not* numbers here: a feed that sends
    coordinates as text is treated as malformed.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_admissible(raw: Any) -> bool:
    """Whether a raw feed record carries a usable identity and position."""
    if not isinstance(raw, Mapping):
        return False
    train_no = raw.get("trainNo")
    if train_no is None or isinstance(train_no, bool) or safe_str(train_no) is None:
        return False
    return is_finite_number(raw.get("lat")) and is_finite_number(raw.get("lon"))


def entity_key(dep_date: str | None, train_no: str) -> str:
    """Stable identity for one run: operational date plus train number."""
    return f"{dep_date or ''}_{train_no}"


def canonical_category(name: str | None, aliases: Mapping[str, str]) -> str | None:
    """Map a feed product name onto its canonical display name.

    Lookup is case-insensitive; unknown names pass through trimmed.
    """
    text = safe_str(name)
    if text is None:
        return None
    return aliases.get(text.lower(), text)


def is_speed_sentinel(category: str | None, speed: float | None, sentinels: Mapping[str, float]) -> bool:
    """Whether *speed* is the placeholder a product uses for "unknown"."""
    if category is None or speed is None:
        return False
    sentinel = sentinels.get(category)
    return sentinel is not None and speed == sentinel
