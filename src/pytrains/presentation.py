"""Helpers for map front ends.

Colours, chip labels, logo names and the free-text filter used by the
live map. No state lives here.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from pytrains._constants import DEFAULT_COLOR, PRODUCT_COLORS
from pytrains.models.train import TrainState

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_LOGO_TRANSLATION = str.maketrans({"å": "a", "ä": "a", "ö": "o"})


def color_for_product(product: str | None) -> str:
    if product is None:
        return DEFAULT_COLOR
    return PRODUCT_COLORS.get(product, DEFAULT_COLOR)


def format_chip_text(state: TrainState) -> str:
    """``"Pågatågen 1012 → Malmö C · 87 km/h"``; estimated speeds get a ``~``."""
    train = state.train
    base = f"{train.product or ''} {train.train_no} → {train.to or ''}".strip()
    if state.speed is None:
        return base
    prefix = "~" if state.is_estimated else ""
    return f"{base} · {prefix}{round(state.speed)} km/h"


def logo_file_name(product: str | None, *, extension: str = "png") -> str:
    """File name of a product logo, e.g. ``"krosatagen.png"``."""
    name = (product or "").lower().translate(_LOGO_TRANSLATION)
    name = _NON_ALNUM.sub("-", name).strip("-")
    return f"{name}.{extension}"


def _normalize_query(value: object) -> str:
    return str(value if value is not None else "").lower().strip()


def matches_filter(state: TrainState, query: str | None) -> bool:
    needle = _normalize_query(query)
    if not needle:
        return True
    train = state.train
    haystack = " ".join(
        _normalize_query(part) for part in (train.train_no, train.operator, train.to, train.product)
    )
    return needle in haystack


def filter_trains(states: Mapping[str, TrainState] | Iterable[TrainState], query: str | None) -> list[TrainState]:
    """Trains matching *query*, in table order."""
    values = states.values() if isinstance(states, Mapping) else states
    return [state for state in values if matches_filter(state, query)]
