from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

from pytrains.config import RouteOverride, SpeedPolicy, TrainsConfig
from pytrains.exceptions import TrainsConfigError
from pytrains.ingestion.normalize import (
    canonical_category,
    entity_key,
    is_admissible,
    is_finite_number,
    safe_float,
)
from pytrains.ingestion.records import normalize_record, record_key

_OBSERVED_AT = datetime(2024, 5, 1, 8, 0, tzinfo=UTC)


def _raw(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "trainNo": "1012",
        "product": "Pågatåg",
        "operator": "Skånetrafiken",
        "to": "Malmö C",
        "lat": 55.6,
        "lon": 13.0,
        "bearing": 180,
        "speed": 87,
        "canceled": False,
        "timestamp": "2024-05-01T07:59:30Z",
        "depDate": "2024-05-01",
    }
    record.update(overrides)
    return record


def test_safe_float_rejects_placeholders() -> None:
    assert safe_float("--") is None
    assert safe_float("") is None
    assert safe_float(None) is None
    assert safe_float(True) is None
    assert safe_float(float("nan")) is None
    assert safe_float("12.5") == 12.5


def test_is_finite_number_rejects_strings_and_bools() -> None:
    assert is_finite_number(59.3)
    assert is_finite_number(18)
    assert not is_finite_number("59.3")
    assert not is_finite_number(True)
    assert not is_finite_number(math.inf)
    assert not is_finite_number(float("nan"))


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "not a record",
        {"lat": 55.6, "lon": 13.0},
        {"trainNo": "", "lat": 55.6, "lon": 13.0},
        {"trainNo": 0, "lat": 55.6},
        {"trainNo": "1012", "lat": "55.6", "lon": 13.0},
        {"trainNo": "1012", "lat": 55.6, "lon": float("nan")},
    ],
)
def test_inadmissible_records(raw: object) -> None:
    assert not is_admissible(raw)
    assert normalize_record(raw, TrainsConfig(), _OBSERVED_AT) is None


def test_numeric_train_number_is_admissible() -> None:
    record = normalize_record(_raw(trainNo=1012), TrainsConfig(), _OBSERVED_AT)
    assert record is not None
    assert record.train_no == "1012"
    assert record.train_number == 1012


def test_entity_key_combines_date_and_number() -> None:
    assert entity_key("2024-05-01", "101") == "2024-05-01_101"
    assert entity_key(None, "101") == "_101"


def test_same_number_on_different_dates_gets_different_keys() -> None:
    config = TrainsConfig()
    first = normalize_record(_raw(depDate="2024-05-01"), config, _OBSERVED_AT)
    second = normalize_record(_raw(depDate="2024-05-02"), config, _OBSERVED_AT)
    assert first is not None and second is not None
    assert record_key(first) != record_key(second)


def test_canonical_category_is_case_insensitive() -> None:
    aliases = TrainsConfig().category_aliases
    assert canonical_category("pågatåg", aliases) == "Pågatågen"
    assert canonical_category("  Tåg i Bergslagen ", aliases) == "TiB"
    assert canonical_category("Unknown Rail", aliases) == "Unknown Rail"
    assert canonical_category(None, aliases) is None


def test_normalize_canonicalizes_product() -> None:
    record = normalize_record(_raw(), TrainsConfig(), _OBSERVED_AT)
    assert record is not None
    assert record.product == "Pågatågen"
    assert record.speed == 87


def test_missing_product_falls_back_to_operator() -> None:
    record = normalize_record(_raw(product=None, operator="Norrtåg"), TrainsConfig(), _OBSERVED_AT)
    assert record is not None
    assert record.product == "Norrtåg"


def test_reserved_band_routes_by_parity() -> None:
    config = TrainsConfig()
    odd = normalize_record(_raw(trainNo="7701", product="SJ", to="?"), config, _OBSERVED_AT)
    even = normalize_record(_raw(trainNo="7702", product="SJ", to="?"), config, _OBSERVED_AT)
    outside = normalize_record(_raw(trainNo="7800", product="SJ", to="Uppsala C"), config, _OBSERVED_AT)

    assert odd is not None and even is not None and outside is not None
    assert odd.product == even.product == "Arlanda Express"
    assert odd.to == "Arlanda C"
    assert even.to == "Stockholm C"
    assert outside.product == "SJ"
    assert outside.to == "Uppsala C"


def test_custom_route_override() -> None:
    config = TrainsConfig(
        route_overrides=(
            RouteOverride(first=100, last=199, category="Shuttle", odd_destination="North", even_destination="South"),
        )
    )
    record = normalize_record(_raw(trainNo="150"), config, _OBSERVED_AT)
    assert record is not None
    assert (record.product, record.to) == ("Shuttle", "South")


def test_speed_sentinel_becomes_unknown() -> None:
    config = TrainsConfig()
    pendel = normalize_record(_raw(product="Pendeltåg", speed=0), config, _OBSERVED_AT)
    other = normalize_record(_raw(product="Västtåg", speed=0), config, _OBSERVED_AT)

    assert pendel is not None and other is not None
    assert pendel.product == "SL Pendeltåg"
    assert pendel.speed is None
    assert other.speed == 0


def test_missing_timestamp_uses_poll_time() -> None:
    record = normalize_record(_raw(timestamp=None), TrainsConfig(), _OBSERVED_AT)
    assert record is not None
    assert record.timestamp == _OBSERVED_AT


def test_unparseable_timestamp_uses_poll_time() -> None:
    record = normalize_record(_raw(timestamp="yesterday-ish"), TrainsConfig(), _OBSERVED_AT)
    assert record is not None
    assert record.timestamp == _OBSERVED_AT


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRAINS_WORKER_URL", "https://example.invalid/trains")
    monkeypatch.setenv("TRAINS_REFRESH_INTERVAL", "2.5")
    monkeypatch.setenv("TRAINS_SPEED_TOLERANCE", "1.5")
    monkeypatch.setenv("TRAINS_REUSE_WINDOW_MS", "60000")

    config = TrainsConfig.from_env(request_timeout=3.0)

    assert config.worker_url == "https://example.invalid/trains"
    assert config.refresh_interval == 2.5
    assert config.request_timeout == 3.0
    assert config.speed.ceiling_tolerance == 1.5
    assert config.speed.reuse_window_ms == 60_000
    assert config.speed.history_capacity == 6


def test_config_from_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRAINS_REFRESH_INTERVAL", "soon")
    with pytest.raises(TrainsConfigError):
        TrainsConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"history_capacity": 1},
        {"ceiling_tolerance": 0.9},
        {"smoothing_weight": 1.5},
        {"reuse_window_ms": -1},
    ],
)
def test_speed_policy_validation(kwargs: dict[str, object]) -> None:
    with pytest.raises(TrainsConfigError):
        SpeedPolicy(**kwargs)  # type: ignore[arg-type]


def test_non_positive_interval_rejected() -> None:
    with pytest.raises(TrainsConfigError):
        TrainsConfig(refresh_interval=0)


def test_ceiling_lookup_falls_back_to_default() -> None:
    policy = SpeedPolicy()
    assert policy.ceiling_for("Västtågen") == 160.0
    assert policy.ceiling_for("Mystery Express") == 250.0
    assert policy.ceiling_for(None) == 250.0
