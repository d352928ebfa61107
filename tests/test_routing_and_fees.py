"""Distance lookup, haversine fallback and delivery fee formula."""

from decimal import Decimal
from pathlib import Path

import pytest
import requests
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from campus_delivery.db.base import Base
from campus_delivery.schemas.checkout import Coordinate
from campus_delivery.services import routing
from campus_delivery.services.delivery_fee import calculate_delivery_fee_details, compute_delivery_fee
from campus_delivery.services.routing import (
    RouteUnavailableError,
    format_distance,
    haversine_km,
    street_distance_km,
)

# 0.0207 degrees of latitude is 2.3 km along a meridian.
PICKUP = (33.0, 73.0)
DROPOFF = (33.0207, 73.0)


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


class FakeResponse:
    def __init__(self, payload: dict, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> dict:
        return self._payload


def test_haversine_along_meridian() -> None:
    assert haversine_km(*PICKUP, *DROPOFF) == 2.3
    assert haversine_km(*PICKUP, *PICKUP) == 0.0


def test_routing_service_distance_is_used_when_available(monkeypatch) -> None:
    captured: dict = {}

    def fake_get(url, params=None, timeout=None):
        captured["url"] = url
        captured["params"] = params
        return FakeResponse({"code": "Ok", "routes": [{"distance": 4249.0}]})

    monkeypatch.setattr(routing.requests, "get", fake_get)

    assert street_distance_km(*PICKUP, *DROPOFF) == 4.2
    assert captured["url"].endswith("/route/v1/driving/73.0,33.0;73.0,33.0207")
    assert captured["params"] == {"overview": "false"}


def test_non_ok_routing_code_falls_back_to_haversine(monkeypatch) -> None:
    monkeypatch.setattr(routing.requests, "get", lambda *a, **k: FakeResponse({"code": "NoRoute", "routes": []}))

    assert street_distance_km(*PICKUP, *DROPOFF) == 2.3


def test_http_error_falls_back_to_haversine(monkeypatch) -> None:
    monkeypatch.setattr(routing.requests, "get", lambda *a, **k: FakeResponse({}, status_code=503))

    assert street_distance_km(*PICKUP, *DROPOFF) == 2.3


def test_unreachable_routing_service_falls_back_to_haversine() -> None:
    assert street_distance_km(*PICKUP, *DROPOFF) == 2.3


@pytest.mark.parametrize(
    "coords",
    [(95.0, 73.0, 33.0, 73.0), (33.0, 181.0, 33.0, 73.0), (float("nan"), 73.0, 33.0, 73.0), (33.0, 73.0, None, 73.0)],
)
def test_malformed_coordinates_raise(coords) -> None:
    with pytest.raises(RouteUnavailableError):
        street_distance_km(*coords)


def test_fee_formula_matches_documented_scenario() -> None:
    assert compute_delivery_fee(2.3, Decimal("75"), Decimal("25")) == Decimal("132.50")


def test_fee_is_non_decreasing_in_distance() -> None:
    fees = [compute_delivery_fee(km / 10, Decimal("75"), Decimal("25")) for km in range(0, 200)]
    assert fees == sorted(fees)


def test_fee_details_with_routing_unreachable_use_default_settings(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "test_fee.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    with testing_session_local() as db:
        details = calculate_delivery_fee_details(
            db,
            Coordinate(lat=PICKUP[0], lng=PICKUP[1]),
            Coordinate(lat=DROPOFF[0], lng=DROPOFF[1]),
        )

    assert details.distance_km == 2.3
    assert details.base_fee == Decimal("75")
    assert details.per_km_rate == Decimal("25")
    assert details.delivery_fee == Decimal("132.50")


def test_format_distance() -> None:
    assert format_distance(0.85) == "850m"
    assert format_distance(2.3) == "2.3km"
