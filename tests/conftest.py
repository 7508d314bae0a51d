"""Shared fixtures."""

from datetime import datetime

import matplotlib
import pytest
from pytz import utc

matplotlib.use("Agg")

from sunroute.models import FlightPlan, GeoPoint  # noqa: E402

JFK = GeoPoint(lat=40.6413, lng=-73.7781)
LHR = GeoPoint(lat=51.4700, lng=-0.4543)


@pytest.fixture
def jfk() -> GeoPoint:
    return JFK


@pytest.fixture
def lhr() -> GeoPoint:
    return LHR


@pytest.fixture
def evening_departure() -> datetime:
    """18:30 New York time on the June solstice."""
    return utc.localize(datetime(2026, 6, 21, 22, 30))


@pytest.fixture
def transatlantic_plan(jfk, lhr, evening_departure) -> FlightPlan:
    return FlightPlan(
        departure=jfk,
        arrival=lhr,
        departure_instant=evening_departure,
        cruise_speed_kmh=750.0,
    )
