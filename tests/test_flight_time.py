import pytest

from inspire.tools.flight_time import KNOWN_ORIGINS, Coords, estimate_flight_hours, haversine_km, resolve_origin

PARIS = Coords(48.8566, 2.3522)


def test_haversine_london_paris():
    london = KNOWN_ORIGINS["london"][0]
    assert haversine_km(london, PARIS) == pytest.approx(344, abs=5)


def test_estimate_adds_fixed_allowance():
    london = KNOWN_ORIGINS["london"][0]
    assert estimate_flight_hours(london, london) == pytest.approx(0.7)
    assert 1.0 < estimate_flight_hours(london, PARIS) < 1.3


@pytest.mark.parametrize(
    "origin,expected",
    [
        ("London (LHR)", "london"),
        ("manchester", "manchester"),
        ("Departing EDI", "edinburgh"),
        ("DUB", "dublin"),
    ],
)
def test_resolve_known_origins(origin, expected):
    assert resolve_origin(origin) == KNOWN_ORIGINS[expected][0]


def test_unknown_origin_is_none():
    assert resolve_origin("Paris") is None
    assert resolve_origin("") is None
    assert resolve_origin(None) is None
