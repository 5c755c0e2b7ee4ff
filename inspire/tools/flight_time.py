"""Great-circle flight-time heuristic. No schedule data is ever queried."""
from __future__ import annotations

import math
import re
from functools import lru_cache
from typing import Dict, NamedTuple, Optional, Tuple

EARTH_RADIUS_KM = 6371.0
CRUISE_KMH = 800.0
TAXI_CLIMB_HOURS = 0.7


class Coords(NamedTuple):
    lat: float
    lon: float


# Departure points the quiz offers, keyed by lowercase city with IATA aliases.
KNOWN_ORIGINS: Dict[str, Tuple[Coords, Tuple[str, ...]]] = {
    "london": (Coords(51.5072, -0.1276), ("lon", "lhr", "lgw", "stn", "ltn")),
    "manchester": (Coords(53.4794, -2.2453), ("man",)),
    "edinburgh": (Coords(55.9533, -3.1883), ("edi",)),
    "dublin": (Coords(53.3498, -6.2603), ("dub",)),
}


def haversine_km(a: Coords, b: Coords) -> float:
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


@lru_cache(maxsize=1024)
def _estimate(o_lat: float, o_lon: float, d_lat: float, d_lon: float) -> float:
    return haversine_km(Coords(o_lat, o_lon), Coords(d_lat, d_lon)) / CRUISE_KMH + TAXI_CLIMB_HOURS


def estimate_flight_hours(origin: Coords, dest: Coords) -> float:
    """Distance / cruise speed plus a fixed allowance, memoized on 3dp coordinates."""
    return _estimate(round(origin.lat, 3), round(origin.lon, 3), round(dest.lat, 3), round(dest.lon, 3))


def resolve_origin(origin: Optional[str]) -> Optional[Coords]:
    """Match e.g. ``"London (LON)"``, ``"manchester"`` or ``"DUB"``."""
    if not origin:
        return None
    tokens = set(re.findall(r"[a-z]+", origin.lower()))
    for city, (coords, codes) in KNOWN_ORIGINS.items():
        if city in tokens or tokens.intersection(codes):
            return coords
    return None
