"""Per-request selection inputs and the policy derived from the flight-time cap."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

from inspire.schemas import (
    DEFAULT_FLIGHT_HOURS,
    InspireRequest,
    Region,
    Season,
    TravelGroup,
)
from inspire.engine.interests import canonical_interests

# Minimum credible non-stop hours from a UK/Ireland departure. Generator
# estimates below these are clamped upward.
REGION_FLOOR_HOURS: Dict[Region, float] = {
    Region.EUROPE: 1.0,
    Region.NORTH_AFRICA: 3.0,
    Region.ATLANTIC_ISLANDS: 3.5,
    Region.MIDDLE_EAST: 5.5,
    Region.SUB_SAHARAN_AFRICA: 6.5,
    Region.NORTH_AMERICA: 7.0,
    Region.CARIBBEAN: 8.0,
    Region.SOUTH_ASIA: 8.5,
    Region.CENTRAL_AMERICA: 9.5,
    Region.INDIAN_OCEAN: 9.5,
    Region.SOUTH_AMERICA: 11.0,
    Region.SOUTHEAST_ASIA: 11.5,
    Region.EAST_ASIA: 11.5,
    Region.OCEANIA: 20.0,
    Region.UNKNOWN: 0.0,
}

LONG_HAUL_REGIONS: FrozenSet[Region] = frozenset(
    region for region, floor in REGION_FLOOR_HOURS.items() if floor >= 5.5
)

LONG_HAUL_THRESHOLD_HOURS = 6.0


@dataclass(frozen=True)
class SelectionRequest:
    user_hours: float = DEFAULT_FLIGHT_HOURS
    group: TravelGroup = TravelGroup.COUPLE
    interests: FrozenSet[str] = frozenset()
    season: Optional[Season] = None
    exclusions: List[str] = field(default_factory=list)
    size: int = 5
    origin: str = ""
    duration: Optional[str] = None
    seed: int = 0

    @classmethod
    def from_inspire(cls, req: InspireRequest, *, size: int = 5, seed: int = 0) -> "SelectionRequest":
        prefs = req.preferences
        return cls(
            user_hours=prefs.flight_time_hours,
            group=prefs.group,
            interests=frozenset(canonical_interests(prefs.interests)),
            season=prefs.season,
            exclusions=list(req.exclude),
            size=size,
            origin=req.origin,
            duration=prefs.duration,
            seed=seed,
        )


@dataclass(frozen=True)
class SelectionPolicy:
    time_buffer: float
    min_plausible_hours_by_region: Dict[Region, float]
    priority_regions: FrozenSet[Region]
    max_same_region_in_result: int
    min_priority_quota: int

    def effective_cap(self, user_hours: float) -> float:
        return user_hours + self.time_buffer

    def floor_for(self, region: Region) -> float:
        return self.min_plausible_hours_by_region.get(region, 0.0)


def derive_policy(user_hours: float) -> SelectionPolicy:
    """Deterministic policy for a flight-time ceiling.

    Longer ceilings get a larger buffer, a higher same-region cap and a
    quota of long-haul regions that are actually reachable within the cap.
    """
    if user_hours <= 4:
        buffer, region_cap = 0.5, 2
    elif user_hours <= 8:
        buffer, region_cap = 0.75, 3
    else:
        buffer, region_cap = 1.0, 4

    cap = user_hours + buffer
    priority: FrozenSet[Region] = frozenset()
    quota = 0
    if user_hours >= LONG_HAUL_THRESHOLD_HOURS:
        priority = frozenset(
            region for region in LONG_HAUL_REGIONS if REGION_FLOOR_HOURS[region] <= cap
        )
        quota = 3 if user_hours >= 10 else 2
        if not priority:
            quota = 0

    return SelectionPolicy(
        time_buffer=buffer,
        min_plausible_hours_by_region=dict(REGION_FLOOR_HOURS),
        priority_regions=priority,
        max_same_region_in_result=region_cap,
        min_priority_quota=quota,
    )


def jitter_amplitude(user_hours: float) -> float:
    """Short-haul pools are small and repetitive, so they get more shuffle."""
    if user_hours <= 3:
        return 0.12
    if user_hours <= 5:
        return 0.08
    if user_hours <= 8:
        return 0.05
    return 0.02


DURATION_DAYS: Dict[str, int] = {
    "weekend-2d": 2,
    "mini-4d": 4,
    "week-7d": 7,
    "two-weeks": 14,
    "two-weeks-14d": 14,
    "fortnight-14d": 14,
}


def days_from_duration(code: Optional[str]) -> int:
    key = (code or "").strip().lower()
    if key.isdigit():
        return min(21, max(1, int(key)))
    return DURATION_DAYS.get(key, 3)
