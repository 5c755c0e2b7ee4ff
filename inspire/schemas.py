from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ------- Enums -------
class Region(str, Enum):
    EUROPE = "europe"
    NORTH_AFRICA = "north_africa"
    ATLANTIC_ISLANDS = "atlantic_islands"
    MIDDLE_EAST = "middle_east"
    SUB_SAHARAN_AFRICA = "sub_saharan_africa"
    NORTH_AMERICA = "north_america"
    CARIBBEAN = "caribbean"
    CENTRAL_AMERICA = "central_america"
    SOUTH_AMERICA = "south_america"
    SOUTH_ASIA = "south_asia"
    INDIAN_OCEAN = "indian_ocean"
    SOUTHEAST_ASIA = "southeast_asia"
    EAST_ASIA = "east_asia"
    OCEANIA = "oceania"
    UNKNOWN = "unknown"


class DestinationType(str, Enum):
    CITY = "city"
    BEACH = "beach"
    NATURE = "nature"
    CULTURE = "culture"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class TravelGroup(str, Enum):
    SOLO = "solo"
    COUPLE = "couple"
    FAMILY = "family"
    FRIENDS = "friends"


class ShortlistMode(str, Enum):
    LIVE = "live"
    SAMPLE = "sample"
    ERROR_FALLBACK = "error-fallback"


DEFAULT_FLIGHT_HOURS = 8.0
MIN_FLIGHT_HOURS = 1.0
MAX_FLIGHT_HOURS = 20.0


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return []


# ------- Request models -------
class Preferences(BaseModel):
    """Quiz answers. Every field falls back to its default instead of failing."""

    model_config = ConfigDict(extra="ignore")

    flight_time_hours: float = DEFAULT_FLIGHT_HOURS
    duration: Optional[str] = None
    group: TravelGroup = TravelGroup.COUPLE
    interests: List[str] = Field(default_factory=list)
    season: Optional[Season] = None  # None == "flexible"

    @field_validator("flight_time_hours", mode="before")
    @classmethod
    def _coerce_hours(cls, value: Any) -> float:
        try:
            hours = float(value)
        except (TypeError, ValueError):
            return DEFAULT_FLIGHT_HOURS
        if hours != hours:  # NaN
            return DEFAULT_FLIGHT_HOURS
        return min(MAX_FLIGHT_HOURS, max(MIN_FLIGHT_HOURS, hours))

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value.strip().lower()
        return None

    @field_validator("group", mode="before")
    @classmethod
    def _coerce_group(cls, value: Any) -> TravelGroup:
        key = str(value or "").strip().lower()
        try:
            return TravelGroup(key)
        except ValueError:
            return TravelGroup.COUPLE

    @field_validator("interests", mode="before")
    @classmethod
    def _coerce_interests(cls, value: Any) -> List[str]:
        return _as_str_list(value)

    @field_validator("season", mode="before")
    @classmethod
    def _coerce_season(cls, value: Any) -> Optional[Season]:
        key = str(value or "").strip().lower()
        if key == "fall":
            key = "autumn"
        try:
            return Season(key)
        except ValueError:
            return None


class ItineraryTarget(BaseModel):
    model_config = ConfigDict(extra="ignore")

    city: str
    country: str = ""
    duration: Optional[str] = None


class InspireRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    origin: str = ""
    preferences: Preferences = Field(default_factory=Preferences)
    exclude: List[str] = Field(default_factory=list)
    build_itinerary_for: Optional[ItineraryTarget] = Field(
        default=None,
        validation_alias=AliasChoices("buildItineraryFor", "build_itinerary_for"),
    )

    @field_validator("origin", mode="before")
    @classmethod
    def _coerce_origin(cls, value: Any) -> str:
        return str(value).strip() if isinstance(value, str) else ""

    @field_validator("preferences", mode="before")
    @classmethod
    def _coerce_preferences(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @field_validator("exclude", mode="before")
    @classmethod
    def _coerce_exclude(cls, value: Any) -> List[str]:
        return _as_str_list(value)

    @field_validator("build_itinerary_for", mode="before")
    @classmethod
    def _coerce_target(cls, value: Any) -> Any:
        if isinstance(value, dict) and str(value.get("city") or "").strip():
            return value
        return None


# ------- Engine / response models -------
class Candidate(BaseModel):
    """A normalized destination proposal."""

    city: str
    country: str
    region: Region = Region.UNKNOWN
    type: DestinationType = DestinationType.CITY
    themes: List[str] = Field(default_factory=list)
    best_seasons: List[Season] = Field(default_factory=list)
    approx_nonstop_hours: Optional[float] = None
    summary: str = ""
    highlights: List[str] = Field(default_factory=list)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.city.lower(), self.country.lower())


class ShortlistMeta(BaseModel):
    mode: ShortlistMode
    degraded: bool = False
    requested: int = 5
    returned: int = 0
    seed: Optional[int] = None


class ShortlistResponse(BaseModel):
    meta: ShortlistMeta
    top5: List[Candidate] = Field(default_factory=list)


class ItineraryDay(BaseModel):
    day: int
    title: str = ""
    morning: str = ""
    afternoon: str = ""
    evening: str = ""


class ItineraryResponse(BaseModel):
    mode: ShortlistMode
    city: str
    country: str = ""
    days: List[ItineraryDay] = Field(default_factory=list)
