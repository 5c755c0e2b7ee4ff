"""Validate and coerce raw generator records into ``Candidate`` objects.

Nothing in here raises for bad data. Each record either becomes an
``Accepted`` or a ``Dropped`` carrying the reason, so a single malformed
entry never costs the rest of the batch.
"""
from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

from inspire.schemas import Candidate, DestinationType, Region, Season
from inspire.engine.interests import canonical_interests
from inspire.engine.policy import REGION_FLOOR_HOURS
from inspire.engine.safety import SafetyList

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

REQUIRED_HIGHLIGHTS = 3

_REGION_ALIASES: Dict[str, Region] = {
    "western_europe": Region.EUROPE,
    "southern_europe": Region.EUROPE,
    "northern_europe": Region.EUROPE,
    "eastern_europe": Region.EUROPE,
    "central_europe": Region.EUROPE,
    "mediterranean": Region.EUROPE,
    "scandinavia": Region.EUROPE,
    "uk": Region.EUROPE,
    "maghreb": Region.NORTH_AFRICA,
    "canary_islands": Region.ATLANTIC_ISLANDS,
    "canaries": Region.ATLANTIC_ISLANDS,
    "gulf": Region.MIDDLE_EAST,
    "usa": Region.NORTH_AMERICA,
    "us": Region.NORTH_AMERICA,
    "canada": Region.NORTH_AMERICA,
    "east_africa": Region.SUB_SAHARAN_AFRICA,
    "southern_africa": Region.SUB_SAHARAN_AFRICA,
    "latin_america": Region.SOUTH_AMERICA,
    "south_east_asia": Region.SOUTHEAST_ASIA,
    "far_east": Region.EAST_ASIA,
    "australasia": Region.OCEANIA,
    "pacific": Region.OCEANIA,
}

# Continent-level labels; used only when the country gives no better answer.
_GENERIC_REGIONS: Dict[str, Region] = {
    "asia": Region.SOUTH_ASIA,
    "africa": Region.SUB_SAHARAN_AFRICA,
    "americas": Region.NORTH_AMERICA,
}

_COUNTRY_REGIONS: Dict[str, Region] = {
    **{country: Region.EUROPE for country in (
        "albania", "austria", "belgium", "bosnia and herzegovina", "bulgaria", "croatia", "cyprus",
        "czechia", "czech republic", "denmark", "estonia", "finland", "france", "germany", "greece",
        "hungary", "iceland", "ireland", "italy", "latvia", "lithuania", "luxembourg", "malta",
        "montenegro", "netherlands", "north macedonia", "norway", "poland", "portugal", "romania",
        "serbia", "slovakia", "slovenia", "spain", "sweden", "switzerland", "turkey", "türkiye",
        "united kingdom", "uk", "georgia", "armenia",
    )},
    **{country: Region.NORTH_AFRICA for country in ("morocco", "tunisia", "egypt", "algeria")},
    **{country: Region.MIDDLE_EAST for country in (
        "united arab emirates", "uae", "oman", "jordan", "qatar", "bahrain", "saudi arabia", "kuwait", "israel",
    )},
    **{country: Region.SUB_SAHARAN_AFRICA for country in (
        "south africa", "kenya", "tanzania", "namibia", "botswana", "rwanda", "uganda", "ghana",
        "senegal", "zambia", "zimbabwe", "cape verde", "ethiopia", "madagascar",
    )},
    **{country: Region.NORTH_AMERICA for country in ("united states", "usa", "us", "canada")},
    **{country: Region.CARIBBEAN for country in (
        "barbados", "antigua and barbuda", "jamaica", "bahamas", "saint lucia", "grenada",
        "dominican republic", "cuba", "trinidad and tobago", "aruba", "puerto rico",
    )},
    **{country: Region.CENTRAL_AMERICA for country in (
        "mexico", "costa rica", "belize", "guatemala", "panama", "nicaragua",
    )},
    **{country: Region.SOUTH_AMERICA for country in (
        "brazil", "argentina", "chile", "peru", "colombia", "ecuador", "uruguay", "bolivia",
    )},
    **{country: Region.SOUTH_ASIA for country in ("india", "sri lanka", "nepal", "bhutan", "pakistan", "bangladesh")},
    **{country: Region.INDIAN_OCEAN for country in ("maldives", "mauritius", "seychelles", "réunion", "reunion")},
    **{country: Region.SOUTHEAST_ASIA for country in (
        "thailand", "vietnam", "cambodia", "laos", "malaysia", "singapore", "indonesia", "philippines",
    )},
    **{country: Region.EAST_ASIA for country in ("japan", "south korea", "korea", "china", "taiwan", "hong kong")},
    **{country: Region.OCEANIA for country in ("australia", "new zealand", "fiji", "french polynesia")},
}

_TYPE_ALIASES: Dict[str, DestinationType] = {
    "beaches": DestinationType.BEACH,
    "coast": DestinationType.BEACH,
    "island": DestinationType.BEACH,
    "urban": DestinationType.CITY,
    "city_break": DestinationType.CITY,
    "cities": DestinationType.CITY,
    "cultural": DestinationType.CULTURE,
    "history": DestinationType.CULTURE,
    "heritage": DestinationType.CULTURE,
    "outdoors": DestinationType.NATURE,
    "adventure": DestinationType.NATURE,
    "mountains": DestinationType.NATURE,
}

_SEASON_ALIASES: Dict[str, Tuple[Season, ...]] = {
    "fall": (Season.AUTUMN,),
    "year_round": tuple(Season),
    "all_year": tuple(Season),
    "all_year_round": tuple(Season),
    "any": tuple(Season),
}

_FILLER_HIGHLIGHTS = (
    "Wander the old town of {city} and stop wherever the smell of fresh coffee leads",
    "Catch sunset from the best viewpoint in {city} as the lights come on",
    "Browse the main market in {city} for local snacks and handmade crafts",
)


@dataclass(frozen=True)
class Accepted:
    candidate: Candidate
    repaired_highlights: bool = False


@dataclass(frozen=True)
class Dropped:
    reason: str
    raw: Any = None


NormalizeResult = Union[Accepted, Dropped]


@dataclass
class NormalizedBatch:
    candidates: List[Candidate] = field(default_factory=list)
    dropped: List[Dropped] = field(default_factory=list)
    repaired_keys: Set[Tuple[str, str]] = field(default_factory=set)

    def drop_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for item in self.dropped:
            counts[item.reason] = counts.get(item.reason, 0) + 1
        return counts


def collapse(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return re.sub(r"\s+", " ", value).strip()


def _slug(value: Any) -> str:
    return re.sub(r"[\s\-/]+", "_", collapse(value).lower())


def _field(raw: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in raw and raw[name] is not None:
            return raw[name]
    return None


def parse_region(value: Any, country: Any = None) -> Region:
    """Region label first, then the country, then a continent-level label."""
    key = _slug(value)
    try:
        region = Region(key)
    except ValueError:
        region = _REGION_ALIASES.get(key, Region.UNKNOWN)
    if region != Region.UNKNOWN:
        return region
    by_country = _COUNTRY_REGIONS.get(collapse(country).lower())
    if by_country is not None:
        return by_country
    return _GENERIC_REGIONS.get(key, Region.UNKNOWN)


def parse_hours(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = re.search(r"\d+(?:\.\d+)?", value)
        value = match.group(0) if match else None
    try:
        hours = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(hours) or hours <= 0:
        return None
    return hours


def clamp_to_floor(hours: Optional[float], region: Region, floors: Mapping[Region, float] = REGION_FLOOR_HOURS) -> Optional[float]:
    if hours is None:
        return None
    return max(hours, floors.get(region, 0.0))


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [part for part in re.split(r"[,;]", value)]
    return []


def _parse_seasons(value: Any) -> List[Season]:
    seasons: List[Season] = []
    for item in _as_list(value):
        key = _slug(item)
        matched: Tuple[Season, ...]
        try:
            matched = (Season(key),)
        except ValueError:
            matched = _SEASON_ALIASES.get(key, ())
        for season in matched:
            if season not in seasons:
                seasons.append(season)
    return seasons


def _infer_type(themes: List[str]) -> DestinationType:
    tags = set(themes)
    if tags & {"beach", "all_inclusive", "water_sports"}:
        return DestinationType.BEACH
    if tags & {"nature", "hiking", "mountains", "wildlife"}:
        return DestinationType.NATURE
    if tags & {"museums", "history", "culture", "performing_arts"}:
        return DestinationType.CULTURE
    return DestinationType.CITY


def parse_type(value: Any, themes: List[str]) -> DestinationType:
    key = _slug(value)
    try:
        return DestinationType(key)
    except ValueError:
        return _TYPE_ALIASES.get(key) or _infer_type(themes)


def normalize_candidate(
    raw: Any,
    *,
    safety: SafetyList,
    floors: Mapping[Region, float] = REGION_FLOOR_HOURS,
    repair_highlights: bool = False,
) -> NormalizeResult:
    if not isinstance(raw, Mapping):
        return Dropped("not_an_object", raw)

    city = collapse(raw.get("city"))
    country = collapse(raw.get("country"))
    if not city or not country:
        return Dropped("missing_city_or_country", raw)
    if safety.is_restricted(city, country):
        return Dropped("restricted", raw)

    highlights = [collapse(item) for item in _as_list(raw.get("highlights"))]
    highlights = [item for item in highlights if item]
    repaired = False
    if len(highlights) < REQUIRED_HIGHLIGHTS:
        if not repair_highlights:
            return Dropped("incomplete_highlights", raw)
        for filler in _FILLER_HIGHLIGHTS[len(highlights):REQUIRED_HIGHLIGHTS]:
            highlights.append(filler.format(city=city))
        repaired = True
    highlights = highlights[:REQUIRED_HIGHLIGHTS]

    region = parse_region(raw.get("region"), country)
    raw_themes = [item for item in _as_list(raw.get("themes")) if isinstance(item, str)]
    themes = canonical_interests(raw_themes)
    dest_type = parse_type(raw.get("type"), themes)
    seasons = _parse_seasons(_field(raw, "best_seasons", "bestSeasons"))
    hours = clamp_to_floor(parse_hours(_field(raw, "approx_nonstop_hours", "approxNonstopHours")), region, floors)

    candidate = Candidate(
        city=city,
        country=country,
        region=region,
        type=dest_type,
        themes=themes,
        best_seasons=seasons,
        approx_nonstop_hours=round(hours, 2) if hours is not None else None,
        summary=collapse(raw.get("summary")),
        highlights=highlights,
    )
    return Accepted(candidate, repaired_highlights=repaired)


def normalize_candidates(
    raws: Iterable[Any],
    *,
    safety: SafetyList,
    floors: Mapping[Region, float] = REGION_FLOOR_HOURS,
    repair_highlights: bool = False,
    seen: Optional[Set[Tuple[str, str]]] = None,
) -> NormalizedBatch:
    """Normalize a batch, dropping duplicates of keys already in ``seen``."""
    batch = NormalizedBatch()
    known: Set[Tuple[str, str]] = set(seen or ())
    for raw in raws:
        result = normalize_candidate(raw, safety=safety, floors=floors, repair_highlights=repair_highlights)
        if isinstance(result, Dropped):
            batch.dropped.append(result)
            continue
        key = result.candidate.key
        if key in known:
            batch.dropped.append(Dropped("duplicate", raw))
            continue
        known.add(key)
        batch.candidates.append(result.candidate)
        if result.repaired_highlights:
            batch.repaired_keys.add(key)

    if batch.dropped:
        logger.debug("Normalizer dropped %d record(s): %s", len(batch.dropped), batch.drop_counts())
    return batch
