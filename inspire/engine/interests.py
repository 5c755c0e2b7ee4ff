"""Map free-text interests and generator themes onto canonical tags."""
from __future__ import annotations

import re
from typing import Iterable, List, Pattern, Tuple

from inspire.schemas import DestinationType

# Evaluated top to bottom; one phrase may yield several tags.
INTEREST_PATTERNS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"\bbeach|\bcoast|seaside|\bisland|\bsand(y|s)?\b"), "beach"),
    (re.compile(r"\bsun\b|sunshine|sunny|\bwarm"), "sun"),
    (re.compile(r"all[\s-]?inclusive|allinclusive|\bresort"), "all_inclusive"),
    (re.compile(r"water\s?sport|\bsnorkel|\bdiv(e|es|ing)\b|\bsurf|\bsail|\bkayak"), "water_sports"),
    (re.compile(r"\bhik(e|es|ing)\b|\btrek|\btrails?\b|\bwalking"), "hiking"),
    (re.compile(r"\bmountain|\balp(s|ine)\b|\bvolcano|\bpeaks?\b"), "mountains"),
    (re.compile(r"wildlife|\bsafari|\banimal|\bbird|\bwhale|\bdolphin"), "wildlife"),
    (re.compile(r"\bnature|\boutdoor|national park|\blakes?\b|\bforest|\blandscape|\bfjord"), "nature"),
    (re.compile(r"\badventure|\bthrill|\bextreme"), "adventure"),
    (re.compile(r"\bmuseum|\bgaller(y|ies)\b|\bart\b"), "museums"),
    (re.compile(r"performing arts|\bopera\b|\btheat(re|er)|\bconcert|classical music"), "performing_arts"),
    (re.compile(r"\bhistor|\bheritage|\bancient|\bruins?\b|\bcastle|\barchaeolog"), "history"),
    (re.compile(r"\bcultur|\btradition|\barchitecture"), "culture"),
    (re.compile(r"\bfood|\bdrink|\bcuisine|\bgastronom|\bculinary|\bwine|\btapas\b|\bdining"), "food"),
    (re.compile(r"\bmarket|\bsouks?\b|\bbazaar"), "markets"),
    (re.compile(r"\bnightlife|\bpart(y|ies)\b|\bbars?\b|\bclubbing"), "nightlife"),
    (re.compile(r"\bshop"), "shopping"),
    (re.compile(r"\bphoto"), "photography"),
    (re.compile(r"\bcit(y|ies)\b|\burban\b|city break"), "city"),
    (re.compile(r"\bfamil(y|ies)\b|\bkids?\b|\bchild"), "family"),
    (re.compile(r"\bromanc|\bromantic|\bhoneymoon|\bcouples?\b"), "romance"),
    (re.compile(r"\bspas?\b|\bwellness|\bthermal|\bhammam"), "spa"),
    (re.compile(r"\brelax|\bchill(ed|ing|out)?\b|\bunwind|\bslow\b"), "relaxation"),
    (re.compile(r"less crowded|\buncrowded|\bquiet|off the beaten|hidden gem|second city"), "uncrowded"),
]

CANONICAL_TAGS: Tuple[str, ...] = tuple(dict.fromkeys(tag for _, tag in INTEREST_PATTERNS))

# Interests that imply the shortlist should contain at least one destination of a type.
INTEREST_TYPE_REQUIREMENTS: List[Tuple[str, DestinationType]] = [
    ("beach", DestinationType.BEACH),
    ("nature", DestinationType.NATURE),
    ("hiking", DestinationType.NATURE),
    ("mountains", DestinationType.NATURE),
    ("wildlife", DestinationType.NATURE),
    ("museums", DestinationType.CULTURE),
    ("culture", DestinationType.CULTURE),
    ("history", DestinationType.CULTURE),
    ("performing_arts", DestinationType.CULTURE),
    ("city", DestinationType.CITY),
    ("nightlife", DestinationType.CITY),
    ("shopping", DestinationType.CITY),
]


def classify(text: str) -> List[str]:
    """Return canonical tags for one phrase, in table order."""
    lowered = re.sub(r"[_\-&]+", " ", (text or "").lower())
    lowered = re.sub(r"\s+", " ", lowered).strip()
    if not lowered:
        return []
    return [tag for pattern, tag in INTEREST_PATTERNS if pattern.search(lowered)]


def canonical_interests(values: Iterable[str]) -> List[str]:
    tags: List[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        for tag in classify(value):
            if tag not in tags:
                tags.append(tag)
    return tags


def required_types(interests: Iterable[str]) -> List[DestinationType]:
    wanted = set(interests)
    types: List[DestinationType] = []
    for tag, dest_type in INTEREST_TYPE_REQUIREMENTS:
        if tag in wanted and dest_type not in types:
            types.append(dest_type)
    return types
