"""Static safety exclusions (restricted countries and cities)."""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Optional

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

DEFAULT_BLOCKED_COUNTRIES = (
    "afghanistan",
    "belarus",
    "burkina faso",
    "central african republic",
    "haiti",
    "iran",
    "iraq",
    "lebanon",
    "libya",
    "mali",
    "myanmar",
    "niger",
    "north korea",
    "palestine",
    "russia",
    "somalia",
    "south sudan",
    "sudan",
    "syria",
    "ukraine",
    "venezuela",
    "yemen",
)

DEFAULT_BLOCKED_CITIES = (
    "gaza",
    "kabul",
    "mogadishu",
    "pyongyang",
    "tripoli",
    "sanaa",
    "damascus",
    "port-au-prince",
    "caracas",
    "moscow",
    "minsk",
    "kyiv",
    "tehran",
    "baghdad",
    "beirut",
    "khartoum",
)


def _norm(value: Any) -> str:
    return re.sub(r"\s+", " ", str(value or "")).strip().lower()


@dataclass(frozen=True)
class SafetyList:
    blocked_countries: FrozenSet[str]
    blocked_cities: FrozenSet[str]

    @classmethod
    def from_iterables(cls, countries: Iterable[str], cities: Iterable[str]) -> "SafetyList":
        return cls(
            blocked_countries=frozenset(_norm(c) for c in countries if _norm(c)),
            blocked_cities=frozenset(_norm(c) for c in cities if _norm(c)),
        )

    def is_restricted(self, city: Any, country: Any) -> bool:
        return _norm(country) in self.blocked_countries or _norm(city) in self.blocked_cities


def default_safety_list() -> SafetyList:
    return SafetyList.from_iterables(DEFAULT_BLOCKED_COUNTRIES, DEFAULT_BLOCKED_CITIES)


def load_safety_list(path: Optional[str] = None) -> SafetyList:
    """Load ``{"countries": [...], "cities": [...]}`` from ``path``.

    Falls back to the built-in lists when no path is given or the file is
    unreadable, so a bad deployment file never disables the exclusions.
    """
    if not path:
        return default_safety_list()
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Unable to read safety list from %s; using built-in lists", path, exc_info=True)
        return default_safety_list()
    if not isinstance(data, dict):
        logger.warning("Safety list %s is not an object; using built-in lists", path)
        return default_safety_list()
    countries = [c for c in data.get("countries") or [] if isinstance(c, str)]
    cities = [c for c in data.get("cities") or [] if isinstance(c, str)]
    logger.info("Loaded safety list from %s (%d countries, %d cities)", path, len(countries), len(cities))
    return SafetyList.from_iterables(countries, cities)
