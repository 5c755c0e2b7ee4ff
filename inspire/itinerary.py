# inspire/itinerary.py
from __future__ import annotations

import logging
import os
from typing import Any, List, Optional

from inspire.schemas import (
    ItineraryDay,
    ItineraryResponse,
    ItineraryTarget,
    Preferences,
    ShortlistMode,
)
from inspire.engine.policy import days_from_duration
from inspire.llm import GeneratorError, extract_json_payload

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

ITINERARY_SYSTEM = """You are a concise trip planner. Return ONLY valid JSON, no commentary."""

ITINERARY_TEMPLATE = """Plan a {days}-day trip to {place} for {group} travellers.
Interests: {interests}. Season: {season}.
Return JSON: {{"days": [{{"day": int, "title": str, "morning": str, "afternoon": str, "evening": str}}]}}
Exactly {days} entries, day numbers 1..{days}. Each slot is one sentence naming a real place or activity.
"""


def _place(target: ItineraryTarget) -> str:
    return f"{target.city}, {target.country}" if target.country else target.city


def build_itinerary_prompt(target: ItineraryTarget, prefs: Preferences, days: int) -> str:
    return ITINERARY_TEMPLATE.format(
        days=days,
        place=_place(target),
        group=prefs.group.value,
        interests=", ".join(prefs.interests) if prefs.interests else "a bit of everything",
        season=prefs.season.value if prefs.season else "flexible",
    )


def template_days(target: ItineraryTarget, days: int) -> List[ItineraryDay]:
    """Generic day plan used when the generator is off or fails."""
    out: List[ItineraryDay] = []
    for n in range(1, days + 1):
        if n == 1:
            out.append(ItineraryDay(
                day=n,
                title=f"Arrive in {target.city}",
                morning="Travel and check in.",
                afternoon=f"Walk the historic centre of {target.city} to get your bearings.",
                evening="Dinner at a local favourite near your stay.",
            ))
        elif n == days:
            out.append(ItineraryDay(
                day=n,
                title="Last look and departure",
                morning="Pick up anything you missed at a local market.",
                afternoon="Head to the airport.",
                evening="",
            ))
        else:
            out.append(ItineraryDay(
                day=n,
                title=f"Exploring {target.city}, day {n}",
                morning="Visit a signature museum or landmark.",
                afternoon="Neighbourhood wander with a long lunch.",
                evening="Sunset viewpoint then dinner.",
            ))
    return out


def _coerce_days(payload: Any, days: int) -> List[ItineraryDay]:
    items = payload.get("days") if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        return []
    out: List[ItineraryDay] = []
    for idx, item in enumerate(items[:days], start=1):
        if not isinstance(item, dict):
            continue
        out.append(ItineraryDay(
            day=idx,
            title=str(item.get("title") or f"Day {idx}").strip(),
            morning=str(item.get("morning") or "").strip(),
            afternoon=str(item.get("afternoon") or "").strip(),
            evening=str(item.get("evening") or "").strip(),
        ))
    return out


async def build_itinerary(
    target: ItineraryTarget,
    prefs: Preferences,
    generator: Optional[Any],
    *,
    model: str,
) -> ItineraryResponse:
    """Day-by-day plan for one destination; templated when the generator cannot help."""
    days = days_from_duration(target.duration or prefs.duration)

    if generator is None or not generator.enabled:
        logger.info("Itinerary for %s from template (generator disabled)", _place(target))
        return ItineraryResponse(
            mode=ShortlistMode.SAMPLE, city=target.city, country=target.country, days=template_days(target, days)
        )

    try:
        raw = await generator.complete(build_itinerary_prompt(target, prefs, days), model=model, system=ITINERARY_SYSTEM)
        plan = _coerce_days(extract_json_payload(raw), days)
    except GeneratorError as exc:
        logger.warning("Itinerary generation failed for %s (%s): %s", _place(target), type(exc).__name__, exc)
        plan = []

    if not plan:
        return ItineraryResponse(
            mode=ShortlistMode.ERROR_FALLBACK,
            city=target.city,
            country=target.country,
            days=template_days(target, days),
        )
    return ItineraryResponse(mode=ShortlistMode.LIVE, city=target.city, country=target.country, days=plan)
