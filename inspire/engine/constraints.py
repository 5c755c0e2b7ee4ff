"""Hard constraints: safety, user exclusions, and the flight-time cap."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple

from inspire.schemas import Candidate
from inspire.engine.policy import SelectionPolicy, SelectionRequest
from inspire.engine.safety import SafetyList

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False


@dataclass
class FilterOutcome:
    kept: List[Candidate] = field(default_factory=list)
    rejected: List[Tuple[Candidate, str]] = field(default_factory=list)


def exclusion_keys(values: Iterable[str]) -> FrozenSet[str]:
    """Lowercase ``city`` or ``city|country`` keys with tidy whitespace."""
    keys = set()
    for value in values:
        if not isinstance(value, str):
            continue
        parts = [re.sub(r"\s+", " ", part).strip().lower() for part in value.split("|")]
        parts = [part for part in parts if part]
        if parts:
            keys.add("|".join(parts[:2]))
    return frozenset(keys)


def matches_exclusion(candidate: Candidate, keys: FrozenSet[str]) -> bool:
    city, country = candidate.key
    return city in keys or f"{city}|{country}" in keys


def exceeds_cap(candidate: Candidate, cap: float) -> bool:
    hours = candidate.approx_nonstop_hours
    return hours is not None and hours > cap


def apply_constraints(
    candidates: Sequence[Candidate],
    *,
    request: SelectionRequest,
    policy: SelectionPolicy,
    safety: SafetyList,
) -> FilterOutcome:
    """Drop anything restricted, excluded by the user, or known to be too far.

    Unknown hours pass: they are a scoring concern, not a violation.
    """
    keys = exclusion_keys(request.exclusions)
    cap = policy.effective_cap(request.user_hours)
    outcome = FilterOutcome()
    for candidate in candidates:
        if safety.is_restricted(candidate.city, candidate.country):
            outcome.rejected.append((candidate, "restricted"))
        elif matches_exclusion(candidate, keys):
            outcome.rejected.append((candidate, "user_excluded"))
        elif exceeds_cap(candidate, cap):
            outcome.rejected.append((candidate, "over_cap"))
        else:
            outcome.kept.append(candidate)

    if outcome.rejected:
        logger.debug(
            "Constraint filter kept %d of %d (cap %.2fh); rejected: %s",
            len(outcome.kept),
            len(candidates),
            cap,
            ", ".join(f"{c.city}/{c.country}:{reason}" for c, reason in outcome.rejected),
        )
    return outcome


def final_safety_pass(candidates: Sequence[Candidate], safety: SafetyList) -> List[Candidate]:
    """Re-check the outgoing shortlist regardless of how it was assembled."""
    safe: List[Candidate] = []
    for candidate in candidates:
        if safety.is_restricted(candidate.city, candidate.country):
            logger.warning("Removed restricted destination %s, %s from final shortlist", candidate.city, candidate.country)
            continue
        safe.append(candidate)
    return safe
