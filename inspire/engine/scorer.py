"""Preference scoring for candidates that survived the hard filters."""
from __future__ import annotations

import zlib
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple

from inspire.schemas import Candidate, Region, TravelGroup
from inspire.engine.policy import SelectionRequest, jitter_amplitude
from inspire.engine.recency import RecencyCache

BASE_SCORE = 1.0
INTEREST_WEIGHT = 1.0
NO_INTEREST_BASELINE = 0.3
SEASON_BONUS = 0.15
PROXIMITY_BONUS = 0.05
PROXIMITY_BAND = 0.65  # bonus applies from 65% of the user's ceiling up to the ceiling
RECENCY_PENALTY = 0.2
UNKNOWN_HOURS_PENALTY = 0.05
INCOMPLETE_HIGHLIGHTS_PENALTY = 0.2

GROUP_AFFINITY: Dict[TravelGroup, Tuple[Tuple[str, float], ...]] = {
    TravelGroup.FAMILY: (("family", 0.10), ("beach", 0.05), ("wildlife", 0.05)),
    TravelGroup.COUPLE: (("romance", 0.10), ("food", 0.05), ("spa", 0.05)),
    TravelGroup.FRIENDS: (("nightlife", 0.10), ("adventure", 0.05), ("water_sports", 0.05)),
    TravelGroup.SOLO: (("culture", 0.08), ("history", 0.05), ("hiking", 0.05)),
}


@dataclass
class ScoredCandidate:
    candidate: Candidate
    score: float
    index: int
    components: Dict[str, float] = field(default_factory=dict)

    @property
    def key(self) -> Tuple[str, str]:
        return self.candidate.key

    @property
    def region(self) -> Region:
        return self.candidate.region

    def score_without_unknown_penalty(self) -> float:
        return self.score - self.components.get("unknown_hours", 0.0)


def seeded_jitter(seed: int, index: int, amplitude: float) -> float:
    """Pure function of ``(seed, index)`` in ``[-amplitude, amplitude]``."""
    mix = zlib.crc32(f"{seed}:{index}".encode("utf-8")) & 0xFFFFFFFF
    return (mix / 0xFFFFFFFF * 2.0 - 1.0) * amplitude


def interest_overlap(candidate: Candidate, interests: AbstractSet[str]) -> float:
    if not interests:
        return NO_INTEREST_BASELINE
    return len(set(candidate.themes) & set(interests)) / len(interests)


def group_bonus(candidate: Candidate, group: TravelGroup) -> float:
    themes = set(candidate.themes)
    return max((bonus for tag, bonus in GROUP_AFFINITY.get(group, ()) if tag in themes), default=0.0)


def proximity_bonus(candidate: Candidate, user_hours: float) -> float:
    hours = candidate.approx_nonstop_hours
    if hours is None:
        return 0.0
    return PROXIMITY_BONUS if user_hours * PROXIMITY_BAND <= hours <= user_hours else 0.0


def score_candidate(
    candidate: Candidate,
    index: int,
    *,
    request: SelectionRequest,
    recency: Optional[RecencyCache] = None,
    highlights_repaired: bool = False,
) -> ScoredCandidate:
    components: Dict[str, float] = {
        "base": BASE_SCORE,
        "interests": INTEREST_WEIGHT * interest_overlap(candidate, request.interests),
        "season": SEASON_BONUS if request.season is not None and request.season in candidate.best_seasons else 0.0,
        "group": group_bonus(candidate, request.group),
        "proximity": proximity_bonus(candidate, request.user_hours),
        "recency": -RECENCY_PENALTY if recency is not None and candidate.key in recency else 0.0,
        "unknown_hours": -UNKNOWN_HOURS_PENALTY if candidate.approx_nonstop_hours is None else 0.0,
        "highlights": (
            -INCOMPLETE_HIGHLIGHTS_PENALTY
            if highlights_repaired or len(candidate.highlights) != 3
            else 0.0
        ),
        "jitter": seeded_jitter(request.seed, index, jitter_amplitude(request.user_hours)),
    }
    return ScoredCandidate(candidate=candidate, score=sum(components.values()), index=index, components=components)


def score_candidates(
    candidates: Sequence[Candidate],
    *,
    request: SelectionRequest,
    recency: Optional[RecencyCache] = None,
    repaired_keys: AbstractSet[Tuple[str, str]] = frozenset(),
    start_index: int = 0,
) -> List[ScoredCandidate]:
    """Score in input order; ``index`` feeds the jitter and breaks ties."""
    return [
        score_candidate(
            candidate,
            start_index + offset,
            request=request,
            recency=recency,
            highlights_repaired=candidate.key in repaired_keys,
        )
        for offset, candidate in enumerate(candidates)
    ]


def rank(scored: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    """Highest score first; equal scores keep input order."""
    return sorted(scored, key=lambda item: -item.score)
