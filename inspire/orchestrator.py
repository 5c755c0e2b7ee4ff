# inspire/orchestrator.py
from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Set, Tuple

from inspire.schemas import (
    Candidate,
    InspireRequest,
    ShortlistMeta,
    ShortlistMode,
    ShortlistResponse,
)
from inspire.settings import Settings, get_settings
from inspire.llm import (
    CandidateGenerator,
    GeneratorError,
    UpstreamParseError,
    UpstreamTimeout,
    UpstreamTransportError,
    build_candidate_prompt,
)
from inspire.itinerary import build_itinerary
from inspire.data.curated import curated_pool
from inspire.engine.constraints import apply_constraints, final_safety_pass
from inspire.engine.interests import required_types
from inspire.engine.normalizer import NormalizedBatch, normalize_candidates
from inspire.engine.policy import SelectionPolicy, SelectionRequest, derive_policy
from inspire.engine.recency import RecencyCache
from inspire.engine.safety import SafetyList, load_safety_list
from inspire.engine.scorer import ScoredCandidate, score_candidates
from inspire.engine.selector import DiversitySelector, ReserveLoader
from inspire.tools.flight_time import Coords, estimate_flight_hours, resolve_origin

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

Key = Tuple[str, str]


class LadderState(str, Enum):
    CALL_PRIMARY = "call_primary"
    CALL_SECONDARY = "call_secondary"
    TOP_UP = "top_up"
    USE_CURATED = "use_curated"
    DEGRADED = "degraded"


@dataclass
class ShortlistOutcome:
    candidates: List[Candidate]
    mode: ShortlistMode
    seed: int
    requested: int
    trace: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return len(self.candidates) < self.requested

    def to_response(self) -> ShortlistResponse:
        return ShortlistResponse(
            meta=ShortlistMeta(
                mode=self.mode,
                degraded=self.degraded,
                requested=self.requested,
                returned=len(self.candidates),
                seed=self.seed,
            ),
            top5=list(self.candidates),
        )


def new_seed() -> int:
    return random.SystemRandom().randrange(2**31)


def curated_records(request: SelectionRequest) -> List[Dict[str, Any]]:
    """Curated pool for the request, re-estimating hours from a known origin."""
    records = curated_pool(request.user_hours)
    origin = resolve_origin(request.origin)
    if origin is None:
        return records
    for record in records:
        lat, lon = record.get("lat"), record.get("lon")
        if isinstance(lat, (int, float)) and isinstance(lon, (int, float)):
            record["approx_nonstop_hours"] = round(estimate_flight_hours(origin, Coords(lat, lon)), 1)
    return records


def _raw_key(raw: Any) -> Optional[str]:
    if not isinstance(raw, dict):
        return None
    city = str(raw.get("city") or "").strip()
    country = str(raw.get("country") or "").strip()
    if not city:
        return None
    return f"{city}|{country}" if country else city


class FallbackLadder:
    """Generator calls, curated substitution, and the selection pipeline.

    ``CALL_PRIMARY`` -> ``CALL_SECONDARY`` on timeout/transport errors;
    unparsable output or two failed calls go to ``USE_CURATED``. A usable but
    short live pool gets one ``TOP_UP`` call before the curated pool is held
    in reserve for the selector. Fewer than N results ends in ``DEGRADED``.
    """

    def __init__(
        self,
        generator: Optional[CandidateGenerator],
        *,
        settings: Settings,
        safety: SafetyList,
        recency: RecencyCache,
    ):
        self.generator = generator
        self.settings = settings
        self.safety = safety
        self.recency = recency

    # ---------- generator calls ----------
    async def _call_generator(
        self, request: SelectionRequest, policy: SelectionPolicy, trace: List[str]
    ) -> Tuple[Optional[List[Any]], Optional[str]]:
        prompt = build_candidate_prompt(request, policy, count=self.settings.candidate_count)
        attempts = (
            (LadderState.CALL_PRIMARY, self.settings.primary_model),
            (LadderState.CALL_SECONDARY, self.settings.secondary_model),
        )
        for state, model in attempts:
            trace.append(state.value)
            try:
                return await self.generator.generate_candidates(prompt, model=model), model
            except (UpstreamTimeout, UpstreamTransportError) as exc:
                logger.warning("Generator %s failed (%s): %s", state.value, type(exc).__name__, exc)
                continue
            except UpstreamParseError as exc:
                logger.warning("Generator %s returned unusable output (%s): %s", state.value, type(exc).__name__, exc)
                return None, None
            except GeneratorError as exc:
                logger.warning("Generator %s unavailable (%s): %s", state.value, type(exc).__name__, exc)
                return None, None
        return None, None

    async def _top_up(
        self,
        request: SelectionRequest,
        policy: SelectionPolicy,
        model: str,
        avoid: List[str],
        trace: List[str],
    ) -> List[Any]:
        trace.append(LadderState.TOP_UP.value)
        prompt = build_candidate_prompt(request, policy, count=self.settings.candidate_count, avoid=avoid)
        try:
            return await self.generator.generate_candidates(prompt, model=model)
        except GeneratorError as exc:
            logger.warning("Top-up call failed (%s): %s", type(exc).__name__, exc)
            return []

    # ---------- pipeline pieces ----------
    def _prepare(
        self,
        raws: List[Any],
        request: SelectionRequest,
        policy: SelectionPolicy,
        *,
        seen: Optional[Set[Key]] = None,
        repair: bool = False,
    ) -> Tuple[NormalizedBatch, List[Candidate]]:
        batch = normalize_candidates(
            raws,
            safety=self.safety,
            floors=policy.min_plausible_hours_by_region,
            repair_highlights=repair,
            seen=seen,
        )
        outcome = apply_constraints(batch.candidates, request=request, policy=policy, safety=self.safety)
        return batch, outcome.kept

    def _reserve(
        self,
        raws: List[Any],
        request: SelectionRequest,
        policy: SelectionPolicy,
        start_index: int,
        *,
        repair: bool = False,
        label: str,
    ) -> ReserveLoader:
        def load(seen: Set[Key]) -> List[ScoredCandidate]:
            batch, kept = self._prepare(raws, request, policy, seen=seen, repair=repair)
            logger.info("Reserve %s supplied %d candidate(s) after filtering", label, len(kept))
            return score_candidates(
                kept,
                request=request,
                recency=self.recency,
                repaired_keys=batch.repaired_keys,
                start_index=start_index,
            )

        return load

    # ---------- entry point ----------
    async def build_shortlist(self, request: SelectionRequest) -> ShortlistOutcome:
        policy = derive_policy(request.user_hours)
        trace: List[str] = []
        logger.info(
            "Shortlist start: hours=%.1f (cap %.2f) group=%s interests=%s season=%s exclusions=%d seed=%d",
            request.user_hours,
            policy.effective_cap(request.user_hours),
            request.group.value,
            ",".join(sorted(request.interests)) or "-",
            request.season.value if request.season else "flexible",
            len(request.exclusions),
            request.seed,
        )

        raws: Optional[List[Any]] = None
        model: Optional[str] = None
        if self.generator is not None and self.generator.enabled:
            raws, model = await self._call_generator(request, policy, trace)
        else:
            logger.info("Generator disabled; answering from curated pools")

        kept: List[Candidate] = []
        batch = NormalizedBatch()
        if raws is not None:
            batch, kept = self._prepare(raws, request, policy)
            if not batch.candidates:
                logger.warning("Generator output had no usable candidates (%s)", batch.drop_counts())
                raws = None

        reserves: List[ReserveLoader] = []
        if raws is not None and model is not None:
            mode = ShortlistMode.LIVE
            if len(kept) < request.size:
                seen_raw = [key for key in (_raw_key(raw) for raw in raws) if key]
                extra = await self._top_up(request, policy, model, seen_raw, trace)
                if extra:
                    more, more_kept = self._prepare(
                        extra, request, policy, seen={c.key for c in batch.candidates}
                    )
                    batch.candidates.extend(more.candidates)
                    batch.dropped.extend(more.dropped)
                    batch.repaired_keys |= more.repaired_keys
                    kept.extend(more_kept)
            incomplete = [item.raw for item in batch.dropped if item.reason == "incomplete_highlights"]
            reserves.append(self._reserve(curated_records(request), request, policy, 1000, label="curated"))
            if incomplete:
                reserves.append(self._reserve(incomplete, request, policy, 2000, repair=True, label="repaired"))
        else:
            mode = ShortlistMode.ERROR_FALLBACK if self.generator is not None and self.generator.enabled else ShortlistMode.SAMPLE
            trace.append(LadderState.USE_CURATED.value)
            batch, kept = self._prepare(curated_records(request), request, policy)

        scored = score_candidates(kept, request=request, recency=self.recency, repaired_keys=batch.repaired_keys)
        selector = DiversitySelector(
            policy,
            size=request.size,
            required_types=required_types(request.interests),
            reserves=reserves,
        )
        result = selector.select(scored)
        final = final_safety_pass(result.candidates, self.safety)

        self.recency.extend(candidate.key for candidate in final)
        outcome = ShortlistOutcome(candidates=final, mode=mode, seed=request.seed, requested=request.size, trace=trace)
        if outcome.degraded:
            trace.append(LadderState.DEGRADED.value)
            logger.warning(
                "Degraded shortlist: %d of %d destinations (mode %s)", len(final), request.size, mode.value
            )
        logger.info(
            "Shortlist done: mode=%s ladder=%s picks=%s",
            mode.value,
            "->".join(trace) or "curated",
            ", ".join(f"{c.city}/{c.country}" for c in final),
        )
        return outcome


@lru_cache(maxsize=1)
def get_ladder() -> FallbackLadder:
    """Process-wide ladder; the recency cache inside it lives as long as the process."""
    settings = get_settings()
    generator = CandidateGenerator(api_key=settings.openai_api_key, timeout=settings.upstream_timeout)
    if not generator.enabled:
        logger.warning("OPENAI_API_KEY not set; shortlists will come from curated pools (mode=sample)")
    return FallbackLadder(
        generator,
        settings=settings,
        safety=load_safety_list(settings.safety_file),
        recency=RecencyCache(settings.recency_capacity),
    )


async def orchestrate_inspire(
    payload: Any,
    *,
    ladder: Optional[FallbackLadder] = None,
    seed: Optional[int] = None,
) -> Dict[str, Any]:
    """Validate-with-defaults, then either build a shortlist or delegate to the itinerary planner."""
    ladder = ladder or get_ladder()
    req = InspireRequest.model_validate(payload if isinstance(payload, dict) else {})

    if req.build_itinerary_for is not None:
        itinerary = await build_itinerary(
            req.build_itinerary_for,
            req.preferences,
            ladder.generator,
            model=ladder.settings.primary_model,
        )
        return itinerary.model_dump(mode="json")

    request = SelectionRequest.from_inspire(
        req,
        size=ladder.settings.shortlist_size,
        seed=new_seed() if seed is None else seed,
    )
    outcome = await ladder.build_shortlist(request)
    return outcome.to_response().model_dump(mode="json")
