"""Diversity-constrained top-N selection.

The selector walks a ranked pool through named states::

    COLLECTING_PRIORITY -> COLLECTING_DIVERSE -> FILLING -> RELAXING -> DONE

Each state is a method on ``DiversitySelector`` that mutates a
``SelectionRun`` so tests can drive one step at a time. Relaxation happens
in a fixed order: country uniqueness (FILLING), then the per-region cap,
then the unknown-hours penalty, then reserve pools supplied by the caller.
A country is only repeated while no candidate from an unused country is
left anywhere in the pool.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from inspire.schemas import DestinationType
from inspire.engine.policy import SelectionPolicy
from inspire.engine.scorer import ScoredCandidate, rank

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

Key = Tuple[str, str]
# Receives every key the selector has already seen; returns extra scored candidates.
ReserveLoader = Callable[[Set[Key]], List[ScoredCandidate]]


class SelectorState(str, Enum):
    COLLECTING_PRIORITY = "collecting_priority"
    COLLECTING_DIVERSE = "collecting_diverse"
    FILLING = "filling"
    RELAXING = "relaxing"
    DONE = "done"


@dataclass
class SelectionRun:
    pool: List[ScoredCandidate]
    size: int
    picks: List[ScoredCandidate] = field(default_factory=list)
    taken: Set[Key] = field(default_factory=set)
    country_counts: Dict[str, int] = field(default_factory=dict)
    region_counts: Dict[str, int] = field(default_factory=dict)
    priority_keys: Set[Key] = field(default_factory=set)
    trace: List[Tuple[str, int]] = field(default_factory=list)
    reserve_used: bool = False
    state: SelectorState = SelectorState.COLLECTING_PRIORITY

    @property
    def full(self) -> bool:
        return len(self.picks) >= self.size

    @property
    def seen_keys(self) -> Set[Key]:
        return {item.key for item in self.pool}

    def remaining(self) -> List[ScoredCandidate]:
        return [item for item in self.pool if item.key not in self.taken]


@dataclass
class SelectionResult:
    picks: List[ScoredCandidate]
    trace: List[Tuple[str, int]]
    degraded: bool
    reserve_used: bool

    @property
    def candidates(self):
        return [item.candidate for item in self.picks]


class DiversitySelector:
    def __init__(
        self,
        policy: SelectionPolicy,
        *,
        size: int = 5,
        required_types: Sequence[DestinationType] = (),
        reserves: Sequence[ReserveLoader] = (),
    ):
        self.policy = policy
        self.size = size
        self.required_types = list(required_types)
        self.reserves = list(reserves)

    # ---------- entry point ----------
    def select(self, scored: Sequence[ScoredCandidate]) -> SelectionResult:
        run = self.start(scored)
        self.collect_priority(run)
        self.collect_diverse(run)
        self.fill(run)
        self.relax(run)
        return self.finish(run)

    def start(self, scored: Sequence[ScoredCandidate]) -> SelectionRun:
        unique: List[ScoredCandidate] = []
        keys: Set[Key] = set()
        for item in rank(scored):
            if item.key in keys:
                continue
            keys.add(item.key)
            unique.append(item)
        return SelectionRun(pool=unique, size=self.size)

    # ---------- states ----------
    def collect_priority(self, run: SelectionRun) -> None:
        run.state = SelectorState.COLLECTING_PRIORITY
        quota = self.policy.min_priority_quota
        regions = self.policy.priority_regions
        if quota <= 0 or not regions:
            return
        taken = self._sweep(
            run,
            run.pool,
            unique_country=True,
            region_cap=True,
            predicate=lambda item: item.region in regions,
            limit=min(quota, run.size),
        )
        run.priority_keys.update(item.key for item in taken)
        self._record(run, "priority", len(taken))

    def collect_diverse(self, run: SelectionRun) -> None:
        run.state = SelectorState.COLLECTING_DIVERSE
        count = 0
        for dest_type in self.required_types:
            if run.full or self._has_type(run, dest_type):
                continue
            count += len(
                self._sweep(
                    run,
                    run.pool,
                    unique_country=True,
                    region_cap=True,
                    predicate=lambda item, t=dest_type: item.candidate.type == t,
                    limit=1,
                )
            )
        count += len(self._sweep(run, run.pool, unique_country=True, region_cap=True))
        self._record(run, "diverse", count)

    def fill(self, run: SelectionRun) -> None:
        run.state = SelectorState.FILLING
        if run.full:
            return
        if self._unused_country_left(run, run.remaining()):
            # Those candidates are blocked by the region cap; RELAXING takes them first.
            self._record(run, "fill_deferred", 0)
            return
        taken = self._sweep(run, run.pool, unique_country=False, region_cap=True)
        self._record(run, "fill", len(taken))

    def relax(self, run: SelectionRun) -> None:
        run.state = SelectorState.RELAXING
        if run.full:
            return

        taken = self._sweep(run, run.pool, unique_country=True, region_cap=False)
        self._record(run, "relax_region_cap", len(taken))
        if run.full:
            return

        reordered = sorted(run.remaining(), key=lambda item: -item.score_without_unknown_penalty())
        taken = self._sweep_spread(run, reordered)
        self._record(run, "relax_unknown_hours", len(taken))

        for tier, loader in enumerate(self.reserves, start=1):
            if run.full:
                break
            seen = run.seen_keys
            extra: List[ScoredCandidate] = []
            for item in rank(loader(set(seen))):
                if item.key not in seen:
                    seen.add(item.key)
                    extra.append(item)
            if not extra:
                self._record(run, f"reserve_{tier}", 0)
                continue
            run.pool.extend(extra)
            taken = self._sweep_spread(run, extra)
            if taken:
                run.reserve_used = True
            self._record(run, f"reserve_{tier}", len(taken))

    def finish(self, run: SelectionRun) -> SelectionResult:
        self._ensure_coverage(run)
        run.state = SelectorState.DONE
        picks = sorted(run.picks, key=lambda item: (-item.score, item.index))
        degraded = len(picks) < run.size
        if degraded:
            logger.warning(
                "Selector degraded: %d of %d destinations after all relaxation (pool %d)",
                len(picks),
                run.size,
                len(run.pool),
            )
        logger.info("Selector trace: %s", ", ".join(f"{name}={count}" for name, count in run.trace) or "none")
        return SelectionResult(picks=picks, trace=list(run.trace), degraded=degraded, reserve_used=run.reserve_used)

    # ---------- helpers ----------
    def _eligible(self, run: SelectionRun, item: ScoredCandidate, *, unique_country: bool, region_cap: bool) -> bool:
        if item.key in run.taken:
            return False
        if unique_country and run.country_counts.get(item.key[1], 0) > 0:
            return False
        if region_cap and run.region_counts.get(item.region.value, 0) >= self.policy.max_same_region_in_result:
            return False
        return True

    def _take(self, run: SelectionRun, item: ScoredCandidate) -> None:
        run.picks.append(item)
        run.taken.add(item.key)
        country = item.key[1]
        run.country_counts[country] = run.country_counts.get(country, 0) + 1
        region = item.region.value
        run.region_counts[region] = run.region_counts.get(region, 0) + 1

    def _sweep(
        self,
        run: SelectionRun,
        items: Sequence[ScoredCandidate],
        *,
        unique_country: bool,
        region_cap: bool,
        predicate: Optional[Callable[[ScoredCandidate], bool]] = None,
        limit: Optional[int] = None,
    ) -> List[ScoredCandidate]:
        taken: List[ScoredCandidate] = []
        for item in items:
            if run.full or (limit is not None and len(taken) >= limit):
                break
            if predicate is not None and not predicate(item):
                continue
            if self._eligible(run, item, unique_country=unique_country, region_cap=region_cap):
                self._take(run, item)
                taken.append(item)
        return taken

    def _sweep_spread(self, run: SelectionRun, items: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
        """New countries first, then anything, with no region cap."""
        taken = self._sweep(run, items, unique_country=True, region_cap=False)
        taken += self._sweep(run, items, unique_country=False, region_cap=False)
        return taken

    def _unused_country_left(self, run: SelectionRun, items: Sequence[ScoredCandidate]) -> bool:
        return any(run.country_counts.get(item.key[1], 0) == 0 for item in items)

    @staticmethod
    def _has_type(run: SelectionRun, dest_type: DestinationType) -> bool:
        return any(item.candidate.type == dest_type for item in run.picks)

    @staticmethod
    def _record(run: SelectionRun, step: str, count: int) -> None:
        run.trace.append((step, count))
        if count:
            logger.debug("Selector step %s took %d (now %d/%d)", step, count, len(run.picks), run.size)

    def _ensure_coverage(self, run: SelectionRun) -> None:
        """Swap in a missing required type when the pool has one.

        The victim is the lowest-scored pick whose type is duplicated (priority
        picks last); the replacement must not introduce a repeated country or
        push a different region past the per-region cap.
        """
        for dest_type in self.required_types:
            if not run.picks or self._has_type(run, dest_type):
                continue
            options = [item for item in run.remaining() if item.candidate.type == dest_type]
            if not options:
                continue
            type_counts: Dict[DestinationType, int] = {}
            for item in run.picks:
                type_counts[item.candidate.type] = type_counts.get(item.candidate.type, 0) + 1
            victims = [item for item in run.picks if type_counts[item.candidate.type] > 1]
            if not victims:
                continue
            victims.sort(key=lambda item: (item.key in run.priority_keys, item.score))
            victim = victims[0]
            others = [item for item in run.picks if item is not victim]
            other_countries = {item.key[1] for item in others}
            cap = self.policy.max_same_region_in_result
            replacement = next(
                (
                    item
                    for item in options
                    if item.key[1] not in other_countries
                    and (
                        item.region == victim.region
                        or sum(1 for other in others if other.region == item.region) < cap
                    )
                ),
                None,
            )
            if replacement is None:
                continue
            position = run.picks.index(victim)
            run.picks[position] = replacement
            run.taken.discard(victim.key)
            run.taken.add(replacement.key)
            for country, delta in ((victim.key[1], -1), (replacement.key[1], 1)):
                run.country_counts[country] = run.country_counts.get(country, 0) + delta
            for region, delta in ((victim.region.value, -1), (replacement.region.value, 1)):
                run.region_counts[region] = run.region_counts.get(region, 0) + delta
            run.priority_keys.discard(victim.key)
            self._record(run, f"coverage_{dest_type.value}", 1)
