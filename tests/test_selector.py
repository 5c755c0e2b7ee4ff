from inspire.engine.policy import derive_policy
from inspire.engine.scorer import ScoredCandidate
from inspire.engine.selector import DiversitySelector, SelectorState
from inspire.schemas import Candidate, DestinationType, Region


def _scored(city, country, score, *, region=Region.EUROPE, type_=DestinationType.CITY, index=0, hours=2.0):
    candidate = Candidate(
        city=city,
        country=country,
        region=region,
        type=type_,
        approx_nonstop_hours=hours,
        highlights=["a", "b", "c"],
    )
    return ScoredCandidate(candidate=candidate, score=score, index=index)


def _pool(*rows):
    return [_scored(*row[:3], index=i, **(row[3] if len(row) > 3 else {})) for i, row in enumerate(rows)]


def _countries(result):
    return [c.country for c in result.candidates]


def test_selects_exactly_n_with_unique_countries_when_possible():
    pool = _pool(
        ("Barcelona", "Spain", 2.0),
        ("Madrid", "Spain", 1.9),
        ("Seville", "Spain", 1.8),
        ("Lisbon", "Portugal", 1.7),
        ("Rome", "Italy", 1.6),
        ("Marrakech", "Morocco", 1.5, {"region": Region.NORTH_AFRICA}),
        ("Funchal", "Portugal", 1.4, {"region": Region.ATLANTIC_ISLANDS}),
        ("Reykjavik", "Iceland", 1.0),
    )
    result = DiversitySelector(derive_policy(8.0)).select(pool)
    assert len(result.candidates) == 5
    assert len(set(_countries(result))) == 5
    assert result.degraded is False
    scores = [item.score for item in result.picks]
    assert scores == sorted(scores, reverse=True)


def test_region_cap_blocks_before_country_repeats():
    # Short ceiling: at most two picks per region until relaxation.
    pool = _pool(
        ("Barcelona", "Spain", 3.0),
        ("Madrid", "Spain", 2.9),
        ("Paris", "France", 2.8),
        ("Lyon", "France", 2.7),
        ("Rome", "Italy", 1.2),
        ("Berlin", "Germany", 1.1),
        ("Vienna", "Austria", 1.0),
    )
    selector = DiversitySelector(derive_policy(3.0))
    run = selector.start(pool)
    selector.collect_priority(run)
    selector.collect_diverse(run)
    assert [item.candidate.city for item in run.picks] == ["Barcelona", "Paris"]

    selector.fill(run)
    assert ("fill_deferred", 0) in run.trace
    assert len(run.picks) == 2

    selector.relax(run)
    result = selector.finish(run)
    assert run.state == SelectorState.DONE
    assert sorted(_countries(result)) == ["Austria", "France", "Germany", "Italy", "Spain"]


def test_fill_repeats_country_only_when_no_new_country_is_left():
    pool = _pool(
        ("Barcelona", "Spain", 2.0),
        ("Madrid", "Spain", 1.9),
        ("Seville", "Spain", 1.8),
        ("Valencia", "Spain", 1.7),
        ("Lisbon", "Portugal", 1.6),
        ("Porto", "Portugal", 1.5),
    )
    result = DiversitySelector(derive_policy(8.0)).select(pool)
    assert len(result.candidates) == 5
    assert set(_countries(result)) == {"Spain", "Portugal"}
    names = [name for name, _ in result.trace]
    assert names.index("fill") < names.index("relax_region_cap")


def test_priority_quota_reserves_long_haul_slots():
    pool = _pool(
        ("Paris", "France", 3.0),
        ("Rome", "Italy", 2.9),
        ("Vienna", "Austria", 2.8),
        ("Prague", "Czechia", 2.7),
        ("Oslo", "Norway", 2.6),
        ("Dubai", "United Arab Emirates", 1.0, {"region": Region.MIDDLE_EAST, "hours": 7.0}),
        ("New York", "United States", 0.9, {"region": Region.NORTH_AMERICA, "hours": 7.5}),
        ("Bridgetown", "Barbados", 0.8, {"region": Region.CARIBBEAN, "hours": 8.5}),
        ("Toronto", "Canada", 0.7, {"region": Region.NORTH_AMERICA, "hours": 7.5}),
    )
    policy = derive_policy(12.0)
    assert policy.min_priority_quota == 3
    result = DiversitySelector(policy).select(pool)
    long_haul = [c for c in result.candidates if c.region in policy.priority_regions]
    assert len(long_haul) == 3
    assert {c.city for c in long_haul} == {"Dubai", "New York", "Bridgetown"}
    assert result.trace[0] == ("priority", 3)


def test_required_type_is_swapped_in():
    pool = _pool(
        ("Paris", "France", 3.0),
        ("Rome", "Italy", 2.9),
        ("Vienna", "Austria", 2.8),
        ("Prague", "Czechia", 2.7),
        ("Oslo", "Norway", 2.6),
        ("Paphos", "Cyprus", 0.5, {"type_": DestinationType.BEACH}),
    )
    result = DiversitySelector(derive_policy(8.0), required_types=[DestinationType.BEACH]).select(pool)
    types = [c.type for c in result.candidates]
    assert DestinationType.BEACH in types
    assert len(result.candidates) == 5
    # Diverse collection picks the beach first, so no swap is needed.
    assert "Paphos" in [c.city for c in result.candidates]


def test_coverage_swap_replaces_lowest_duplicate_type():
    pool = _pool(
        ("Paris", "France", 3.0),
        ("Rome", "Italy", 2.9),
        ("Vienna", "Austria", 2.8),
        ("Prague", "Czechia", 2.7),
        ("Oslo", "Norway", 2.6),
        ("Paphos", "Cyprus", 0.5, {"type_": DestinationType.BEACH}),
    )
    selector = DiversitySelector(derive_policy(8.0), required_types=[DestinationType.BEACH])
    run = selector.start(pool)
    # Bypass the coverage-first sweep to exercise the final swap.
    selector._sweep(run, run.pool, unique_country=True, region_cap=False)
    result = selector.finish(run)
    cities = [c.city for c in result.candidates]
    assert "Paphos" in cities
    assert "Oslo" not in cities
    assert ("coverage_beach", 1) in result.trace


def _coverage_run(*extra):
    pool = _pool(
        ("Paris", "France", 3.0),
        ("Rome", "Italy", 2.9, {"type_": DestinationType.CULTURE}),
        ("Marrakech", "Morocco", 2.8, {"region": Region.NORTH_AFRICA}),
        ("Paphos", "Cyprus", 0.5, {"type_": DestinationType.BEACH}),
        *extra,
    )
    selector = DiversitySelector(derive_policy(3.0), required_types=[DestinationType.BEACH])
    run = selector.start(pool)
    selector._sweep(run, run.pool[:3], unique_country=True, region_cap=False)
    return selector.finish(run)


def test_coverage_swap_respects_region_cap_of_other_regions():
    # Two European picks already fill the cap; the victim is Marrakech.
    result = _coverage_run()
    assert [c.city for c in result.candidates] == ["Paris", "Rome", "Marrakech"]
    assert not any(step.startswith("coverage_") for step, _ in result.trace)

    result = _coverage_run(("Hammamet", "Tunisia", 0.4, {"region": Region.NORTH_AFRICA, "type_": DestinationType.BEACH}))
    assert [c.city for c in result.candidates] == ["Paris", "Rome", "Hammamet"]
    assert ("coverage_beach", 1) in result.trace


def test_reserve_tiers_fill_short_pool_and_see_existing_keys():
    seen_by_loader = []

    def curated(seen):
        seen_by_loader.append(set(seen))
        return _pool(
            ("Lisbon", "Portugal", 0.4),
            ("Rome", "Italy", 0.3),
            ("Oslo", "Norway", 0.2),
            ("Vienna", "Austria", 0.1),
        )

    pool = _pool(("Lisbon", "Portugal", 2.0), ("Paris", "France", 1.9))
    result = DiversitySelector(derive_policy(8.0), reserves=[curated]).select(pool)
    assert len(result.candidates) == 5
    assert result.reserve_used is True
    assert seen_by_loader == [{("lisbon", "portugal"), ("paris", "france")}]
    assert sorted(_countries(result)) == ["Austria", "France", "Italy", "Norway", "Portugal"]


def test_short_pool_degrades_without_duplicates():
    pool = _pool(("Lisbon", "Portugal", 2.0), ("Lisbon", "Portugal", 1.0), ("Paris", "France", 1.5))
    result = DiversitySelector(derive_policy(8.0)).select(pool)
    assert [c.city for c in result.candidates] == ["Lisbon", "Paris"]
    assert result.degraded is True


def test_unknown_hours_relaxation_reorders_by_score_without_penalty():
    known = _scored("Porto", "Portugal", 1.0, index=0)
    unknown = _scored("Braga", "Portugal", 0.98, index=1, hours=None)
    unknown.components["unknown_hours"] = -0.05
    base = _pool(
        ("Lisbon", "Portugal", 3.0),
        ("Paris", "France", 2.9),
        ("Rome", "Italy", 2.8),
        ("Vienna", "Austria", 2.7),
    )
    for i, item in enumerate(base, start=2):
        item.index = i
    result = DiversitySelector(derive_policy(8.0), size=5).select(base + [known, unknown])
    # Region cap (3 for europe) is relaxed before the fifth pick; Braga wins once its penalty is lifted.
    assert "Braga" in [c.city for c in result.candidates]
