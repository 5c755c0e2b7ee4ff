"""Candidate normalization: coercion, region floors and drop reasons."""

from inspire.engine.constraints import apply_constraints
from inspire.engine.normalizer import (
    Accepted,
    Dropped,
    normalize_candidate,
    normalize_candidates,
    parse_hours,
    parse_region,
)
from inspire.engine.policy import SelectionRequest, derive_policy
from inspire.engine.safety import default_safety_list
from inspire.schemas import DestinationType, Region, Season

SAFETY = default_safety_list()


def _raw(city, country, **overrides):
    record = {
        "city": city,
        "country": country,
        "region": "europe",
        "type": "city",
        "themes": ["food", "museums"],
        "best_seasons": ["spring"],
        "approx_nonstop_hours": 2.5,
        "summary": "  A  fine   place. ",
        "highlights": ["One thing", "Another thing", "A third thing"],
    }
    record.update(overrides)
    return record


def test_implausible_middle_east_hours_are_clamped_then_filtered_under_low_cap():
    result = normalize_candidate(
        _raw("Dubai", "United Arab Emirates", region="middle_east", approx_nonstop_hours=2),
        safety=SAFETY,
    )
    assert isinstance(result, Accepted)
    assert result.candidate.approx_nonstop_hours == 5.5

    request = SelectionRequest(user_hours=3.0)
    outcome = apply_constraints([result.candidate], request=request, policy=derive_policy(3.0), safety=SAFETY)
    assert outcome.kept == []
    assert outcome.rejected[0][1] == "over_cap"


def test_fields_are_collapsed_and_coerced():
    result = normalize_candidate(
        {
            "city": "  Lisbon ",
            "country": "Portugal",
            "region": "Southern Europe",
            "type": "Cities",
            "themes": ["Food & drink", "Local culture"],
            "bestSeasons": ["Fall", "spring"],
            "approxNonstopHours": "about 2.75 hours",
            "summary": "Trams\nand  tiles.",
            "highlights": ["Alfama", "Belém", "LX Factory", "Sintra day trip"],
        },
        safety=SAFETY,
    )
    assert isinstance(result, Accepted)
    candidate = result.candidate
    assert candidate.city == "Lisbon"
    assert candidate.region == Region.EUROPE
    assert candidate.type == DestinationType.CITY
    assert candidate.themes == ["food", "culture"]
    assert candidate.best_seasons == [Season.AUTUMN, Season.SPRING]
    assert candidate.approx_nonstop_hours == 2.75
    assert candidate.summary == "Trams and tiles."
    assert candidate.highlights == ["Alfama", "Belém", "LX Factory"]


def test_unresolvable_region_keeps_reported_hours_and_missing_hours_stay_unknown():
    odd = normalize_candidate(_raw("Atlantis", "Atlantica", region="somewhere", approx_nonstop_hours=0.5), safety=SAFETY)
    assert odd.candidate.region == Region.UNKNOWN
    assert odd.candidate.approx_nonstop_hours == 0.5

    missing = normalize_candidate(_raw("Porto", "Portugal", approx_nonstop_hours="n/a"), safety=SAFETY)
    assert missing.candidate.approx_nonstop_hours is None


def test_region_is_inferred_from_country_before_generic_labels():
    greek = normalize_candidate(_raw("Hydra", "Greece", region="somewhere", approx_nonstop_hours=0.5), safety=SAFETY)
    assert greek.candidate.region == Region.EUROPE
    assert greek.candidate.approx_nonstop_hours == 1.0

    bangkok = normalize_candidate(_raw("Bangkok", "Thailand", region="Asia", approx_nonstop_hours=2.0), safety=SAFETY)
    assert bangkok.candidate.region == Region.SOUTHEAST_ASIA
    assert bangkok.candidate.approx_nonstop_hours == 11.5

    vague = normalize_candidate(_raw("Somewhere", "Nowhereland", region="Asia", approx_nonstop_hours=2.0), safety=SAFETY)
    assert vague.candidate.region == Region.SOUTH_ASIA
    assert vague.candidate.approx_nonstop_hours == 8.5


def test_type_is_inferred_from_themes_when_unrecognised():
    result = normalize_candidate(_raw("Zakynthos", "Greece", type="?", themes=["Beaches", "Snorkelling"]), safety=SAFETY)
    assert result.candidate.type == DestinationType.BEACH


def test_drop_reasons():
    assert normalize_candidate("Paris", safety=SAFETY) == Dropped("not_an_object", "Paris")
    assert normalize_candidate(_raw("", "France"), safety=SAFETY).reason == "missing_city_or_country"
    assert normalize_candidate(_raw("Kabul", "Afghanistan"), safety=SAFETY).reason == "restricted"
    assert normalize_candidate(_raw("Odessa", " UKRAINE "), safety=SAFETY).reason == "restricted"
    assert normalize_candidate(_raw("Nice", "France", highlights=["Promenade"]), safety=SAFETY).reason == "incomplete_highlights"


def test_highlight_repair_fills_to_three():
    result = normalize_candidate(
        _raw("Nice", "France", highlights=["Promenade des Anglais"]),
        safety=SAFETY,
        repair_highlights=True,
    )
    assert isinstance(result, Accepted)
    assert result.repaired_highlights is True
    assert len(result.candidate.highlights) == 3
    assert result.candidate.highlights[0] == "Promenade des Anglais"
    assert "Nice" in result.candidate.highlights[1]


def test_batch_skips_bad_records_and_duplicates():
    batch = normalize_candidates(
        [
            _raw("Rome", "Italy"),
            None,
            _raw("ROME", "italy"),
            _raw("Florence", "Italy", highlights=[]),
            _raw("Nice", "France", highlights=["a"]),
        ],
        safety=SAFETY,
        seen={("florence", "italy")},
    )
    assert [c.city for c in batch.candidates] == ["Rome"]
    assert batch.drop_counts() == {"not_an_object": 1, "duplicate": 1, "incomplete_highlights": 2}


def test_batch_repair_records_keys():
    batch = normalize_candidates([_raw("Nice", "France", highlights=["a"])], safety=SAFETY, repair_highlights=True)
    assert batch.repaired_keys == {("nice", "france")}


def test_parse_helpers():
    assert parse_region("North America") == Region.NORTH_AMERICA
    assert parse_region("canaries") == Region.ATLANTIC_ISLANDS
    assert parse_region(None) == Region.UNKNOWN
    assert parse_region("unknown", "Japan") == Region.EAST_ASIA
    assert parse_hours(True) is None
    assert parse_hours(-3) is None
    assert parse_hours("7h") == 7.0
