from inspire.engine.interests import CANONICAL_TAGS, canonical_interests, classify, required_types
from inspire.schemas import DestinationType


def test_quiz_labels_map_to_canonical_tags():
    assert canonical_interests(["Beaches", "Food & drink", "Less crowded", "Water sports"]) == [
        "beach",
        "food",
        "uncrowded",
        "water_sports",
    ]
    assert classify("All-inclusive") == ["all_inclusive"]
    assert classify("Performing arts") == ["performing_arts"]
    assert classify("Cities") == ["city"]


def test_one_phrase_can_yield_several_tags_in_table_order():
    assert classify("Island hiking with wildlife") == ["beach", "hiking", "wildlife"]


def test_unknown_and_empty_values_are_ignored():
    assert canonical_interests(["", "zzz", None, 7]) == []
    assert classify("") == []


def test_canonical_tags_are_unique():
    assert len(CANONICAL_TAGS) == len(set(CANONICAL_TAGS))


def test_required_types_deduplicate_in_order():
    assert required_types(["hiking", "beach", "mountains", "museums"]) == [
        DestinationType.BEACH,
        DestinationType.NATURE,
        DestinationType.CULTURE,
    ]
    assert required_types(["food"]) == []


def test_tags_match_whole_words_not_fragments():
    assert "mountains" not in classify("Speakeasy bars")
    assert "water_sports" not in classify("Diverse neighbourhoods")
    assert classify("Thousand lakes") == ["nature"]
    assert "shopping" not in classify("Pottery workshop")
    assert classify("Sandy coves and mountain peaks") == ["beach", "mountains"]
    assert classify("Diving and shopping") == ["water_sports", "shopping"]
