from __future__ import annotations

from outlook_ai.rules.matching import bucket, contains_any, first_match, matching_words


def test_contains_any_is_none_safe_and_case_insensitive() -> None:
    assert contains_any("Please SEND a Quote", ["quote"])
    assert not contains_any(None, ["quote"])


def test_first_match_follows_table_order() -> None:
    assert first_match("cost and price", ["price", "cost"]) == "price"
    assert first_match("nothing", ["price"]) is None


def test_matching_words_are_distinct() -> None:
    assert matching_words("now now asap", ["asap", "now", "urgent"]) == ["asap", "now"]


def test_bucket_picks_first_threshold_reached() -> None:
    thresholds = ((50, "high"), (30, "medium"))
    assert bucket(50, thresholds, "low") == "high"
    assert bucket(49, thresholds, "low") == "medium"
    assert bucket(29, thresholds, "low") == "low"
