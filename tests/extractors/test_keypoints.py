from __future__ import annotations

from outlook_ai.extractors.keypoints import extract_key_points


def test_extract_key_points_uses_declaration_order_and_first_trigger() -> None:
    body = "Payment by invoice. Can we discuss the price and cost of delivery?"

    points = extract_key_points(body)
    categories = [p.category for p in points]

    assert categories == ["price", "meeting", "delivery", "payment"]
    price = points[0]
    assert price.keyword == "price"
    assert price.importance == "high"
    # "cost" also matches, but the first trigger in the table wins.
    assert [p.keyword for p in points if p.category == "price"] == ["price"]


def test_extract_key_points_appends_first_three_numbers() -> None:
    body = "We need 500 units at 12.50 each, shipping 3 times, total 6250."

    points = extract_key_points(body)
    numbers = points[-1]

    assert numbers.category == "numbers"
    assert numbers.importance == "medium"
    assert numbers.values == ("500", "12.50", "3")
    assert numbers.keyword is None


def test_extract_key_points_is_case_insensitive_and_ignores_markup() -> None:
    points = extract_key_points("<div>Contract <i>AGREEMENT</i> attached</div>")

    assert [(p.category, p.keyword) for p in points] == [("contract", "contract")]


def test_extract_key_points_matches_chinese_triggers() -> None:
    points = extract_key_points("請提供報價和交貨時間")
    categories = [p.category for p in points]

    assert categories == ["price", "deadline", "delivery"]


def test_extract_key_points_empty_body() -> None:
    assert extract_key_points(None) == []
    assert extract_key_points("") == []
