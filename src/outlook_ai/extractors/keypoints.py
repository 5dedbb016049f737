from __future__ import annotations

from typing import List

from outlook_ai.models import KeyPoint
from outlook_ai.parsing.text import normalize_text
from outlook_ai.rules.matching import first_match
from outlook_ai.rules.tables import KEY_POINT_KEYWORDS, MAX_NUMERIC_VALUES, NUMERIC_PATTERN


def extract_key_points(body: str | None) -> List[KeyPoint]:
    """
    One high-importance point per category (first trigger wins), in table
    order, then a single medium-importance "numbers" point with up to three
    numeric values.
    """
    text = normalize_text(body).lower()
    if not text:
        return []

    points: List[KeyPoint] = []
    for category, words in KEY_POINT_KEYWORDS.items():
        keyword = first_match(text, words)
        if keyword is not None:
            points.append(KeyPoint(category=category, keyword=keyword, importance="high"))

    numbers = NUMERIC_PATTERN.findall(text)
    if numbers:
        points.append(
            KeyPoint(
                category="numbers",
                values=tuple(numbers[:MAX_NUMERIC_VALUES]),
                importance="medium",
            )
        )

    return points
