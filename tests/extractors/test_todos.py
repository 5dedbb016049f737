from __future__ import annotations

from outlook_ai.extractors.todos import extract_todos


def test_extract_todos_finds_prefixed_and_request_lines() -> None:
    body = "\n".join(
        [
            "Hi Amber,",
            "TODO: send the signed contract",
            "- [ ] update the price list",
            "Please confirm the delivery date by Friday.",
            "Thanks!",
        ]
    )

    todos = extract_todos("Order follow-up", body)

    assert [t.text for t in todos] == [
        "TODO: send the signed contract",
        "- [ ] update the price list",
        "Please confirm the delivery date by Friday.",
    ]
    assert all(t.source == "body" for t in todos)


def test_extract_todos_reads_subject_and_splits_html_lines() -> None:
    body = "<p>Hello</p><p>We need to ship 300 pieces today</p>"

    todos = extract_todos("Please review the attached quote", body)

    assert [(t.source, t.text) for t in todos] == [
        ("subject", "Please review the attached quote"),
        ("body", "We need to ship 300 pieces today"),
    ]


def test_extract_todos_priorities() -> None:
    body = "\n".join(
        [
            "Please reply asap.",
            "Kindly send the invoice, it is due next week.",
            "Please share the catalogue.",
        ]
    )

    priorities = [t.priority for t in extract_todos("", body)]

    assert priorities == ["high", "medium", "low"]


def test_extract_todos_drops_duplicates_and_plain_lines() -> None:
    body = "Please call me.\nplease call me.\nNice weather today."

    todos = extract_todos(None, body)

    assert [t.text for t in todos] == ["Please call me."]


def test_extract_todos_empty_input() -> None:
    assert extract_todos(None, None) == []
