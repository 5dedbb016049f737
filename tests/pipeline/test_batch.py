from __future__ import annotations

from dataclasses import replace
from typing import List

from outlook_ai.models import EmailText
from outlook_ai.pipeline.batch import analyze_batch
from outlook_ai.pipeline.orchestrator import analyze_email

EMAILS = [
    EmailText(subject="Question", body="I have a question about pricing."),
    EmailText(subject="Order", body="We would like to buy 200 units."),
    EmailText(subject="Complaint", body="I want to file a complaint."),
    EmailText(subject="Status", body="Any update on the shipment?"),
    EmailText(subject="Deal", body="Could we negotiate the terms?"),
    EmailText(subject="Hello", body="Hello there"),
    EmailText(),
]
EXPECTED_INTENTS = ["inquiry", "purchase", "complaint", "follow_up", "negotiation", "general", "general"]


def test_batch_without_enhancer_keeps_order_and_count() -> None:
    sleeps: List[float] = []

    results = analyze_batch(EMAILS, sleep=sleeps.append)

    assert len(results) == len(EMAILS)
    assert [r.customer_intent for r in results] == EXPECTED_INTENTS
    assert sleeps == []


def test_batch_results_match_single_analysis() -> None:
    results = analyze_batch(EMAILS)

    for email, result in zip(EMAILS, results):
        assert replace(result, timestamp="") == replace(analyze_email(email), timestamp="")


def test_batch_with_enhancer_paces_chunks(make_enhancer) -> None:
    enhancer = make_enhancer()
    sleeps: List[float] = []

    results = analyze_batch(EMAILS, enhancer, concurrency=3, pause_seconds=1.0, sleep=sleeps.append)

    assert [r.customer_intent for r in results] == EXPECTED_INTENTS
    assert all(r.enhancement is not None for r in results)
    assert [r.enhancement.insights for r in results] == [
        (f"subject:{email.subject or ''}",) for email in EMAILS
    ]
    # 7 emails in chunks of 3 -> 3 chunks, pauses only between them.
    assert sleeps == [1.0, 1.0]
    assert len(enhancer.calls) == len(EMAILS)


def test_batch_enhancer_failure_degrades_each_email(make_enhancer) -> None:
    enhancer = make_enhancer(error=TimeoutError("slow"))

    results = analyze_batch(EMAILS, enhancer, concurrency=5, sleep=lambda _: None)

    assert len(results) == len(EMAILS)
    assert all(r.enhancement is None for r in results)


def test_batch_empty_input() -> None:
    assert analyze_batch([]) == []
