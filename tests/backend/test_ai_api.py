from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from backend.app.main import create_app
from outlook_ai.config.settings import Settings


@pytest.fixture
def app():
    return create_app(Settings(batch_max_size=3, batch_pause_seconds=0.0))


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def _email(body: str, subject: str = "") -> dict[str, Any]:
    return {"emailContent": body, "subject": subject, "from": "buyer@example.com"}


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == "1.0.0"


def test_analyze_returns_full_record(client: TestClient) -> None:
    resp = client.post(
        "/api/ai/analyze",
        json=_email("We want to purchase under a contract for 12000 units.", "urgent order inquiry"),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    analysis = body["analysis"]
    assert analysis["priority"] == "high"
    assert analysis["customerIntent"] == "purchase"
    assert analysis["estimatedValue"] == "high"
    assert "aiEnhanced" not in analysis


def test_analyze_requires_content(client: TestClient) -> None:
    resp = client.post("/api/ai/analyze", json={"subject": "Hi"})

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Email content is required"}


def test_analyze_merges_enhancement(app, client: TestClient, make_enhancer) -> None:
    app.state.enhancer = make_enhancer()

    analysis = client.post("/api/ai/analyze", json=_email("Please send a quote")).json()["analysis"]

    assert analysis["aiEnhanced"] is True
    assert analysis["confidence"] == 0.9


def test_analyze_survives_enhancer_failure(app, client: TestClient, make_enhancer) -> None:
    app.state.enhancer = make_enhancer(error=TimeoutError("slow"))

    resp = client.post("/api/ai/analyze", json=_email("Please send a quote"))

    assert resp.status_code == 200
    assert "aiEnhanced" not in resp.json()["analysis"]


def test_generate_reply(client: TestClient) -> None:
    resp = client.post(
        "/api/ai/generate-reply",
        json={
            "emailContent": "I want to file a complaint.",
            "context": {"tone": "friendly", "originalSubject": "Broken item"},
        },
    )

    assert resp.status_code == 200
    reply = resp.json()["reply"]
    assert reply["suggestedSubject"] == "Re: Broken item"
    assert reply["tone"] == "friendly"
    assert "sorry" in reply["content"]
    assert reply["analysis"]["customerIntent"] == "complaint"


def test_extract_keypoints(client: TestClient) -> None:
    resp = client.post("/api/ai/extract-keypoints", json={"emailContent": "Invoice for 3 pieces"})

    assert resp.json()["keypoints"] == [
        {"category": "quantity", "keyword": "pieces", "importance": "high"},
        {"category": "payment", "keyword": "invoice", "importance": "high"},
        {"category": "numbers", "values": ["3"], "importance": "medium"},
    ]


def test_calculate_priority_allows_missing_content(client: TestClient) -> None:
    resp = client.post("/api/ai/calculate-priority", json={"subject": "urgent and important"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "priority": "medium"}


def test_sentiment(client: TestClient) -> None:
    resp = client.post("/api/ai/sentiment", json={"emailContent": "urgent, reply immediately"})

    assert resp.json() == {"success": True, "sentiment": "urgent"}


def test_extract_todos(client: TestClient) -> None:
    resp = client.post(
        "/api/ai/extract-todos",
        json={"emailContent": "Hi,\nPlease confirm the order asap.", "emailSubject": "Order"},
    )

    assert resp.json()["todos"] == [
        {"text": "Please confirm the order asap.", "source": "body", "priority": "high"}
    ]


def test_batch_analyze_keeps_order(client: TestClient) -> None:
    emails = [
        _email("I have a question"),
        _email("We would like to buy 200 units"),
        _email("I want to file a complaint"),
    ]

    resp = client.post("/api/ai/batch-analyze", json={"emails": emails})

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 3
    assert [r["customerIntent"] for r in body["results"]] == ["inquiry", "purchase", "complaint"]


def test_batch_analyze_with_enhancer(app, client: TestClient, make_enhancer) -> None:
    app.state.enhancer = make_enhancer()

    body = client.post("/api/ai/batch-analyze", json={"emails": [_email("a", "one"), _email("b", "two")]}).json()

    assert [r["insights"] for r in body["results"]] == [["subject:one"], ["subject:two"]]


@pytest.mark.parametrize(
    ("payload", "status_code", "results"),
    [
        ({"emails": []}, 200, []),
        ({}, 400, None),
        ({"emails": "nope"}, 400, None),
        ({"emails": [_email("x")] * 4}, 400, None),
    ],
)
def test_batch_analyze_validation(client: TestClient, payload: dict, status_code: int, results: Any) -> None:
    resp = client.post("/api/ai/batch-analyze", json=payload)

    assert resp.status_code == status_code
    if results is not None:
        assert resp.json()["results"] == results
    else:
        assert resp.json()["success"] is False


def test_status_reports_capabilities_and_stats(app, client: TestClient) -> None:
    client.post("/api/ai/analyze", json=_email("hello"))

    status = client.get("/api/ai/status").json()["status"]

    assert status["enabled"] is False
    assert status["hasOpenAI"] is False
    assert status["model"] == "N/A"
    assert status["features"]["aiEnhancement"] is False
    assert status["stats"]["requests"] == {"analyze": 1}
    assert status["stats"]["emailsAnalyzed"] == 1


def test_unknown_route_is_json_404(client: TestClient) -> None:
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_unexpected_errors_become_json_500(app, make_enhancer, monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr("backend.app.api.ai.extract_key_points", explode)
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.post("/api/ai/extract-keypoints", json={"emailContent": "x"})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "boom"}
    assert app.state.stats.snapshot()["errors"] == 1
