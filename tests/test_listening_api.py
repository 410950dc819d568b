import pytest
from fastapi.testclient import TestClient

from sprachcoach.main import create_app
from sprachcoach.routers import listening
from sprachcoach.settings import settings


@pytest.fixture
def client():
    return TestClient(create_app())


def test_evaluate_listening(client):
    resp = client.post(
        "/ai/evaluate-listening",
        json={
            "userTranscript": "Wir fahren Berlin",
            "referenceTranscript": "Wir fahren nach Berlin.",
            "difficulty": "B1_BASIC",
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    evaluation = body["evaluation"]
    assert evaluation["score"] == 75
    assert evaluation["wordErrorRate"] == 0.25
    assert evaluation["exactMatch"] is False
    assert evaluation["correctedText"] == "Wir fahren nach Berlin."
    assert evaluation["difficulty"] == "B1_BASIC"
    assert evaluation["errors"][0]["type"] == "omission"


@pytest.mark.parametrize(
    "body",
    [
        {"userTranscript": "", "referenceTranscript": "Hallo", "difficulty": "A2_BASIC"},
        {"userTranscript": "Hallo", "referenceTranscript": "Hallo", "difficulty": "C2"},
        {"userTranscript": "Hallo", "difficulty": "A2_BASIC"},
    ],
)
def test_rejects_invalid_body(client, body):
    resp = client.post("/ai/evaluate-listening", json=body)
    assert resp.status_code == 422


def test_rejects_oversize_transcript(client, monkeypatch):
    monkeypatch.setattr(settings, "max_transcript_tokens", 3)
    resp = client.post(
        "/ai/evaluate-listening",
        json={
            "userTranscript": "eins zwei drei vier",
            "referenceTranscript": "eins zwei drei",
            "difficulty": "A2_BASIC",
        },
    )
    assert resp.status_code == 413
    assert resp.json()["detail"] == "Transcript exceeds 3 words"


def test_rejects_oversize_reference(client, monkeypatch):
    monkeypatch.setattr(settings, "max_transcript_tokens", 2)
    resp = client.post(
        "/ai/evaluate-listening",
        json={
            "userTranscript": "eins",
            "referenceTranscript": "eins, zwei, drei!",
            "difficulty": "A2_BASIC",
        },
    )
    assert resp.status_code == 413
    assert resp.json()["detail"] == "Transcript exceeds 2 words"


def test_unexpected_failure_is_wrapped(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(listening, "evaluate_prepared", boom)
    resp = client.post(
        "/ai/evaluate-listening",
        json={"userTranscript": "a", "referenceTranscript": "a", "difficulty": "A2_BASIC"},
    )
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to evaluate listening exercise"


def test_info(client):
    resp = client.get("/info")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
