import json

import httpx
import pytest
from fastapi.testclient import TestClient

from sprachcoach.ai_client import ExerciseClient
from sprachcoach.content_tracker import context_key
from sprachcoach.main import create_app
from sprachcoach.routers.exercises import get_exercise_client
from sprachcoach.settings import settings


def _completion(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


@pytest.fixture
def app():
    return create_app()


def _use_transport(app, handler):
    client = ExerciseClient(
        api_key="test-key",
        base_url="https://llm.test/v1/chat/completions",
        tracker=app.state.content_tracker,
        max_attempts=2,
        transport=httpx.MockTransport(handler),
    )
    app.dependency_overrides[get_exercise_client] = lambda: client


def _batch_body(**overrides):
    body = {
        "type": "vocabulary",
        "difficulty": "A2_BASIC",
        "prompt": "Erzeuge Vokabelübungen als JSON.",
        "count": 2,
        "requiredFields": ["question"],
    }
    body.update(overrides)
    return body


def test_generate_batch_tracks_served_exercises(app):
    prompts = []

    def handler(request):
        prompts.append(json.loads(request.content)["messages"][0]["content"])
        return _completion('[{"question": "der Apfel"}, {"question": "die Birne"}, {"question": "das Brot"}]')

    _use_transport(app, handler)
    client = TestClient(app)

    resp = client.post("/ai/generate-batch", json=_batch_body())
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "batch": [{"question": "der Apfel"}, {"question": "die Birne"}]}
    assert prompts == ["Erzeuge Vokabelübungen als JSON."]

    info = client.get("/ai/generate-batch", params={"type": "vocabulary", "difficulty": "A2_BASIC"})
    assert info.json()["batchInfo"] == {"similarCount": 2, "tracked": 2}

    # already served exercises are skipped on the next request
    resp = client.post("/ai/generate-batch", json=_batch_body())
    assert resp.json()["batch"] == [{"question": "das Brot"}]


def test_reset_batch_forgets_only_that_type(app):
    tracker = app.state.content_tracker
    tracker.track("v", context_key("vocabulary", "A2_BASIC"))
    tracker.track("g", context_key("grammar", "A2_BASIC"))
    client = TestClient(app)

    resp = client.post("/ai/reset-batch", json={"type": "vocabulary"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "vocabulary batch reset successfully"}
    assert not tracker.is_duplicate("v")
    assert tracker.is_duplicate("g")


def test_reset_batch_rejects_unknown_type(app):
    resp = TestClient(app).post("/ai/reset-batch", json={"type": "reading"})
    assert resp.status_code == 422


def test_provider_failure_is_wrapped(app):
    _use_transport(app, lambda request: httpx.Response(502))
    resp = TestClient(app).post("/ai/generate-batch", json=_batch_body())
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to generate batch. Please try again."


def test_missing_api_key_is_service_unavailable(app, monkeypatch):
    monkeypatch.setattr(settings, "openrouter_api_key", None)
    resp = TestClient(app).post("/ai/generate-batch", json=_batch_body())
    assert resp.status_code == 503
    assert resp.json()["detail"] == "OPENROUTER_API_KEY is not configured"


def test_apps_do_not_share_trackers():
    assert create_app().state.content_tracker is not create_app().state.content_tracker
