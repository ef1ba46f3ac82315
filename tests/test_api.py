"""Tests for the FastAPI routes (TestClient + fake upstream services)."""
import httpx
import pytest
from fastapi.testclient import TestClient

from app_fastapi import create_app
from tests.conftest import FakeUpstream


def _routine_brain(text: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "request_summary": text,
            "routing": {"recommendation": "creative"},
            "project_type": {"primary": "net_new_creative"},
            "timeline": {"urgency": "rush"},
        },
    )


@pytest.fixture
def fake():
    return FakeUpstream(_routine_brain)


@pytest.fixture
def client(config, fake):
    return TestClient(create_app(config, transport=fake.transport()))


class TestHealth:

    def test_root(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert "message" in res.json()

    def test_debug_routes(self, client):
        paths = client.get("/debug/routes").json()
        for path in ("/api/intake", "/api/adapt", "/api/orchestrate", "/api/classify-scope"):
            assert path in paths


class TestIntake:

    def test_no_file(self, client):
        res = client.post("/api/intake", data={"note": "nothing attached"})
        assert res.status_code == 400
        assert res.json()["detail"] == "No file received"

    def test_single_file(self, client, fake):
        res = client.post(
            "/api/intake",
            files={"file": ("brief.txt", b"Brand new campaign idea for the casino", "text/plain")},
        )

        assert res.status_code == 200
        body = res.json()
        assert body["total"] == 1
        assert body["succeeded"] == 1
        result = body["results"][0]
        assert result["filename"] == "brief.txt"
        assert result["content_type"] == "text/plain"
        assert result["routing"] == {"status": "routed", "route": "creative_review", "escalation": True}
        assert result["intent_object"]["intent"]["what"]["scope_class"] == "concepting"
        assert len(fake.processor_calls) == 1

    def test_multiple_files_with_one_failure(self, client):
        res = client.post(
            "/api/intake",
            files=[
                ("files", ("a.txt", b"first brief", "text/plain")),
                ("files", ("b.png", b"\x89PNG", "image/png")),
            ],
        )

        assert res.status_code == 200
        body = res.json()
        assert (body["total"], body["succeeded"], body["failed"]) == (2, 1, 1)
        assert body["results"][1]["error_type"] == "ExtractionFailed"


class TestAdapt:

    def test_adapt_brain_output(self, client, brain_output):
        res = client.post("/api/adapt", json=brain_output)
        assert res.status_code == 200
        data = res.json()
        assert data["is_valid"] is True
        assert data["input"]["property"] == "PROP-7"
        assert data["intent"]["what"]["deliverables"][0] == {
            "deliverable_name": "banner",
            "format_hint": "728x90",
            "qty": 3,
        }

    def test_adapt_non_object_body(self, client):
        res = client.post("/api/adapt", json=["x"])
        assert res.status_code == 200
        assert res.json()["input"]["property"] == "unknown"

    def test_adapt_rejects_unknown_version(self, client):
        res = client.post("/api/adapt?version=v7", json={})
        assert res.status_code == 422


class TestOrchestrate:

    def test_blocked(self, client):
        res = client.post(
            "/api/orchestrate",
            json={"uncertainty": {"human_confirmation_required": True, "questions_for_humans": ["Q1"]}},
        )
        assert res.json() == {"status": "blocked", "reason": "Human confirmation required", "questions": ["Q1"]}

    def test_routed(self, client):
        res = client.post(
            "/api/orchestrate",
            json={
                "intent": {"what": {"scope_class": "production"}, "how_hard": {"speed_sensitivity": "high"}},
                "uncertainty": {"human_confirmation_required": False},
            },
        )
        assert res.json() == {"status": "routed", "route": "studio_direct", "escalation": True}

    @pytest.mark.parametrize("wrapper", ["intent_object", "intentObject"])
    def test_wrapped_intent_object(self, client, wrapper):
        res = client.post(
            "/api/orchestrate",
            json={wrapper: {"intent": {"what": {"scope_class": "adaptation"}}}},
        )
        assert res.json() == {"status": "routed", "route": "creative_review", "escalation": False}

    def test_adapt_then_orchestrate(self, client, brain_output):
        intent = client.post("/api/adapt", json=brain_output).json()
        res = client.post("/api/orchestrate", json=intent)
        assert res.json() == {"status": "routed", "route": "studio_direct", "escalation": False}


class TestClassifyScope:

    def test_classify(self, client):
        res = client.post(
            "/api/classify-scope",
            json={"routing": {"recommendation": "creative"}, "project_type": "pickup_outdated_brand"},
        )
        assert res.json() == {"scope_class": "adaptation"}

    def test_classify_empty(self, client):
        assert client.post("/api/classify-scope", json={}).json() == {"scope_class": "quick_turn"}
