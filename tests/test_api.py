"""
HTTP tests through FastAPI's TestClient with injected collaborators.
"""
import dataclasses
import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from civic_chat.api.main import create_app
from civic_chat.cache import TTLCache
from civic_chat.core.exceptions import LLMError, StoreUnavailableError
from civic_chat.storage import FileSurveyStore


class FakeAggregator:
    def needs_augmentation(self, text):
        return False

    def fetch(self, query):
        raise AssertionError("fetch should not be called")

    def close(self):
        pass


@pytest.fixture
def llm():
    client = MagicMock()
    client.generate.return_value = "Olá! Como posso ajudar?"
    return client


@pytest.fixture
def store(settings):
    return FileSurveyStore(settings.survey_store_path)


@pytest.fixture
def cache():
    return TTLCache(max_age_seconds=300)


@pytest.fixture
def client(settings, cache, llm, store):
    app = create_app(
        settings,
        cache=cache,
        aggregator=FakeAggregator(),
        llm_client=llm,
        survey_store=store,
    )
    with TestClient(app) as test_client:
        yield test_client


class TestHealthAndSources:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["cache"] == {"size": 0, "maxAge": 300.0}

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Cache-Control"] == "no-store"
        assert "X-Request-ID" not in response.headers

    def test_audit_request_id(self, settings, cache, llm, store):
        app = create_app(
            dataclasses.replace(settings, enable_audit_logging=True),
            cache=cache,
            aggregator=FakeAggregator(),
            llm_client=llm,
            survey_store=store,
        )

        with TestClient(app) as audited:
            echoed = audited.get("/api/health", headers={"X-Request-ID": "abc123"})
            generated = audited.get("/api/sources")

        assert echoed.headers["X-Request-ID"] == "abc123"
        assert len(generated.headers["X-Request-ID"]) == 12
        assert generated.headers["X-Response-Time"].endswith("ms")

    def test_sources_catalogue(self, client):
        response = client.get("/api/sources")
        assert response.status_code == 200
        sources = response.json()["sources"]
        assert set(sources) == {"oficiais", "apis", "verificacao"}
        assert sources["oficiais"][0]["nome"] == "Tribunal Superior Eleitoral (TSE)"


class TestChatEndpoint:

    def test_chat_then_cached(self, client, llm):
        first = client.post("/api/chat", json={"message": "O que é o PIB?"})
        second = client.post("/api/chat", json={"message": "O que é o PIB?"})

        assert first.status_code == 200
        assert first.json()["reply"] == "Olá! Como posso ajudar?"
        assert first.json()["realTime"] is False
        assert first.json()["cached"] is False
        assert second.json()["cached"] is True
        assert llm.generate.call_count == 1

    def test_cache_clear(self, client):
        client.post("/api/chat", json={"message": "O que é o PIB?"})

        response = client.post("/api/cache/clear")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Cache limpo com sucesso"
        assert data["beforeSize"] == 1
        assert data["afterSize"] == 0
        assert client.get("/api/health").json()["cache"]["size"] == 0

    @pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "   "}])
    def test_missing_message(self, client, payload):
        response = client.post("/api/chat", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_malformed_body(self, client):
        response = client.post(
            "/api/chat",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_llm_unavailable(self, client, llm):
        llm.generate.side_effect = LLMError("down")
        response = client.post("/api/chat", json={"message": "Oi"})
        assert response.status_code == 503
        assert response.json()["error"] == "llm_error"


class TestSurveyEndpoints:

    def test_submit_and_list(self, client):
        response = client.post("/api/nps/responses", json={
            "score": 3,
            "classification": "promoter",
            "reasons": [" Lentidão ", "Lentidão", ""],
            "feedback": "  Poderia ser mais rápido  ",
            "submittedAt": "2026-10-18T09:00:00-03:00",
        })

        assert response.status_code == 201
        assert response.json() == {
            "score": 3,
            "classification": "detractor",
            "reasons": ["Lentidão"],
            "feedback": "Poderia ser mais rápido",
            "submittedAt": "2026-10-18T12:00:00Z",
        }

        listed = client.get("/api/nps/responses").json()["responses"]
        assert listed == [response.json()]

    def test_minimal_submission_omits_empty_fields(self, client):
        response = client.post("/api/nps/responses", json={"score": 10})

        assert response.status_code == 201
        data = response.json()
        assert data["classification"] == "promoter"
        assert "reasons" not in data
        assert "feedback" not in data
        assert data["submittedAt"].endswith("Z")

    def test_persisted_to_file(self, client, settings):
        client.post("/api/nps/responses", json={"score": 8})
        with open(settings.survey_store_path, encoding="utf-8") as handle:
            assert json.load(handle)[0]["classification"] == "neutral"

    @pytest.mark.parametrize("payload", [
        {},
        {"score": None},
        {"score": "9"},
        {"score": 9.5},
        {"score": 11},
        {"score": -1},
        {"score": 5, "unknown": True},
        [9],
    ])
    def test_invalid_submissions(self, client, payload):
        response = client.post("/api/nps/responses", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_unparseable_body(self, client):
        response = client.post(
            "/api/nps/responses",
            content=b"score=9",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_payload_too_large(self, client):
        response = client.post(
            "/api/nps/responses",
            json={"score": 9, "feedback": "x" * (70 * 1024)},
        )
        assert response.status_code == 400

    def test_store_unavailable(self, settings, cache, llm):
        failing_store = MagicMock()
        failing_store.backend_name = "file"
        failing_store.add.side_effect = StoreUnavailableError()
        failing_store.list.side_effect = StoreUnavailableError()
        app = create_app(
            settings,
            cache=cache,
            aggregator=FakeAggregator(),
            llm_client=llm,
            survey_store=failing_store,
        )

        with TestClient(app) as client:
            assert client.post("/api/nps/responses", json={"score": 9}).status_code == 503
            response = client.get("/api/nps/responses")
            assert response.status_code == 503
            assert response.json()["error"] == "store_unavailable"

        failing_store.close.assert_called_once()
