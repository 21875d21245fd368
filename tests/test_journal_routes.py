"""HTTP tests for the journal routes using FastAPI's TestClient."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from fakes import FakeSupabase, ScriptedGemini
from main import create_app
from moodjournal.api.dependencies import get_pipeline
from moodjournal.features.journaling.pipeline import JournalPipeline

COWORKER_EXTRACTION = {
    "sentiment": "negative",
    "score": -0.6,
    "emotions": ["sad"],
    "triggers": [{"name": "my coworker", "type": "PERSON"}],
}


@pytest.fixture
def app(pipeline: JournalPipeline):
    application = create_app()
    application.dependency_overrides[get_pipeline] = lambda: pipeline
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def _post_journal(client: TestClient, **body) -> httpx.Response:
    return client.post("/api/v1/journal", json=body)


class TestCreateJournal:
    def test_created_with_camel_case_body(self, client: TestClient, gemini_api: ScriptedGemini) -> None:
        gemini_api.extraction = COWORKER_EXTRACTION
        gemini_api.support = "It is okay to feel hurt."

        response = _post_journal(client, userId="u1", text="My coworker ignored me in the meeting and I felt sad")

        assert response.status_code == 201
        body = response.json()
        assert body["journal"]["userId"] == "u1"
        assert body["journal"]["analysisDone"] is True
        assert body["analysis"]["journalId"] == body["journal"]["id"]
        assert body["analysis"]["sentiment"] == "negative"
        assert body["analysis"]["magnitude"] == pytest.approx(1.5)
        assert body["analysis"]["emotions"] == ["sadness"]
        assert body["analysis"]["triggers"] == [{"name": "my coworker", "type": "PERSON"}]
        assert body["supportMessage"] == "It is okay to feel hurt."

    def test_correlation_header_echoed(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/journal",
            json={"userId": "u1", "text": "fine"},
            headers={"X-Request-ID": "req-123"},
        )
        assert response.headers["X-Correlation-ID"] == "req-123"

    @pytest.mark.parametrize(
        "body, message",
        [
            ({"text": "no user"}, "userId is required"),
            ({"userId": "u1"}, "Journal text is required"),
            ({"userId": "u1", "text": "   "}, "Journal text is required"),
        ],
    )
    def test_missing_fields_rejected(self, client: TestClient, supabase: FakeSupabase, body, message) -> None:
        response = client.post("/api/v1/journal", json=body)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == message
        assert body["code"] == "VALIDATION_ERROR"
        assert body["correlation_id"] == response.headers["X-Correlation-ID"]
        assert supabase.rows("journals") == []

    def test_malformed_body_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/journal", json=["not", "an", "object"])
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request body"
        assert body["code"] == "VALIDATION_ERROR"

    def test_extraction_failure_is_500_and_entry_kept(
        self, client: TestClient, gemini_api: ScriptedGemini, supabase: FakeSupabase
    ) -> None:
        gemini_api.extraction = httpx.Response(503)

        response = _post_journal(client, userId="u1", text="hello")

        assert response.status_code == 500
        body = response.json()
        assert isinstance(body["error"], str)
        assert body["error"] == "API call failed with status: 503"
        assert body["code"] == "EXTERNAL_SERVICE_ERROR"
        assert body["details"] == {"service": "gemini", "upstream_status": 503}
        assert supabase.rows("journals")[0]["analysis_done"] is False

    def test_store_failure_is_500(self, client: TestClient, supabase: FakeSupabase) -> None:
        supabase.failures.add(("journals", "insert"))

        response = _post_journal(client, userId="u1", text="hello")

        assert response.status_code == 500
        assert response.json()["code"] == "DATABASE_ERROR"

    def test_support_failure_still_201(self, client: TestClient, gemini_api: ScriptedGemini) -> None:
        gemini_api.support = httpx.ConnectError("down")

        response = _post_journal(client, userId="u1", text="hello")

        assert response.status_code == 201
        assert response.json()["supportMessage"] == "Keep going, you're doing great! 🌟"


class TestListJournals:
    def test_lists_entries_and_analyses(self, client: TestClient) -> None:
        _post_journal(client, userId="u1", text="first")
        _post_journal(client, userId="u1", text="second")

        response = client.get("/api/v1/journal/u1")

        assert response.status_code == 200
        body = response.json()
        assert [j["text"] for j in body["journals"]] == ["second", "first"]
        assert len(body["analysis"]) == 2

    def test_unknown_user_gets_empty_lists(self, client: TestClient) -> None:
        response = client.get("/api/v1/journal/nobody")
        assert response.status_code == 200
        assert response.json() == {"journals": [], "analysis": []}


class TestAnalysisStatus:
    def test_analyzed(self, client: TestClient) -> None:
        journal_id = _post_journal(client, userId="u1", text="hello").json()["journal"]["id"]

        response = client.get(f"/api/v1/journal/analysis/{journal_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["analyzed"] is True
        assert body["analysis"]["journalId"] == journal_id
        assert body["supportMessage"] == "You are doing well."
        assert "message" not in body

    def test_pending(self, client: TestClient, gemini_api: ScriptedGemini) -> None:
        gemini_api.extraction = httpx.Response(500)
        _post_journal(client, userId="u1", text="hello")

        response = client.get("/api/v1/journal/analysis/1")

        assert response.status_code == 200
        assert response.json() == {"analyzed": False, "message": "Analysis still in progress"}

    def test_not_found(self, client: TestClient) -> None:
        response = client.get("/api/v1/journal/analysis/missing")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Journal not found"
        assert body["code"] == "NOT_FOUND"
        assert body["details"] == {"journal_id": "missing"}


class TestReconcile:
    def test_reconcile_without_body(self, client: TestClient, gemini_api: ScriptedGemini) -> None:
        gemini_api.extraction = httpx.Response(500)
        _post_journal(client, userId="u1", text="hello")
        gemini_api.extraction = COWORKER_EXTRACTION

        response = client.post("/api/v1/journal/reconcile")

        assert response.status_code == 200
        assert response.json() == {"processed": 1, "analyzed": 1, "failed": 0, "failedIds": []}

    def test_reconcile_with_filters(self, client: TestClient, db) -> None:
        db.journals.create_entry("u1", "a")
        db.journals.create_entry("u2", "b")

        response = client.post("/api/v1/journal/reconcile", json={"userId": "u2", "limit": 5})

        assert response.status_code == 200
        assert response.json()["processed"] == 1

    def test_invalid_limit_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/journal/reconcile", json={"limit": 0})
        assert response.status_code == 400


class TestServiceRoutes:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client: TestClient) -> None:
        assert client.get("/").json() == {"message": "Mood Journal Service Running"}

    def test_unexpected_error_is_generic_500(self, app) -> None:
        class Broken:
            def list_for_user(self, user_id):
                raise RuntimeError("boom")

        app.dependency_overrides[get_pipeline] = lambda: Broken()
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/v1/journal/u1")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert body["code"] == "INTERNAL_ERROR"
        assert "boom" not in response.text
        assert response.headers["X-Correlation-ID"] == body["correlation_id"]
