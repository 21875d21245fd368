"""Tests for the Gemini client: wire format, retry policy and the shared HTTP client."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from fakes import ScriptedGemini, gemini_body
from moodjournal.services.gemini import (
    GeminiClient,
    RetryPolicy,
    build_payload,
    candidate_text,
)
from moodjournal.services.http_client import HTTPClientManager
from moodjournal.shared.errors import ConfigurationError, UpstreamError


def _client(handler, sleeps=None, api_key="test-key") -> GeminiClient:
    async def fake_sleep(seconds: float) -> None:
        if sleeps is not None:
            sleeps.append(seconds)

    return GeminiClient(
        api_key=api_key,
        model="gemini-test",
        base_url="https://gemini.test/v1beta/",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=fake_sleep,
    )


def _sequence(*responses):
    """Handler returning/raising the given items in order, recording each request."""
    seen = []
    items = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        item = items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    handler.seen = seen
    return handler


def _generate(client: GeminiClient, **kwargs):
    return asyncio.run(client.generate("prompt", "system", **kwargs))


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


class TestWireFormat:
    def test_payload_layout(self) -> None:
        payload = build_payload("hello", "be kind", {"temperature": 0.7})
        assert payload == {
            "contents": [{"role": "user", "parts": [{"text": "hello"}]}],
            "systemInstruction": {"parts": [{"text": "be kind"}]},
            "generationConfig": {"temperature": 0.7},
        }

    def test_payload_without_generation_config(self) -> None:
        assert "generationConfig" not in build_payload("hello", "be kind")

    def test_request_goes_to_model_endpoint_with_key_header(self) -> None:
        api = ScriptedGemini(support="hi")
        client = GeminiClient(
            api_key="secret-key",
            model="gemini-test",
            base_url="https://gemini.test/v1beta",
            http_client=api.client(),
        )

        result = asyncio.run(client.generate("prompt", "system", purpose="support_message"))

        request = api.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://gemini.test/v1beta/models/gemini-test:generateContent"
        assert request.headers["x-goog-api-key"] == "secret-key"
        assert "secret-key" not in str(request.url)
        assert result.text == "hi"
        assert result.finish_reason == "STOP"
        assert result.usage["totalTokenCount"] == 150

    def test_candidate_text_joins_parts(self) -> None:
        data = {"candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "there"}]}}]}
        assert candidate_text(data) == "Hello there"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            {"candidates": "nope"},
            {"candidates": [{"content": None}]},
            {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        ],
    )
    def test_candidate_text_missing_is_empty(self, data) -> None:
        assert candidate_text(data) == ""

    def test_missing_api_key_raises_configuration_error(self) -> None:
        handler = _sequence()
        with pytest.raises(ConfigurationError):
            _generate(_client(handler, api_key=None))
        assert handler.seen == []


# ---------------------------------------------------------------------------
# Failures and retries
# ---------------------------------------------------------------------------


class TestFailures:
    def test_non_success_status_raises_upstream_error(self) -> None:
        handler = _sequence(httpx.Response(400, json={"error": {"message": "bad"}}))
        with pytest.raises(UpstreamError) as exc_info:
            _generate(_client(handler))
        assert exc_info.value.upstream_status == 400
        assert exc_info.value.retryable is False

    def test_non_json_body_raises_upstream_error(self) -> None:
        handler = _sequence(httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(UpstreamError):
            _generate(_client(handler))

    def test_transport_error_raises_upstream_error(self) -> None:
        handler = _sequence(httpx.ConnectError("connection refused"))
        with pytest.raises(UpstreamError) as exc_info:
            _generate(_client(handler))
        assert exc_info.value.retryable is True

    def test_transient_status_retried_then_succeeds(self) -> None:
        sleeps = []
        handler = _sequence(
            httpx.Response(503),
            httpx.Response(429),
            httpx.Response(200, json=gemini_body("ok")),
        )
        client = _client(handler, sleeps)

        result = _generate(client, retry=RetryPolicy(max_retries=2, backoff_seconds=0.5, backoff_multiplier=2.0))

        assert result.text == "ok"
        assert result.attempts == 3
        assert sleeps == [0.5, 1.0]

    def test_retries_are_bounded(self) -> None:
        sleeps = []
        handler = _sequence(httpx.Response(500), httpx.Response(502))
        with pytest.raises(UpstreamError) as exc_info:
            _generate(_client(handler, sleeps), retry=RetryPolicy(max_retries=1, backoff_seconds=0.1))
        assert exc_info.value.upstream_status == 502
        assert len(handler.seen) == 2
        assert sleeps == [0.1]

    def test_client_errors_not_retried(self) -> None:
        handler = _sequence(httpx.Response(403), httpx.Response(200, json=gemini_body("never")))
        with pytest.raises(UpstreamError):
            _generate(_client(handler), retry=RetryPolicy(max_retries=3))
        assert len(handler.seen) == 1

    def test_timeout_retried(self) -> None:
        handler = _sequence(httpx.ReadTimeout("slow"), httpx.Response(200, json=gemini_body("late")))
        result = _generate(_client(handler), retry=RetryPolicy(max_retries=1, backoff_seconds=0))
        assert result.text == "late"

    def test_default_policy_does_not_retry(self) -> None:
        handler = _sequence(httpx.Response(503), httpx.Response(200, json=gemini_body("never")))
        with pytest.raises(UpstreamError):
            _generate(_client(handler))
        assert len(handler.seen) == 1

    def test_backoff_delays(self) -> None:
        policy = RetryPolicy(max_retries=3, backoff_seconds=0.5, backoff_multiplier=3.0)
        assert [policy.delay_for(n) for n in (1, 2, 3)] == [0.5, 1.5, 4.5]

    def test_payload_sent_as_json(self) -> None:
        handler = _sequence(httpx.Response(200, json=gemini_body("x")))
        _generate(_client(handler), generation_config={"maxOutputTokens": 10})
        body = json.loads(handler.seen[0].content)
        assert body["generationConfig"] == {"maxOutputTokens": 10}
        assert body["systemInstruction"]["parts"][0]["text"] == "system"


# ---------------------------------------------------------------------------
# Shared client lifecycle
# ---------------------------------------------------------------------------


class TestHTTPClientManager:
    def test_lazy_open_and_shutdown(self) -> None:
        manager = HTTPClientManager(max_connections=5, max_keepalive_connections=2)

        async def lifecycle():
            first = await manager.get_client()
            second = await manager.get_client()
            assert first is second
            assert manager.is_initialized
            await manager.shutdown()
            assert first.is_closed

        asyncio.run(lifecycle())
        assert not manager.is_initialized

    def test_timeout_configuration(self) -> None:
        timeout = HTTPClientManager(connect_timeout=2.0, read_timeout=45.0).timeout
        assert timeout.connect == 2.0
        assert timeout.read == 45.0
