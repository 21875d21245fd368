"""
Gemini generateContent client.

Thin async wrapper over the Generative Language REST API. It owns the wire
format (payload layout, candidate text extraction, usage metadata) and the
retry policy; prompt content belongs to the callers in ``features/mood``.

Failure handling:
- transport errors, timeouts, HTTP 429 and 5xx are transient and retried
  up to ``RetryPolicy.max_retries`` times with exponential backoff
- any other non-2xx status, or a body that is not JSON, raises
  ``UpstreamError`` immediately
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from moodjournal.core.config import settings
from moodjournal.core.logging_utils import log_llm_usage
from moodjournal.services.http_client import http_client_manager
from moodjournal.shared.errors import ConfigurationError, UpstreamError

logger = logging.getLogger("MoodJournal.Gemini")

API_KEY_HEADER = "x-goog-api-key"


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry policy for transient upstream failures."""

    max_retries: int = 0
    backoff_seconds: float = 0.5
    backoff_multiplier: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Exponential backoff based on attempt number (1-indexed)."""
        return self.backoff_seconds * (self.backoff_multiplier ** max(attempt - 1, 0))

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_retries=settings.EXTRACTION_MAX_RETRIES,
            backoff_seconds=settings.EXTRACTION_BACKOFF_SECONDS,
            backoff_multiplier=settings.EXTRACTION_BACKOFF_MULTIPLIER,
        )


NO_RETRY = RetryPolicy(max_retries=0)


@dataclass
class GeminiResponse:
    """The parts of a generateContent response the service uses."""

    text: str
    finish_reason: Optional[str] = None
    usage: Dict[str, Any] = field(default_factory=dict)
    attempts: int = 1


def build_payload(
    prompt: str,
    system_instruction: str,
    generation_config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a single-turn generateContent request body."""
    payload: Dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "systemInstruction": {"parts": [{"text": system_instruction}]},
    }
    if generation_config:
        payload["generationConfig"] = generation_config
    return payload


def first_candidate(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return the first candidate object, or an empty dict."""
    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        return candidates[0]
    return {}


def candidate_text(data: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate; empty string if absent."""
    content = first_candidate(data).get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        part.get("text", "") for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )


def _is_transient_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class GeminiClient:
    """Async client for a single Gemini model."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._sleep = sleep

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def _client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return await http_client_manager.get_client()

    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        generation_config: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        retry: RetryPolicy = NO_RETRY,
        purpose: str = "generate",
    ) -> GeminiResponse:
        """
        Run one generateContent call.

        Args:
            prompt: User turn text
            system_instruction: System persona / output constraints
            generation_config: Gemini ``generationConfig`` block
            timeout: Per-attempt timeout in seconds (None uses client default)
            retry: Retry policy for transient failures
            purpose: Label used in logs

        Returns:
            GeminiResponse with the candidate text (possibly empty)

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: On HTTP failure or a non-JSON body
        """
        if not self._api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY is not configured",
                details={"setting": "GEMINI_API_KEY"},
            )

        payload = build_payload(prompt, system_instruction, generation_config)
        client = await self._client()
        started = time.monotonic()
        attempt = 0

        while True:
            attempt += 1
            try:
                data = await self._post(client, payload, timeout)
                break
            except UpstreamError as exc:
                if not exc.retryable or attempt > retry.max_retries:
                    logger.error(
                        "Gemini %s call failed after %s attempt(s): %s",
                        purpose,
                        attempt,
                        exc.message,
                    )
                    raise
                delay = retry.delay_for(attempt)
                logger.warning(
                    "Gemini %s call failed (attempt %s/%s), retrying in %.2fs: %s",
                    purpose,
                    attempt,
                    retry.max_retries + 1,
                    delay,
                    exc.message,
                )
                await self._sleep(delay)

        duration_ms = int((time.monotonic() - started) * 1000)
        first = first_candidate(data)
        usage = data.get("usageMetadata")
        response = GeminiResponse(
            text=candidate_text(data),
            finish_reason=first.get("finishReason"),
            usage=usage if isinstance(usage, dict) else {},
            attempts=attempt,
        )
        log_llm_usage(self.model, purpose, response.usage, duration_ms=duration_ms, attempts=attempt)
        return response

    async def _post(
        self,
        client: httpx.AsyncClient,
        payload: Dict[str, Any],
        timeout: Optional[float],
    ) -> Dict[str, Any]:
        request_kwargs: Dict[str, Any] = {
            "json": payload,
            "headers": {"Content-Type": "application/json", API_KEY_HEADER: self._api_key},
        }
        if timeout is not None:
            request_kwargs["timeout"] = timeout

        try:
            response = await client.post(self.endpoint, **request_kwargs)
        except httpx.TimeoutException as exc:
            raise UpstreamError(f"Request timed out: {type(exc).__name__}", retryable=True) from exc
        except httpx.TransportError as exc:
            raise UpstreamError(f"Transport error: {type(exc).__name__}", retryable=True) from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise UpstreamError(
                f"API call failed with status: {response.status_code}",
                upstream_status=response.status_code,
                retryable=_is_transient_status(response.status_code),
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError("Response body is not valid JSON") from exc

        if not isinstance(data, dict):
            raise UpstreamError("Response body is not a JSON object")
        return data


def build_gemini_client(http_client: Optional[httpx.AsyncClient] = None) -> GeminiClient:
    """Build a GeminiClient from the service settings."""
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_API_BASE,
        http_client=http_client,
    )

