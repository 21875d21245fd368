"""Sentiment extraction: entry text -> raw sentiment/emotion/trigger JSON."""

import json
import logging
import re
from typing import Optional

from moodjournal.features.mood.models import RawExtraction
from moodjournal.features.mood.prompts import (
    EXTRACTION_GENERATION_CONFIG,
    EXTRACTION_SYSTEM_INSTRUCTION,
    build_extraction_prompt,
)
from moodjournal.services.gemini import NO_RETRY, GeminiClient, RetryPolicy
from moodjournal.shared.errors import UpstreamError

logger = logging.getLogger("MoodJournal.Mood.Extraction")


def strip_json_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\n?", "", text)
        text = re.sub(r"\n?```$", "", text)
    return text


def parse_extraction(text: str) -> RawExtraction:
    """
    Parse the model's candidate text into a RawExtraction.

    Missing or odd fields are left for the normalizer; only text that is not
    a JSON object is an error.
    """
    cleaned = strip_json_fences(text)
    if not cleaned:
        raise UpstreamError("Extraction response contained no text")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Extraction returned unparsable JSON: %s | snippet=%s", exc, cleaned[:200])
        raise UpstreamError("Extraction response is not valid JSON") from exc

    if not isinstance(data, dict):
        raise UpstreamError("Extraction response is not a JSON object")

    return RawExtraction.model_validate(data)


class SentimentExtractor:
    """Send entry text to the model and return its unvalidated judgment."""

    def __init__(
        self,
        gemini: GeminiClient,
        timeout: Optional[float] = None,
        retry: RetryPolicy = NO_RETRY,
    ) -> None:
        self.gemini = gemini
        self.timeout = timeout
        self.retry = retry

    async def extract(self, text: str) -> RawExtraction:
        """
        Extract sentiment data for one entry.

        Raises:
            UpstreamError: If the call fails or its output is not a JSON object
        """
        response = await self.gemini.generate(
            prompt=build_extraction_prompt(text),
            system_instruction=EXTRACTION_SYSTEM_INSTRUCTION,
            generation_config=EXTRACTION_GENERATION_CONFIG,
            timeout=self.timeout,
            retry=self.retry,
            purpose="extraction",
        )
        raw = parse_extraction(response.text)
        logger.info(
            "Extraction complete: sentiment=%r, emotions=%s, triggers=%s",
            raw.sentiment,
            len(raw.emotions) if isinstance(raw.emotions, list) else 0,
            len(raw.triggers) if isinstance(raw.triggers, list) else 0,
        )
        return raw
