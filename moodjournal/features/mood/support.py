"""
Supportive message generation.

Cosmetic step: the message is not part of the stored record, so every
failure degrades to ``FALLBACK_SUPPORT_MESSAGE`` instead of raising.
"""

import logging
from typing import Optional, Union

from moodjournal.features.database.models import MoodAnalysis
from moodjournal.features.mood.models import NormalizedAnalysis
from moodjournal.features.mood.prompts import (
    SUPPORT_GENERATION_CONFIG,
    SUPPORT_SYSTEM_INSTRUCTION,
    build_support_prompt,
)
from moodjournal.services.gemini import GeminiClient
from moodjournal.shared.constants import FALLBACK_SUPPORT_MESSAGE

logger = logging.getLogger("MoodJournal.Mood.Support")


class SupportMessageGenerator:
    """Turn an analysis plus the original entry into a short supportive message."""

    def __init__(self, gemini: GeminiClient, timeout: Optional[float] = None) -> None:
        self.gemini = gemini
        self.timeout = timeout

    async def generate_message(
        self,
        analysis: Union[MoodAnalysis, NormalizedAnalysis],
        original_text: str,
    ) -> str:
        """Return the model's trimmed message, or the fallback on any failure."""
        prompt = build_support_prompt(
            text=original_text,
            sentiment=analysis.sentiment,
            emotions=analysis.emotions,
            trigger_names=[trigger.name for trigger in analysis.triggers],
        )

        try:
            response = await self.gemini.generate(
                prompt=prompt,
                system_instruction=SUPPORT_SYSTEM_INSTRUCTION,
                generation_config=SUPPORT_GENERATION_CONFIG,
                timeout=self.timeout,
                purpose="support_message",
            )
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Error generating support message, using fallback: %s", exc)
            return FALLBACK_SUPPORT_MESSAGE

        return response.text.strip()
