from functools import lru_cache

from moodjournal.core.config import settings
from moodjournal.features.database.client import get_database_client
from moodjournal.features.journaling.pipeline import JournalPipeline
from moodjournal.features.mood.extraction import SentimentExtractor
from moodjournal.features.mood.support import SupportMessageGenerator
from moodjournal.services.gemini import GeminiClient, RetryPolicy, build_gemini_client


@lru_cache(maxsize=1)
def get_gemini_client() -> GeminiClient:
    """Provide a singleton Gemini client for request handlers."""
    return build_gemini_client()


@lru_cache(maxsize=1)
def get_pipeline() -> JournalPipeline:
    """Provide a singleton journal pipeline for request handlers."""
    gemini = get_gemini_client()
    return JournalPipeline(
        db=get_database_client(),
        extractor=SentimentExtractor(
            gemini,
            timeout=settings.EXTRACTION_TIMEOUT_SECONDS,
            retry=RetryPolicy.from_settings(),
        ),
        support=SupportMessageGenerator(gemini, timeout=settings.SUPPORT_TIMEOUT_SECONDS),
    )
