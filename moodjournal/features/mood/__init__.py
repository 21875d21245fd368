"""
Mood analysis feature module.

- extraction: entry text -> raw model judgment (Gemini, JSON mode)
- normalizer: raw judgment -> persistable analysis
- support: analysis -> short supportive message (failure-tolerant)
"""

from moodjournal.features.mood.extraction import SentimentExtractor, parse_extraction
from moodjournal.features.mood.models import NormalizedAnalysis, RawExtraction
from moodjournal.features.mood.normalizer import normalize
from moodjournal.features.mood.support import SupportMessageGenerator

__all__ = [
    "SentimentExtractor",
    "SupportMessageGenerator",
    "NormalizedAnalysis",
    "RawExtraction",
    "normalize",
    "parse_extraction",
]
