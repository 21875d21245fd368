"""
Result normalizer for mood extraction output.

Pure and deterministic: repairs whatever the model returned against the
fixed vocabulary in ``moodjournal.shared.constants`` so the result always
satisfies the persisted-analysis invariants (known sentiment, score in
[-1, 1], non-empty emotions and triggers).
"""

import logging
import math
from numbers import Real
from typing import Any, List

from moodjournal.features.database.models import Trigger
from moodjournal.features.mood.models import NormalizedAnalysis, RawExtraction
from moodjournal.shared.constants import (
    DEFAULT_EMOTION,
    DEFAULT_EMOTION_BY_SENTIMENT,
    DEFAULT_TRIGGER_TYPE,
    MAGNITUDE_SCALE,
    SENTIMENTS,
    UNSPECIFIED_TRIGGER,
    WORD_TO_EMOTION,
)

logger = logging.getLogger("MoodJournal.Mood.Normalizer")


def normalize_score(value: Any) -> float:
    """Finite real numbers pass through (clamped to [-1, 1]); anything else is 0."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    try:
        score = float(value)
    except (OverflowError, ValueError):
        return 0.0
    if not math.isfinite(score):
        return 0.0
    return max(-1.0, min(1.0, score))


def magnitude_for(score: float) -> float:
    return abs(score) * MAGNITUDE_SCALE


def _sentiment_key(value: Any) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def normalize_emotions(emotions: Any, sentiment: Any) -> List[str]:
    """
    Lower-case and map each emotion word to its canonical label.

    Unmapped words pass through unchanged and order is preserved. An empty
    result is replaced by a single default chosen from the sentiment.
    """
    items = emotions if isinstance(emotions, (list, tuple)) else []
    mapped = []
    for item in items:
        if not isinstance(item, str) or not item.strip():
            continue
        word = item.strip().lower()
        mapped.append(WORD_TO_EMOTION.get(word, word))

    if not mapped:
        mapped = [DEFAULT_EMOTION_BY_SENTIMENT.get(_sentiment_key(sentiment), DEFAULT_EMOTION)]
    return mapped


def normalize_triggers(triggers: Any) -> List[Trigger]:
    """Keep well-formed triggers; substitute the unspecified sentinel if none remain."""
    items = triggers if isinstance(triggers, (list, tuple)) else []
    kept = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        trigger_type = item.get("type")
        if not isinstance(trigger_type, str) or not trigger_type.strip():
            trigger_type = DEFAULT_TRIGGER_TYPE
        kept.append(Trigger(name=name.strip(), type=trigger_type.strip()))

    if not kept:
        kept = [Trigger(**UNSPECIFIED_TRIGGER)]
    return kept


def normalize_sentiment(sentiment: Any, score: float) -> str:
    """
    Constrain sentiment to the closed enum.

    Out-of-enum values are replaced by the sign of the score.
    """
    key = _sentiment_key(sentiment)
    if key in SENTIMENTS:
        return key

    if score > 0:
        repaired = "positive"
    elif score < 0:
        repaired = "negative"
    else:
        repaired = "neutral"
    logger.warning("Out-of-vocabulary sentiment %r replaced with %r", sentiment, repaired)
    return repaired


def normalize(raw: RawExtraction) -> NormalizedAnalysis:
    """Repair a raw extraction into a persistable analysis."""
    score = normalize_score(raw.score)
    return NormalizedAnalysis(
        sentiment=normalize_sentiment(raw.sentiment, score),
        score=score,
        magnitude=magnitude_for(score),
        emotions=normalize_emotions(raw.emotions, raw.sentiment),
        triggers=normalize_triggers(raw.triggers),
    )
