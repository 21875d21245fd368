"""Models for the mood extraction / normalization steps."""

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from moodjournal.features.database.models import Trigger

Sentiment = Literal["positive", "neutral", "negative"]


class RawExtraction(BaseModel):
    """
    Unvalidated extraction output, exactly as the model returned it.

    Every field is optional and may hold any JSON value; repairing it is the
    normalizer's job.
    """

    model_config = ConfigDict(extra="ignore")

    sentiment: Any = None
    score: Any = None
    emotions: Any = None
    triggers: Any = None


class NormalizedAnalysis(BaseModel):
    """Extraction output after repair. Always safe to persist."""

    sentiment: Sentiment
    score: float = Field(ge=-1.0, le=1.0)
    magnitude: float = Field(ge=0.0, le=2.5)
    emotions: List[str] = Field(min_length=1)
    triggers: List[Trigger] = Field(min_length=1)
