"""
Persisted record models for the journal stores.

Rows are stored with snake_case columns; the API speaks camelCase
(``userId``, ``analysisDone``), so every record dumps by alias.
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base for records: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Trigger(RecordModel):
    """Something in the entry that provoked the mood (a person, event, object)."""
    name: str
    type: str


class JournalEntry(RecordModel):
    """A single user-submitted block of journal text."""
    id: str
    user_id: str
    text: str
    timestamp: datetime
    analysis_done: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "JournalEntry":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            text=row["text"],
            timestamp=row["timestamp"],
            analysis_done=bool(row.get("analysis_done", False)),
        )


class MoodAnalysis(RecordModel):
    """Normalized mood analysis for exactly one journal entry."""
    id: str
    journal_id: str
    user_id: str
    sentiment: str
    score: float
    magnitude: float
    emotions: List[str] = Field(default_factory=list)
    triggers: List[Trigger] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "MoodAnalysis":
        return cls(
            id=str(row["id"]),
            journal_id=str(row["journal_id"]),
            user_id=str(row["user_id"]),
            sentiment=row["sentiment"],
            score=row.get("score") or 0,
            magnitude=row.get("magnitude") or 0,
            emotions=row.get("emotions") or [],
            triggers=row.get("triggers") or [],
            created_at=row["created_at"],
        )
