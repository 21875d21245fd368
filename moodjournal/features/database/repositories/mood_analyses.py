"""
Mood Analyses Repository - one normalized analysis per journal entry.

Analyses are immutable once written; there is no update path.
"""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, List, Optional

from moodjournal.features.database.models import MoodAnalysis
from moodjournal.shared.errors import StoreError

if TYPE_CHECKING:
    from moodjournal.features.mood.models import NormalizedAnalysis

logger = logging.getLogger("MoodJournal.Database.MoodAnalyses")

TABLE = "mood_analyses"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MoodAnalysesRepository:
    """Repository for mood analysis operations."""

    def __init__(self, client, now: Callable[[], datetime] = _utcnow):
        """Initialize with Supabase client."""
        self.client = client
        self._now = now

    def create(self, journal_id: str, user_id: str, analysis: "NormalizedAnalysis") -> MoodAnalysis:
        """Persist the analysis for a journal entry."""
        payload = {
            "journal_id": journal_id,
            "user_id": user_id,
            "sentiment": analysis.sentiment,
            "score": analysis.score,
            "magnitude": analysis.magnitude,
            "emotions": list(analysis.emotions),
            "triggers": [trigger.model_dump() for trigger in analysis.triggers],
            "created_at": self._now().isoformat(),
        }

        try:
            result = self.client.table(TABLE).insert(payload).execute()
        except Exception as e:
            logger.error(f"Error saving mood analysis for journal {journal_id}: {e}")
            raise StoreError("Failed to save mood analysis", operation="insert") from e

        if not result.data:
            raise StoreError("Mood analysis insert returned no row", operation="insert")

        record = MoodAnalysis.from_row(result.data[0])
        logger.info(
            f"Mood analysis {record.id} saved for journal {journal_id}",
            extra={"sentiment": record.sentiment, "emotion_count": len(record.emotions)},
        )
        return record

    def get_by_journal(self, journal_id: str) -> Optional[MoodAnalysis]:
        """Get the analysis for a journal entry, if one exists."""
        try:
            result = self.client.table(TABLE).select("*").eq(
                "journal_id", journal_id
            ).limit(1).execute()
        except Exception as e:
            logger.error(f"Error getting mood analysis for journal {journal_id}: {e}")
            raise StoreError("Failed to load mood analysis", operation="select") from e
        return MoodAnalysis.from_row(result.data[0]) if result.data else None

    def list_by_user(self, user_id: str) -> List[MoodAnalysis]:
        """Get all analyses for a user (no particular order)."""
        try:
            result = self.client.table(TABLE).select("*").eq("user_id", user_id).execute()
        except Exception as e:
            logger.error(f"Error listing mood analyses for user {user_id}: {e}")
            raise StoreError("Failed to list mood analyses", operation="select") from e
        return [MoodAnalysis.from_row(row) for row in result.data or []]
