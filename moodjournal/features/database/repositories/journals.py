"""
Journals Repository - Journal entry data access operations.

Handles:
- Creating entries (raw text is stored before any analysis runs)
- Flagging entries as analyzed
- Listing a user's entries, newest first
- Finding entries whose analysis never completed
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from moodjournal.core.logging_utils import sanitize_for_logging
from moodjournal.features.database.models import JournalEntry
from moodjournal.shared.errors import StoreError, ValidationError

logger = logging.getLogger("MoodJournal.Database.Journals")

TABLE = "journals"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JournalsRepository:
    """Repository for journal entry operations."""

    def __init__(self, client, now: Callable[[], datetime] = _utcnow):
        """Initialize with Supabase client."""
        self.client = client
        self._now = now

    def create_entry(self, user_id: Optional[str], text: Optional[str]) -> JournalEntry:
        """
        Create a journal entry with analysis_done = False.

        Raises:
            ValidationError: If user_id is missing or text is empty
            StoreError: If the insert fails
        """
        if user_id is None or not str(user_id).strip():
            raise ValidationError("userId is required", details={"field": "userId"})
        if text is None or not text.strip():
            raise ValidationError("Journal text is required", details={"field": "text"})

        payload = {
            "user_id": str(user_id),
            "text": text,
            "timestamp": self._now().isoformat(),
            "analysis_done": False,
        }

        try:
            result = self.client.table(TABLE).insert(payload).execute()
        except Exception as e:
            logger.error(f"Error creating journal for user {user_id}: {e}")
            raise StoreError("Failed to create journal entry", operation="insert") from e

        if not result.data:
            raise StoreError("Journal insert returned no row", operation="insert")

        entry = JournalEntry.from_row(result.data[0])
        logger.info(
            f"Journal created: {entry.id}",
            extra={"user_id": entry.user_id, "preview": sanitize_for_logging(text, max_len=40)},
        )
        return entry

    def get_by_id(self, entry_id: str) -> Optional[JournalEntry]:
        """Get a journal entry by ID."""
        try:
            result = self.client.table(TABLE).select("*").eq("id", entry_id).execute()
        except Exception as e:
            logger.error(f"Error getting journal {entry_id}: {e}")
            raise StoreError("Failed to load journal entry", operation="select") from e
        return JournalEntry.from_row(result.data[0]) if result.data else None

    def mark_analyzed(self, entry_id: str) -> None:
        """Flag an entry as analyzed. Setting an already-true flag is a no-op."""
        try:
            self.client.table(TABLE).update({"analysis_done": True}).eq("id", entry_id).execute()
        except Exception as e:
            logger.error(f"Error marking journal {entry_id} analyzed: {e}")
            raise StoreError("Failed to update journal entry", operation="update") from e
        logger.info(f"Journal {entry_id} marked analyzed")

    def list_by_user(self, user_id: str) -> List[JournalEntry]:
        """Get all entries for a user, newest first."""
        try:
            result = self.client.table(TABLE).select("*").eq(
                "user_id", user_id
            ).order("timestamp", desc=True).execute()
        except Exception as e:
            logger.error(f"Error listing journals for user {user_id}: {e}")
            raise StoreError("Failed to list journal entries", operation="select") from e
        return [JournalEntry.from_row(row) for row in result.data or []]

    def list_pending(self, user_id: Optional[str] = None, limit: int = 50) -> List[JournalEntry]:
        """Get entries whose analysis never completed, oldest first."""
        try:
            query = self.client.table(TABLE).select("*").eq("analysis_done", False)
            if user_id:
                query = query.eq("user_id", user_id)
            result = query.order("timestamp").limit(limit).execute()
        except Exception as e:
            logger.error(f"Error listing pending journals: {e}")
            raise StoreError("Failed to list pending journal entries", operation="select") from e
        return [JournalEntry.from_row(row) for row in result.data or []]
