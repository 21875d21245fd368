"""
Database Client - Unified Access to the Journal Repositories

Thin wrapper that delegates to the journal and mood-analysis repositories.
"""

import logging
from functools import lru_cache

from moodjournal.core.database import get_supabase
from moodjournal.features.database.repositories.journals import JournalsRepository
from moodjournal.features.database.repositories.mood_analyses import MoodAnalysesRepository

logger = logging.getLogger("MoodJournal.Database")


class DatabaseClient:
    """
    Unified database client providing access to all repositories.

    Usage:
        db = get_database_client()
        entry = db.journals.create_entry(user_id, text)
        analyses = db.mood_analyses.list_by_user(user_id)
    """

    def __init__(self, client=None):
        """Initialize database client with all repositories."""
        self._client = client if client is not None else get_supabase()

        self.journals = JournalsRepository(self._client)
        self.mood_analyses = MoodAnalysesRepository(self._client)

        logger.info("Database client initialized with all repositories")

    @property
    def client(self):
        """Direct access to Supabase client for advanced queries."""
        return self._client


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    """Get the singleton database client."""
    return DatabaseClient()
