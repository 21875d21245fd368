"""
Database Feature Module - Journal Data Access Layer

Usage:
    from moodjournal.features.database import get_database_client

    db = get_database_client()
    entry = db.journals.create_entry("u1", "Today was good")
    db.journals.mark_analyzed(entry.id)
"""

from moodjournal.features.database.client import DatabaseClient, get_database_client
from moodjournal.features.database.models import JournalEntry, MoodAnalysis, Trigger

__all__ = [
    "DatabaseClient",
    "get_database_client",
    "JournalEntry",
    "MoodAnalysis",
    "Trigger",
]
