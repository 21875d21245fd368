"""Database Repositories - Organized data access."""

from moodjournal.features.database.repositories.journals import JournalsRepository
from moodjournal.features.database.repositories.mood_analyses import MoodAnalysesRepository

__all__ = [
    "JournalsRepository",
    "MoodAnalysesRepository",
]
