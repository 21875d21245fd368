"""Result models returned by the journal pipeline."""

from typing import List, Optional

from pydantic import Field

from moodjournal.features.database.models import JournalEntry, MoodAnalysis, RecordModel


class JournalSubmission(RecordModel):
    """Everything produced by one successful journal submission."""
    journal: JournalEntry
    analysis: MoodAnalysis
    support_message: str


class JournalHistory(RecordModel):
    """A user's entries (newest first) and their analyses (unordered)."""
    journals: List[JournalEntry] = Field(default_factory=list)
    analysis: List[MoodAnalysis] = Field(default_factory=list)


class AnalysisStatus(RecordModel):
    """Whether an entry has been analyzed, with the analysis when it has."""
    analyzed: bool
    message: Optional[str] = None
    analysis: Optional[MoodAnalysis] = None
    support_message: Optional[str] = None


class ReconcileReport(RecordModel):
    """Outcome of re-running analysis for entries left unanalyzed."""
    processed: int = 0
    analyzed: int = 0
    failed: int = 0
    failed_ids: List[str] = Field(default_factory=list)
