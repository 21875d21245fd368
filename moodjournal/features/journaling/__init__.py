"""
Journaling feature module.

Runs the journal mood-analysis pipeline:
- store the entry
- extract and normalize its mood analysis
- generate a supportive message
- reconcile entries whose analysis never completed
"""

from moodjournal.features.journaling.models import (
    AnalysisStatus,
    JournalHistory,
    JournalSubmission,
    ReconcileReport,
)
from moodjournal.features.journaling.pipeline import JournalPipeline, PipelineRun, PipelineStage

__all__ = [
    "JournalPipeline",
    "PipelineRun",
    "PipelineStage",
    "AnalysisStatus",
    "JournalHistory",
    "JournalSubmission",
    "ReconcileReport",
]
