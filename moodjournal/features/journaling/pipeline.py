"""
==============================================================================
JOURNAL MOOD-ANALYSIS PIPELINE
==============================================================================

Sequences one journal submission through:

1. RECEIVED   - entry stored (before extraction, so the text is never lost)
2. EXTRACTED  - model judgment obtained (UpstreamError aborts the request)
3. NORMALIZED - judgment repaired against the fixed vocabulary
4. PERSISTED  - analysis stored, then the entry flagged analysis_done
5. COMPLETED  - supportive message generated (never fails)

Side effects are strictly ordered. A failure before PERSISTED leaves the
entry with analysis_done = False; ``reconcile_pending`` picks those up
later. Stage tracking is in-memory only and exists for logging.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from moodjournal.core.config import settings
from moodjournal.features.database.client import DatabaseClient
from moodjournal.features.database.models import JournalEntry, MoodAnalysis
from moodjournal.features.journaling.models import (
    AnalysisStatus,
    JournalHistory,
    JournalSubmission,
    ReconcileReport,
)
from moodjournal.features.mood.extraction import SentimentExtractor
from moodjournal.features.mood.normalizer import normalize
from moodjournal.features.mood.support import SupportMessageGenerator
from moodjournal.shared.constants import FALLBACK_SUPPORT_MESSAGE
from moodjournal.shared.errors import NotFoundError

logger = logging.getLogger("MoodJournal.Pipeline")

PENDING_MESSAGE = "Analysis still in progress"


class PipelineStage(str, Enum):
    RECEIVED = "received"
    EXTRACTED = "extracted"
    NORMALIZED = "normalized"
    PERSISTED = "persisted"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PipelineRun:
    """In-memory progress of one entry through the pipeline."""

    journal_id: Optional[str] = None
    stage: Optional[PipelineStage] = None
    failed_at: Optional[PipelineStage] = None
    history: List[PipelineStage] = field(default_factory=list)

    def advance(self, stage: PipelineStage) -> None:
        self.stage = stage
        self.history.append(stage)
        logger.debug("Journal %s -> %s", self.journal_id, stage.value)

    def fail(self, exc: Exception) -> None:
        self.failed_at = self.stage
        self.stage = PipelineStage.FAILED
        self.history.append(PipelineStage.FAILED)
        logger.error(
            "Journal pipeline failed after %s: %s",
            self.failed_at.value if self.failed_at else "start",
            exc,
            extra={"journal_id": self.journal_id, "stages": self.stage_names},
        )

    @property
    def stage_names(self) -> List[str]:
        return [stage.value for stage in self.history]


class JournalPipeline:
    """Orchestrates storage, extraction, normalization and support messages."""

    def __init__(
        self,
        db: DatabaseClient,
        extractor: SentimentExtractor,
        support: SupportMessageGenerator,
    ) -> None:
        self.db = db
        self.extractor = extractor
        self.support = support

    async def submit(self, user_id: str, text: str) -> JournalSubmission:
        """
        Store and analyze one journal entry.

        Raises:
            ValidationError: If user_id or text is missing
            UpstreamError: If extraction fails (the entry stays unanalyzed)
            StoreError: If a store read/write fails
        """
        run = PipelineRun()
        try:
            entry = self.db.journals.create_entry(user_id, text)
            run.journal_id = entry.id
            run.advance(PipelineStage.RECEIVED)

            analysis = await self._analyze(entry, run)
        except Exception as exc:
            run.fail(exc)
            raise

        support_message = await self.support.generate_message(analysis, entry.text)
        run.advance(PipelineStage.COMPLETED)

        logger.info(
            "Journal submission completed",
            extra={"journal_id": entry.id, "sentiment": analysis.sentiment},
        )
        return JournalSubmission(
            journal=entry.model_copy(update={"analysis_done": True}),
            analysis=analysis,
            support_message=support_message,
        )

    async def _analyze(self, entry: JournalEntry, run: PipelineRun) -> MoodAnalysis:
        raw = await self.extractor.extract(entry.text)
        run.advance(PipelineStage.EXTRACTED)

        normalized = normalize(raw)
        run.advance(PipelineStage.NORMALIZED)

        analysis = self.db.mood_analyses.create(entry.id, entry.user_id, normalized)
        self.db.journals.mark_analyzed(entry.id)
        run.advance(PipelineStage.PERSISTED)
        return analysis

    def list_for_user(self, user_id: str) -> JournalHistory:
        """All entries for a user (newest first) plus their analyses."""
        return JournalHistory(
            journals=self.db.journals.list_by_user(user_id),
            analysis=self.db.mood_analyses.list_by_user(user_id),
        )

    async def get_analysis_status(self, journal_id: str) -> AnalysisStatus:
        """
        Report whether an entry has been analyzed.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = self.db.journals.get_by_id(journal_id)
        if entry is None:
            raise NotFoundError("Journal not found", details={"journal_id": journal_id})

        if not entry.analysis_done:
            return AnalysisStatus(analyzed=False, message=PENDING_MESSAGE)

        analysis = self.db.mood_analyses.get_by_journal(entry.id)
        support_message = FALLBACK_SUPPORT_MESSAGE
        if analysis is not None:
            support_message = await self.support.generate_message(analysis, entry.text)

        return AnalysisStatus(analyzed=True, analysis=analysis, support_message=support_message)

    async def reconcile_pending(
        self,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> ReconcileReport:
        """
        Re-run analysis for entries left with analysis_done = False.

        An entry that already has an analysis row only gets its flag fixed.
        Per-entry failures are counted and do not stop the batch.
        """
        pending = self.db.journals.list_pending(
            user_id=user_id,
            limit=limit or settings.RECONCILE_BATCH_LIMIT,
        )
        report = ReconcileReport(processed=len(pending))

        for entry in pending:
            run = PipelineRun(journal_id=entry.id)
            run.advance(PipelineStage.RECEIVED)
            try:
                if self.db.mood_analyses.get_by_journal(entry.id) is not None:
                    self.db.journals.mark_analyzed(entry.id)
                    run.advance(PipelineStage.PERSISTED)
                else:
                    await self._analyze(entry, run)
            except Exception as exc:  # pylint: disable=broad-except
                run.fail(exc)
                report.failed += 1
                report.failed_ids.append(entry.id)
                continue
            report.analyzed += 1

        logger.info(
            "Reconciled %s pending journal(s): %s analyzed, %s failed",
            report.processed,
            report.analyzed,
            report.failed,
        )
        return report
