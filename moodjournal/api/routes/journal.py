"""
Journal API Routes

- POST /journal                      store + analyze an entry
- GET  /journal/{user_id}            a user's entries and analyses
- GET  /journal/analysis/{journal_id} analysis status for one entry
- POST /journal/reconcile            re-run analysis for unanalyzed entries

Domain errors propagate to the handlers in ``moodjournal.shared.errors``.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from moodjournal.api.dependencies import get_pipeline
from moodjournal.api.models import JournalCreateRequest, ReconcileRequest
from moodjournal.features.journaling.models import (
    AnalysisStatus,
    JournalHistory,
    JournalSubmission,
    ReconcileReport,
)
from moodjournal.features.journaling.pipeline import JournalPipeline
from moodjournal.shared.errors import ErrorResponse

router = APIRouter(
    tags=["Journal"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
logger = logging.getLogger("MoodJournal.API.Journal")


@router.post("/journal", response_model=JournalSubmission, status_code=status.HTTP_201_CREATED)
async def create_journal(
    request: JournalCreateRequest,
    pipeline: JournalPipeline = Depends(get_pipeline),
) -> JournalSubmission:
    """
    Add a journal entry and run the mood analysis.

    Responds 201 with the stored entry, its analysis and a supportive
    message. Extraction or store failures respond 500; the entry itself
    stays stored with analysisDone = false.
    """
    return await pipeline.submit(request.user_id, request.text)


@router.get(
    "/journal/analysis/{journal_id}",
    response_model=AnalysisStatus,
    response_model_exclude_none=True,
)
async def get_journal_analysis(
    journal_id: str,
    pipeline: JournalPipeline = Depends(get_pipeline),
) -> AnalysisStatus:
    """Check whether analysis is complete for a specific journal entry."""
    return await pipeline.get_analysis_status(journal_id)


@router.post("/journal/reconcile", response_model=ReconcileReport)
async def reconcile_journals(
    request: Optional[ReconcileRequest] = Body(default=None),
    pipeline: JournalPipeline = Depends(get_pipeline),
) -> ReconcileReport:
    """Re-run analysis for entries whose analysis never completed."""
    request = request or ReconcileRequest()
    logger.info("Starting reconciliation (user_id=%s, limit=%s)", request.user_id, request.limit)
    return await pipeline.reconcile_pending(user_id=request.user_id, limit=request.limit)


@router.get("/journal/{user_id}", response_model=JournalHistory)
async def list_journals(
    user_id: str,
    pipeline: JournalPipeline = Depends(get_pipeline),
) -> JournalHistory:
    """Fetch all journals (newest first) and analyses for a user."""
    return pipeline.list_for_user(user_id)
