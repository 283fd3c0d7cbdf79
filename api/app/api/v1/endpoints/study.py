"""
Study endpoints: session composition, review submission and statistics.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List, Optional
import logging

from app.core.config import settings
from app.core.database import get_session
from app.schemas.study import (
    ReviewRequest,
    ReviewResponse,
    StudyItemResponse,
    StudyStatsResponse,
)
from app.services.progress_service import submit_review
from app.services.session_service import compose_session
from app.services.stats_service import compute_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/study", tags=["study"])


@router.get("/session", response_model=List[StudyItemResponse])
async def get_study_session(
    due_limit: Optional[int] = Query(None, alias="dueLimit"),
    new_limit: Optional[int] = Query(None, alias="newLimit"),
    session: Session = Depends(get_session)
):
    """
    Get a mixed batch of due and new cards.
    
    Due cards (most overdue first) come before new cards. Limits default to
    the configured session sizes. An empty list means nothing to study.
    
    Args:
        due_limit: Maximum number of due cards
        new_limit: Maximum number of new cards
    
    Returns:
        Ordered list of study items
    """
    if due_limit is None:
        due_limit = settings.session_due_limit
    if new_limit is None:
        new_limit = settings.session_new_limit

    return compose_session(session, due_limit, new_limit)


@router.post("/review", response_model=ReviewResponse, status_code=status.HTTP_200_OK)
async def post_review(
    request: ReviewRequest,
    session: Session = Depends(get_session)
):
    """
    Submit a review for a card and reschedule it with SM-2.
    
    Returns:
        The next review date and interval in days
    """
    progress = submit_review(session, request.card_id, request.quality)
    return ReviewResponse(
        next_review_date=progress.next_review_at,
        interval=progress.interval
    )


@router.get("/stats", response_model=StudyStatsResponse)
async def get_study_stats(session: Session = Depends(get_session)):
    """Get learned, due and new card counts."""
    return compute_stats(session)
