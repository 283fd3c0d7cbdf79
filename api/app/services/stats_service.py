"""
Study statistics for the dashboard.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Session

from app.schemas.study import StudyStatsResponse
from app.services.progress_service import count_due, count_new, count_progress


def compute_stats(session: Session, now: Optional[datetime] = None) -> StudyStatsResponse:
    """
    Count learned, due and new cards from the current database state.

    new_remaining counts every card without progress, not a per-day allowance.
    """
    if now is None:
        now = datetime.utcnow()

    return StudyStatsResponse(
        total_learned=count_progress(session),
        due_today=count_due(session, now),
        new_remaining=count_new(session)
    )
