"""
Study session composition: due reviews first, then never-seen cards.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session

from app.schemas.study import StudyItemResponse
from app.services.progress_service import build_progress_response, list_due, list_new

logger = logging.getLogger(__name__)


def compose_session(
    session: Session,
    due_limit: int,
    new_limit: int,
    now: Optional[datetime] = None
) -> List[StudyItemResponse]:
    """
    Build the ordered list of cards for one study session.

    Due cards come first, most overdue first, each carrying its progress.
    New cards (no progress record) follow in card id order. The result is a
    snapshot of the store: calling again without writes in between returns
    the same list. An empty list means there is nothing to study.

    Args:
        session: Database session
        due_limit: Maximum number of due cards
        new_limit: Maximum number of new cards
        now: Reference time for due selection (defaults to current UTC time)

    Returns:
        At most due_limit + new_limit study items
    """
    if now is None:
        now = datetime.utcnow()

    due = list_due(session, due_limit, now)
    new = list_new(session, new_limit)

    items = [
        StudyItemResponse(
            id=card.id,
            question=card.question,
            answer=card.answer,
            translation=card.translation,
            category=card.category,
            progress=build_progress_response(progress),
            is_new=False
        )
        for card, progress in due
    ]
    items.extend(
        StudyItemResponse(
            id=card.id,
            question=card.question,
            answer=card.answer,
            translation=card.translation,
            category=card.category,
            progress=None,
            is_new=True
        )
        for card in new
    )

    logger.info(f"Composed study session: {len(due)} due, {len(new)} new")
    return items
