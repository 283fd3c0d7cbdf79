"""
Progress service - reads and writes CardProgress records.

This is the store the scheduling core works against: one progress row per
reviewed card, keyed by card_id. A review is a read-modify-write on that row
and runs inside a single transaction with the parent Card row locked, so two
reviews of the same card cannot interleave and lose an update.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportArgumentType=false
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.models import Card, CardProgress
from app.schemas.study import ProgressResponse
from app.services.srs_service import ScheduleResult, schedule_review, validate_quality

logger = logging.getLogger(__name__)


def validate_limit(limit: int, name: str = "limit") -> int:
    """Reject negative result limits. Zero is allowed and yields no rows."""
    if limit < 0:
        raise ValidationError(f"{name} must be >= 0, got {limit}")
    return limit


def get_progress(
    session: Session,
    card_id: int,
    for_update: bool = False
) -> Optional[CardProgress]:
    """
    Get the progress record for a card.

    Args:
        session: Database session
        card_id: Card ID
        for_update: Lock the row until the transaction ends

    Returns:
        CardProgress, or None if the card has never been reviewed
    """
    query = select(CardProgress).where(CardProgress.card_id == card_id)
    if for_update:
        query = query.with_for_update()
    return session.exec(query).first()


def upsert_progress(
    session: Session,
    card_id: int,
    result: ScheduleResult
) -> CardProgress:
    """
    Create the card's progress record, or replace its scheduling fields.

    The caller owns the transaction; this only flushes.

    Args:
        session: Database session
        card_id: Card ID
        result: New state from the scheduler

    Returns:
        The persisted CardProgress
    """
    progress = get_progress(session, card_id)
    if progress is None:
        progress = CardProgress(card_id=card_id)

    progress.interval = result.interval
    progress.ease_factor = result.ease_factor
    progress.review_count = result.review_count
    progress.next_review_at = result.next_review_at
    progress.last_reviewed_at = result.last_reviewed_at

    session.add(progress)
    session.flush()
    return progress


def list_due(
    session: Session,
    limit: int,
    now: datetime
) -> List[Tuple[Card, CardProgress]]:
    """
    Get cards whose next review time has passed, most overdue first.

    Args:
        session: Database session
        limit: Maximum number of cards to return
        now: Reference time; a card is due when next_review_at <= now

    Returns:
        List of (Card, CardProgress) pairs ordered by next_review_at ascending
    """
    validate_limit(limit, "due_limit")
    if limit == 0:
        return []

    rows = session.exec(
        select(Card, CardProgress)
        .join(CardProgress, CardProgress.card_id == Card.id)
        .where(CardProgress.next_review_at <= now)
        .order_by(CardProgress.next_review_at, Card.id)
        .limit(limit)
    ).all()

    return [(card, progress) for card, progress in rows]


def list_new(session: Session, limit: int) -> List[Card]:
    """
    Get cards that have no progress record, in card id order.

    Args:
        session: Database session
        limit: Maximum number of cards to return

    Returns:
        List of Cards never reviewed
    """
    validate_limit(limit, "new_limit")
    if limit == 0:
        return []

    return list(session.exec(
        select(Card)
        .outerjoin(CardProgress, CardProgress.card_id == Card.id)
        .where(CardProgress.id.is_(None))  # type: ignore
        .order_by(Card.id)
        .limit(limit)
    ).all())


def count_progress(session: Session) -> int:
    """Count all progress records, due or not."""
    return session.exec(select(func.count(CardProgress.id))).one()


def count_due(session: Session, now: datetime) -> int:
    """Count progress records with next_review_at <= now."""
    return session.exec(
        select(func.count(CardProgress.id)).where(CardProgress.next_review_at <= now)
    ).one()


def count_new(session: Session) -> int:
    """Count cards that have no progress record."""
    return session.exec(
        select(func.count(Card.id))
        .select_from(Card)
        .outerjoin(CardProgress, CardProgress.card_id == Card.id)
        .where(CardProgress.id.is_(None))  # type: ignore
    ).one()


def submit_review(
    session: Session,
    card_id: int,
    quality: int,
    now: Optional[datetime] = None
) -> CardProgress:
    """
    Record a review: grade the recall with SM-2 and persist the new progress.

    This function:
    - Rejects grades outside 0-5 before touching the database
    - Locks the Card row so concurrent reviews of the same card run one at a time
    - Reads the current progress (defaults when the card is new)
    - Computes the next state and writes it back in the same transaction

    Args:
        session: Database session
        card_id: Card being reviewed
        quality: Review grade (0-5)
        now: Review time (defaults to current UTC time)

    Returns:
        The updated CardProgress

    Raises:
        InvalidGradeError: If quality is outside 0-5
        NotFoundError: If the card does not exist; no record is created
        PersistenceError: If the database read or write fails; the transaction is rolled back
    """
    validate_quality(quality)

    if now is None:
        now = datetime.utcnow()

    try:
        card = session.exec(
            select(Card).where(Card.id == card_id).with_for_update()
        ).first()
        if not card:
            session.rollback()
            raise NotFoundError(f"Card with id {card_id} not found")

        prior = get_progress(session, card_id, for_update=True)
        result = schedule_review(quality, prior, now)
        progress = upsert_progress(session, card_id, result)
        session.commit()
        session.refresh(progress)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error recording review for card {card_id}: {str(e)}")
        raise PersistenceError(f"Failed to record review for card {card_id}: {str(e)}") from e

    logger.info(
        f"Recorded review for card {card_id}: quality={quality}, interval={progress.interval}, "
        f"ease_factor={progress.ease_factor:.2f}, review_count={progress.review_count}, "
        f"next_review_at={progress.next_review_at}"
    )
    return progress


def build_progress_response(progress: CardProgress) -> ProgressResponse:
    """Convert a CardProgress row to its API representation."""
    return ProgressResponse(
        card_id=progress.card_id,
        interval=progress.interval,
        ease_factor=progress.ease_factor,
        review_count=progress.review_count,
        next_review_date=progress.next_review_at,
        last_reviewed_at=progress.last_reviewed_at
    )
