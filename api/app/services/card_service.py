"""
Card service for business logic related to the card catalogue.
"""
import logging
from sqlmodel import Session, select
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from typing import Iterable, List, Optional

from app.core.exceptions import NotFoundError, PersistenceError
from app.models import Card
from app.schemas.card import CardResponse, CreateCardRequest
from app.services.progress_service import validate_limit

logger = logging.getLogger(__name__)


# Sample of the 2008 US Civics test, loaded into an empty database
SAMPLE_CARDS = [
    {
        "question": "What is the supreme law of the land?",
        "answer": "The Constitution",
        "category": "Principles of American Democracy",
    },
    {
        "question": "What does the Constitution do?",
        "answer": "Sets up the government",
        "category": "Principles of American Democracy",
    },
    {
        "question": "The idea of self-government is in the first three words of the Constitution. What are these words?",
        "answer": "We the People",
        "category": "Principles of American Democracy",
    },
    {
        "question": "What is an amendment?",
        "answer": "A change (to the Constitution)",
        "category": "Principles of American Democracy",
    },
    {
        "question": "What do we call the first ten amendments to the Constitution?",
        "answer": "The Bill of Rights",
        "category": "Principles of American Democracy",
    },
    {
        "question": "What is one right or freedom from the First Amendment?",
        "answer": "Speech",
        "category": "Principles of American Democracy",
    },
    {
        "question": "How many amendments does the Constitution have?",
        "answer": "Twenty-seven (27)",
        "category": "Principles of American Democracy",
    },
    {
        "question": "What did the Declaration of Independence do?",
        "answer": "Announced our independence (from Great Britain)",
        "category": "Principles of American Democracy",
    },
    {
        "question": "Who is in charge of the executive branch?",
        "answer": "The President",
        "category": "System of Government",
    },
    {
        "question": "Who makes federal laws?",
        "answer": "Congress",
        "category": "System of Government",
    },
]


def list_cards(
    session: Session,
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None
) -> List[Card]:
    """
    Get cards in id order with optional category filtering.

    Args:
        session: Database session
        skip: Number of cards to skip
        limit: Maximum number of cards to return
        category: Optional filter by category

    Returns:
        List of cards
    """
    validate_limit(skip, "skip")
    validate_limit(limit, "limit")

    query = select(Card)
    if category is not None:
        query = query.where(Card.category == category)

    return list(session.exec(query.order_by(Card.id).offset(skip).limit(limit)).all())


def get_card(session: Session, card_id: int) -> Card:
    """
    Get a card by ID.

    Raises:
        NotFoundError: If the card does not exist
    """
    card = session.get(Card, card_id)
    if not card:
        raise NotFoundError(f"Card with id {card_id} not found")
    return card


def create_card(session: Session, request: CreateCardRequest) -> Card:
    """
    Add a card to the catalogue.

    Args:
        session: Database session
        request: Card content

    Returns:
        The created card

    Raises:
        PersistenceError: If the insert fails
    """
    card = Card(
        question=request.question.strip(),
        answer=request.answer.strip(),
        translation=request.translation,
        category=request.category
    )
    session.add(card)
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error creating card: {str(e)}")
        raise PersistenceError(f"Failed to create card: {str(e)}") from e

    session.refresh(card)
    logger.info(f"Created card {card.id} in category {card.category!r}")
    return card


def seed_cards(session: Session, cards: Iterable[dict]) -> int:
    """
    Insert cards only when the card table is empty.

    Args:
        session: Database session
        cards: Card field dicts (question, answer, optional translation/category)

    Returns:
        Number of cards inserted (0 if the table already had cards)
    """
    existing = session.exec(select(func.count(Card.id))).one()
    if existing:
        logger.info(f"Skipping card seed: {existing} card(s) already present")
        return 0

    new_cards = [Card(**data) for data in cards]
    session.add_all(new_cards)
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error seeding cards: {str(e)}")
        raise PersistenceError(f"Failed to seed cards: {str(e)}") from e

    logger.info(f"Seeded {len(new_cards)} card(s)")
    return len(new_cards)


def build_card_response(card: Card) -> CardResponse:
    """Convert a Card row to its API representation."""
    return CardResponse(
        id=card.id,
        question=card.question,
        answer=card.answer,
        translation=card.translation,
        category=card.category
    )
