"""
Card catalogue endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List, Optional
import logging

from app.core.database import get_session
from app.schemas.card import CardResponse, CreateCardRequest
from app.services.card_service import (
    build_card_response,
    create_card,
    get_card,
    list_cards,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=List[CardResponse])
async def get_cards(
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """
    Get cards with optional filtering.
    
    Args:
        skip: Number of cards to skip
        limit: Maximum number of cards to return
        category: Optional filter by category
    
    Returns:
        List of cards
    """
    cards = list_cards(session, skip=skip, limit=limit, category=category)
    return [build_card_response(card) for card in cards]


@router.get("/{card_id}", response_model=CardResponse)
async def get_card_by_id(
    card_id: int,
    session: Session = Depends(get_session)
):
    """Get a single card by ID."""
    return build_card_response(get_card(session, card_id))


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_new_card(
    request: CreateCardRequest,
    session: Session = Depends(get_session)
):
    """
    Add a card to the catalogue.
    
    New cards have no progress and show up in the next study session as new items.
    """
    card = create_card(session, request)
    return build_card_response(card)
