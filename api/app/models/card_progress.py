"""
CardProgress model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class CardProgress(SQLModel, table=True):
    """CardProgress table - SM-2 retention state, at most one row per card."""
    __tablename__ = "card_progress"
    
    id: Optional[int] = Field(default=None, primary_key=True)
    card_id: int = Field(foreign_key="card.id", unique=True, index=True)
    interval: int = Field(default=0)  # Days until next review
    ease_factor: float = Field(default=2.5)  # Never below 1.3
    review_count: int = Field(default=0)  # Consecutive successful reviews
    next_review_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    last_reviewed_at: Optional[datetime] = None
