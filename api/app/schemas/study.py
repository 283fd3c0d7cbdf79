"""
Study session, review and statistics schemas.
"""
from pydantic import Field, StrictInt, field_serializer
from typing import Optional
from datetime import datetime

from app.schemas.card import CardResponse
from app.schemas.utils import CamelModel, as_utc


class ReviewRequest(CamelModel):
    """Review submission for a single card."""
    card_id: int = Field(..., description="Card ID being reviewed")
    # Strict so booleans and numeric strings are refused; range is checked by the scheduler
    quality: StrictInt = Field(..., description="Recall quality: 0 (blackout) to 5 (perfect)")

    class Config:
        json_schema_extra = {
            "example": {
                "cardId": 1,
                "quality": 4
            }
        }


class ReviewResponse(CamelModel):
    """Outcome of a recorded review."""
    next_review_date: datetime = Field(..., description="When the card is due again (UTC)")
    interval: int = Field(..., description="Days until the next review")

    @field_serializer('next_review_date')
    def serialize_next_review_date(self, value: datetime) -> datetime:
        return as_utc(value)


class ProgressResponse(CamelModel):
    """Retention state attached to a learned card."""
    card_id: int
    interval: int
    ease_factor: float
    review_count: int
    next_review_date: datetime
    last_reviewed_at: Optional[datetime] = None

    @field_serializer('next_review_date', 'last_reviewed_at')
    def serialize_dates(self, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class StudyItemResponse(CardResponse):
    """A card in a study session, flagged new or due."""
    progress: Optional[ProgressResponse] = None
    is_new: bool


class StudyStatsResponse(CamelModel):
    """Dashboard counters."""
    total_learned: int = Field(..., description="Cards with a progress record")
    due_today: int = Field(..., description="Progress records due now")
    new_remaining: int = Field(..., description="Cards never reviewed")
