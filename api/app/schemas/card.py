"""
Card schemas.
"""
from pydantic import Field
from typing import Optional

from app.schemas.utils import CamelModel


class CreateCardRequest(CamelModel):
    """Request to add a card to the catalogue."""
    question: str = Field(..., min_length=1, description="Question shown on the front of the card")
    answer: str = Field(..., min_length=1, description="Expected answer")
    translation: Optional[str] = Field(None, description="Optional rendering of the pair in another language")
    category: Optional[str] = Field("general", description="Classification label")

    class Config:
        json_schema_extra = {
            "example": {
                "question": "What is the supreme law of the land?",
                "answer": "The Constitution",
                "category": "Principles of American Democracy"
            }
        }


class CardResponse(CamelModel):
    """Response schema for a card."""
    id: int
    question: str
    answer: str
    translation: Optional[str] = None
    category: Optional[str] = None
