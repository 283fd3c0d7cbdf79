"""
Card model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Card(SQLModel, table=True):
    """Card table - a question/answer pair the learner studies."""
    __tablename__ = "card"
    
    id: Optional[int] = Field(default=None, primary_key=True)
    question: str
    answer: str
    translation: Optional[str] = None  # Optional rendering of the pair in another language
    category: Optional[str] = Field(default="general")
    created_at: datetime = Field(default_factory=datetime.utcnow)
