"""
Models package - imports all models so they register with SQLModel metadata.
"""
from app.models.card import Card
from app.models.card_progress import CardProgress

__all__ = [
    'Card',
    'CardProgress',
]
