"""
Shared schema helpers.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Mark a naive datetime as UTC so it serializes with a `Z` suffix."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class CamelModel(BaseModel):
    """
    Base schema whose JSON keys are camelCase.

    Responses are serialized by alias (FastAPI's default), so `next_review_date`
    goes over the wire as `nextReviewDate`. Requests accept either spelling.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
