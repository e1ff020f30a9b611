"""
Appearances Models
==================

Models for a member's appearances (guard duties, events, trainings led).

Version: 0.1.0
"""

from datetime import date

from pydantic import Field

from shared.models.common import Record


class Appearances(Record):
    """One appearance of a member at an event."""

    member_id: int = Field(..., description="Owning member")
    event: str = Field(..., min_length=1, max_length=255)
    appeared_on: date | None = None
    hours: float | None = Field(default=None, ge=0)
