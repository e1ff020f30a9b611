"""
Assessment Models
=================

Models for member assessments.

Version: 0.1.0
"""

from datetime import date

from pydantic import Field

from shared.models.common import Record


class Assessment(Record):
    """Result of a practical or theoretical assessment of one member."""

    member_id: int = Field(..., description="Owning member")
    score: int | None = Field(default=None, ge=0, le=100)
    assessed_on: date | None = None
    remarks: str | None = Field(default=None, max_length=1000)
