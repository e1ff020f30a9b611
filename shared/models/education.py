"""
Education Models
================

Models for a member's basic education and further education courses.

Version: 0.1.0
"""

from datetime import date

from pydantic import Field, model_validator

from shared.models.common import Record


class Education(Record):
    """A completed basic education (e.g. a lifeguard brevet)."""

    member_id: int = Field(..., description="Owning member")
    title: str = Field(..., min_length=1, max_length=255)
    institution: str | None = Field(default=None, max_length=255)
    completed_on: date | None = None


class FurtherEducation(Record):
    """A refresher or further education course with optional validity."""

    member_id: int = Field(..., description="Owning member")
    course: str = Field(..., min_length=1, max_length=255)
    completed_on: date | None = None
    valid_until: date | None = None

    @model_validator(mode="after")
    def check_validity_window(self) -> "FurtherEducation":
        """A course cannot expire before it was completed."""
        if self.completed_on and self.valid_until and self.valid_until < self.completed_on:
            raise ValueError("valid_until must not be before completed_on")
        return self
