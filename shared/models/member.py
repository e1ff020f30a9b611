"""
Member Models
=============

Models for organisation members and member types.

Version: 0.1.0
"""

from datetime import date

from pydantic import Field, field_validator

from shared.models.common import Record


class MemberType(Record):
    """Membership category (active, junior, honorary, ...)."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class Member(Record):
    """A member of the organisation."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    birthday: date | None = None
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    street: str | None = Field(default=None, max_length=255)
    zip_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=100)
    membertype_id: int | None = Field(default=None, description="Member type reference")

    @field_validator("first_name", "last_name", "city")
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        """Trim surrounding whitespace from name fields."""
        return v.strip() if v is not None else v

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)
