"""
Common Models
=============

Paging primitives, base record model and response models.

Version: 0.1.0
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Record(BaseModel):
    """
    Base model for every stored record.

    ``id`` is assigned by the store on insert and is never client-chosen.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(default=None, description="Store-assigned identifier")

    @property
    def has_id(self) -> bool:
        return self.id is not None


class SortDirection(str, Enum):
    """Sort direction of a single sort key."""

    ASC = "asc"
    DESC = "desc"


class SortOrder(BaseModel):
    """One sort key of a paged query."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC

    def __str__(self) -> str:
        return f"{self.field},{self.direction.value}"


def parse_sort(raw: str) -> list[SortOrder]:
    """
    Parse one ``sort`` query value into sort orders.

    Accepts ``field``, ``field,asc``, ``field,desc`` and the multi-field form
    ``a,b,desc`` where the trailing direction applies to every field.

    Examples:
        >>> parse_sort("last_name,desc")
        [SortOrder(field='last_name', direction=<SortDirection.DESC: 'desc'>)]
    """
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    if not parts:
        return []

    direction = SortDirection.ASC
    if parts[-1].lower() in (SortDirection.ASC.value, SortDirection.DESC.value):
        direction = SortDirection(parts.pop().lower())

    return [SortOrder(field=name, direction=direction) for name in parts]


class PageRequest(BaseModel):
    """Pagination parameters (0-based page index)."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=20, ge=1)
    sort: tuple[SortOrder, ...] = ()

    @property
    def offset(self) -> int:
        """Calculate offset for database queries."""
        return self.page * self.size

    @property
    def limit(self) -> int:
        """Get limit for database queries."""
        return self.size

    def with_tie_break(self, field: str = "id") -> "PageRequest":
        """Append ``field`` ascending unless it is already a sort key."""
        if any(order.field == field for order in self.sort):
            return self
        return self.model_copy(update={"sort": (*self.sort, SortOrder(field=field))})


class Page(BaseModel, Generic[T]):
    """One page of a paged listing."""

    content: list[T]
    number: int = 0
    size: int = 20
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        """Number of pages needed for all elements."""
        return (self.total_elements + self.size - 1) // self.size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Check if there's a previous page."""
        return self.number > 0


class ErrorResponse(BaseModel):
    """Error body read by the web client's alert service."""

    message: str = Field(..., description="Machine-readable key, e.g. error.idexists")
    description: str | None = None
    entity: str | None = None
    status_code: int | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str = "healthy"
    service: str
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Component health
    components: dict[str, dict[str, Any]] = Field(default_factory=dict)
