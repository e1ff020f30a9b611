"""
Entity Store Interface
======================

Abstract persistence collaborator for one entity type: point lookup,
paged listing, lookup by parent, insert, full-record update and delete.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from shared.models.common import Page, PageRequest, Record
from services.member_registry.exceptions import InvalidSortError
from services.member_registry.resources import Resource


R = TypeVar("R", bound=Record)


class EntityStore(ABC, Generic[R]):
    """
    Persistence for the records of one resource.

    Records go in and come out as Pydantic models. Identifiers are assigned
    by the store on insert.
    """

    def __init__(self, resource: Resource) -> None:
        self.resource = resource

    @property
    def schema(self) -> type[R]:
        return self.resource.schema  # type: ignore[return-value]

    @abstractmethod
    async def get(self, identifier: int) -> R | None:
        """Return the record with ``identifier`` or None."""
        ...

    async def find_page(self, request: PageRequest) -> Page[R]:
        """
        Return one page of records ordered by ``request.sort``.

        Raises:
            InvalidSortError: if a sort key is not a property of the record
        """
        for order in request.sort:
            if order.field not in self.resource.fields:
                raise InvalidSortError(self.resource.name, order.field)
        return await self._find_page(request)

    @abstractmethod
    async def _find_page(self, request: PageRequest) -> Page[R]:
        ...

    @abstractmethod
    async def find_by_parent(self, field: str, parent_id: int) -> list[R]:
        """All records whose ``field`` equals ``parent_id``, ordered by id."""
        ...

    @abstractmethod
    async def insert(self, record: R) -> R:
        """Store a new record and return it with its assigned id."""
        ...

    @abstractmethod
    async def update(self, record: R) -> R | None:
        """Replace the stored record with the same id. None if absent."""
        ...

    @abstractmethod
    async def delete(self, identifier: int) -> bool:
        """Delete by id. Returns whether a record was removed."""
        ...

    @abstractmethod
    async def delete_by_parent(self, field: str, parent_id: int) -> int:
        """Delete all records owned by ``parent_id``. Returns the count."""
        ...

    def _values(self, record: R) -> dict:
        """Column values of ``record`` without the identifier."""
        return record.model_dump(exclude={"id"})
