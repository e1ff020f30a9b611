"""
In-Memory Entity Store
======================

Dictionary-backed EntityStore for development and testing.

Data is stored in memory and lost on restart. Ordering follows PostgreSQL:
NULLs sort last ascending and first descending. Foreign keys registered with
``add_reference`` are enforced like the database would: writes naming a
missing parent are rejected, and deleting a parent cascades or nulls out.

Version: 0.1.0
"""

import itertools
from dataclasses import dataclass
from typing import Any

from shared.logging import get_logger
from shared.models.common import Page, PageRequest
from services.member_registry.exceptions import InvalidReferenceError
from services.member_registry.resources import Resource
from services.member_registry.store.base import EntityStore, R


logger = get_logger(__name__)

ON_DELETE_ACTIONS = frozenset({"CASCADE", "SET NULL"})


@dataclass(frozen=True)
class Reference:
    """Foreign key from ``field`` of ``source`` to the ids of ``target``."""

    field: str
    source: "InMemoryEntityStore[Any]"
    target: "InMemoryEntityStore[Any]"
    on_delete: str


class InMemoryEntityStore(EntityStore[R]):
    """Entity store keeping records in a dict keyed by id."""

    def __init__(self, resource: Resource) -> None:
        super().__init__(resource)
        self._rows: dict[int, R] = {}
        self._sequence = itertools.count(1)
        self._references: list[Reference] = []
        self._dependents: list[Reference] = []

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._rows

    def add_reference(self, field: str, target: "InMemoryEntityStore[Any]", on_delete: str) -> None:
        """
        Enforce ``field`` as a foreign key to ``target``.

        Args:
            field: Record field holding the parent id
            target: Store of the parent records
            on_delete: ``CASCADE`` or ``SET NULL``
        """
        if on_delete not in ON_DELETE_ACTIONS:
            raise ValueError(f"Unsupported ON DELETE action: {on_delete}")

        reference = Reference(field, self, target, on_delete)
        self._references.append(reference)
        target._dependents.append(reference)

    def _copy(self, record: R) -> R:
        return record.model_copy(deep=True)

    def _check_references(self, record: R) -> None:
        for reference in self._references:
            value = getattr(record, reference.field)
            if value is not None and value not in reference.target:
                raise InvalidReferenceError(self.resource.name, reference.field, value)

    async def get(self, identifier: int) -> R | None:
        row = self._rows.get(identifier)
        return self._copy(row) if row is not None else None

    async def _find_page(self, request: PageRequest) -> Page[R]:
        rows = list(self._rows.values())

        # Stable sorts applied from the least significant key
        for order in reversed(request.sort):
            rows.sort(
                key=lambda r, f=order.field: _null_last_key(getattr(r, f)),
                reverse=order.descending,
            )

        window = rows[request.offset : request.offset + request.limit]
        return Page(
            content=[self._copy(r) for r in window],
            number=request.page,
            size=request.size,
            total_elements=len(rows),
        )

    async def find_by_parent(self, field: str, parent_id: int) -> list[R]:
        return [
            self._copy(row)
            for _, row in sorted(self._rows.items())
            if getattr(row, field) == parent_id
        ]

    async def insert(self, record: R) -> R:
        self._check_references(record)

        identifier = next(self._sequence)
        stored = record.model_copy(update={"id": identifier}, deep=True)
        self._rows[identifier] = stored

        logger.debug("row_inserted", store=self.resource.collection, id=identifier)
        return self._copy(stored)

    async def update(self, record: R) -> R | None:
        if record.id not in self._rows:
            return None
        self._check_references(record)
        self._rows[record.id] = self._copy(record)

        logger.debug("row_updated", store=self.resource.collection, id=record.id)
        return self._copy(record)

    async def delete(self, identifier: int) -> bool:
        if identifier not in self._rows:
            return False
        self._remove(identifier)
        return True

    async def delete_by_parent(self, field: str, parent_id: int) -> int:
        owned = self._owned_by(field, parent_id)
        for key in owned:
            self._remove(key)
        return len(owned)

    def _owned_by(self, field: str, parent_id: int) -> list[int]:
        return [key for key, row in self._rows.items() if getattr(row, field) == parent_id]

    def _remove(self, identifier: int) -> None:
        for reference in self._dependents:
            reference.source._on_parent_deleted(reference, identifier)
        del self._rows[identifier]

    def _on_parent_deleted(self, reference: Reference, parent_id: int) -> None:
        owned = self._owned_by(reference.field, parent_id)
        for key in owned:
            if reference.on_delete == "CASCADE":
                self._remove(key)
            else:
                self._rows[key] = self._rows[key].model_copy(update={reference.field: None})

        if owned:
            logger.debug(
                "dependent_rows_updated",
                store=self.resource.collection,
                action=reference.on_delete,
                count=len(owned),
            )


def _null_last_key(value: Any) -> tuple[bool, Any]:
    return (value is None, value)
