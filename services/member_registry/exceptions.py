"""
Member Registry Errors
======================

Errors raised by endpoints and stores and mapped to HTTP responses by the
application's exception handlers.

Version: 0.1.0
"""

from typing import Any


class RegistryError(Exception):
    """Base class for all member registry errors."""

    status_code: int = 500
    error_key: str = "internalServerError"

    def __init__(self, entity_name: str, description: str | None = None) -> None:
        self.entity_name = entity_name
        self.description = description or self.error_key
        super().__init__(self.description)

    @property
    def message(self) -> str:
        """Machine-readable key shown by the web client's alert service."""
        return f"error.{self.error_key}"


class EntityValidationError(RegistryError):
    """The request was understood but rejected. Not retryable."""

    status_code = 400
    error_key = "validation"


class IdExistsError(EntityValidationError):
    """A create request carried a client-supplied identifier."""

    error_key = "idexists"

    def __init__(self, entity_name: str) -> None:
        super().__init__(
            entity_name,
            f"A new {entity_name} cannot already have an ID",
        )


class InvalidSortError(EntityValidationError):
    """A sort key names a property the entity does not have."""

    error_key = "sort"

    def __init__(self, entity_name: str, field: str) -> None:
        self.field = field
        super().__init__(entity_name, f"No property '{field}' found for type {entity_name}")


class ConstraintViolationError(EntityValidationError):
    """The write would break an integrity rule of the schema."""

    error_key = "constraint"


class InvalidReferenceError(ConstraintViolationError):
    """A foreign key field names a record that does not exist."""

    error_key = "reference"

    def __init__(self, entity_name: str, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(entity_name, f"{field} {value} does not reference an existing record")


class NotFoundError(RegistryError):
    """
    No record exists for the identifier.

    A normal negative outcome for lookups, answered with an empty 404.
    """

    status_code = 404
    error_key = "notfound"

    def __init__(self, entity_name: str, identifier: Any) -> None:
        self.identifier = identifier
        super().__init__(entity_name, f"{entity_name} {identifier} not found")
