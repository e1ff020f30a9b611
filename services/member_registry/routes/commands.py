"""
Save Commands
=============

A save request is classified once, at the boundary, into either a create or
an update of an existing record.

Version: 0.1.0
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from shared.models.common import Record


R = TypeVar("R", bound=Record)


@dataclass(frozen=True)
class CreateCommand(Generic[R]):
    """Store ``record`` as a new record. ``record.id`` is None."""

    record: R


@dataclass(frozen=True)
class UpdateCommand(Generic[R]):
    """Replace the stored record ``identifier`` with ``record``."""

    record: R
    identifier: int


SaveCommand = CreateCommand[R] | UpdateCommand[R]


def classify_save(record: R) -> SaveCommand[R]:
    """Create when the record carries no identifier, update otherwise."""
    if record.id is None:
        return CreateCommand(record)
    return UpdateCommand(record, record.id)
