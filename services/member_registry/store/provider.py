"""
Store Providers
===============

A provider opens a unit of work that hands out one EntityStore per resource.

- SqlStoreProvider: one SQLAlchemy session per unit of work, committed when
  the unit of work ends without error
- MemoryStoreProvider: long-lived in-memory stores shared by all units of work

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from shared.config import StoreBackend, settings
from shared.database.postgres import PostgresClient, postgres_session
from shared.logging import get_logger
from services.member_registry.resources import RESOURCES, Resource
from services.member_registry.store.base import EntityStore
from services.member_registry.store.memory import InMemoryEntityStore
from services.member_registry.store.sql import SqlAlchemyEntityStore


logger = get_logger(__name__)


class StoreSession(ABC):
    """Unit of work handing out entity stores."""

    @abstractmethod
    def store(self, resource: Resource) -> EntityStore[Any]:
        """Entity store for ``resource`` bound to this unit of work."""
        ...


class StoreProvider(ABC):
    """Factory for store sessions, owned by the application."""

    backend: StoreBackend

    @abstractmethod
    def session(self) -> AbstractAsyncContextManager["StoreSession"]:
        """Async context manager yielding a StoreSession."""
        ...

    async def startup(self) -> None:
        """Acquire backing resources."""

    async def shutdown(self) -> None:
        """Release backing resources."""

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        ...


class SqlStoreSession(StoreSession):
    """Stores sharing one SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self._stores: dict[str, EntityStore[Any]] = {}

    def store(self, resource: Resource) -> EntityStore[Any]:
        if resource.name not in self._stores:
            self._stores[resource.name] = SqlAlchemyEntityStore(resource, self.db)
        return self._stores[resource.name]


class SqlStoreProvider(StoreProvider):
    """PostgreSQL-backed stores."""

    backend = StoreBackend.POSTGRES

    @asynccontextmanager
    async def session(self) -> AsyncIterator[StoreSession]:
        async with postgres_session() as db:
            yield SqlStoreSession(db)

    async def startup(self) -> None:
        PostgresClient.get_engine()
        logger.info("postgres_connected")

    async def shutdown(self) -> None:
        await PostgresClient.close()

    async def health_check(self) -> dict[str, Any]:
        return await PostgresClient.health_check()


class MemoryStoreProvider(StoreProvider, StoreSession):
    """
    In-memory stores for development and testing.

    Data is stored in memory and lost on restart.
    """

    backend = StoreBackend.MEMORY

    def __init__(self, resources: tuple[Resource, ...] = RESOURCES) -> None:
        self._stores: dict[str, InMemoryEntityStore[Any]] = {
            resource.name: InMemoryEntityStore(resource) for resource in resources
        }
        self._wire_references(resources)
        logger.debug("memory_stores_initialized", resources=sorted(self._stores))

    def _wire_references(self, resources: tuple[Resource, ...]) -> None:
        """Enforce the foreign keys declared on the ORM tables."""
        by_table = {resource.model.__tablename__: resource for resource in resources}

        for resource in resources:
            for fk in resource.model.__table__.foreign_keys:  # type: ignore[attr-defined]
                target = by_table.get(fk.column.table.name)
                if target is None:
                    continue
                self._stores[resource.name].add_reference(
                    fk.parent.name,
                    self._stores[target.name],
                    on_delete=fk.ondelete or "",
                )

    def store(self, resource: Resource) -> InMemoryEntityStore[Any]:
        return self._stores[resource.name]

    @asynccontextmanager
    async def session(self) -> AsyncIterator[StoreSession]:
        yield self

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "backend": self.backend.value,
            "records": {name: len(store) for name, store in self._stores.items()},
        }


def get_store_provider(backend: StoreBackend | None = None) -> StoreProvider:
    """
    Create the store provider for the configured backend.

    Args:
        backend: Override of ``settings.store_backend``
    """
    backend = backend or settings.store_backend

    if backend == StoreBackend.MEMORY:
        provider: StoreProvider = MemoryStoreProvider()
    elif backend == StoreBackend.POSTGRES:
        provider = SqlStoreProvider()
    else:
        raise ValueError(f"Unknown store backend: {backend}")

    logger.info("store_provider_initialized", backend=backend.value)
    return provider
