"""
Entity Stores
=============

Persistence layer of the member registry.

Usage:
    from services.member_registry.store import get_store_provider

    provider = get_store_provider()
    async with provider.session() as stores:
        member = await stores.store(MEMBERS).get(1)
"""

from services.member_registry.store.base import EntityStore
from services.member_registry.store.memory import InMemoryEntityStore
from services.member_registry.store.provider import (
    MemoryStoreProvider,
    SqlStoreProvider,
    StoreProvider,
    StoreSession,
    get_store_provider,
)
from services.member_registry.store.sql import SqlAlchemyEntityStore

__all__ = [
    # Interface
    "EntityStore",
    "StoreProvider",
    "StoreSession",
    "get_store_provider",
    # Implementations
    "InMemoryEntityStore",
    "SqlAlchemyEntityStore",
    "MemoryStoreProvider",
    "SqlStoreProvider",
]
