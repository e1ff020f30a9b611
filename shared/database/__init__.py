"""
Database Module
===============

Async PostgreSQL access (asyncpg + SQLAlchemy 2.0) for the member registry.

Usage:
    from shared.database import postgres_session

    async with postgres_session() as session:
        result = await session.execute(select(MemberModel))
        ...
"""

from shared.database.postgres import (
    Base,
    PostgresClient,
    postgres_session,
)


__all__ = [
    "Base",
    "PostgresClient",
    "postgres_session",
]
