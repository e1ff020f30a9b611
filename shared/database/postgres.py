"""
PostgreSQL Client
=================

Engine, session factory and unit of work for the member registry tables
(SQLAlchemy 2.0 async over asyncpg).

Version: 0.1.0
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from shared.config import settings
from shared.logging import get_logger


logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base of the registry's ORM models."""


class PostgresClient:
    """
    Process-wide engine and session factory.

    Both are created lazily on first use and dropped by ``close``.
    """

    _engine: AsyncEngine | None = None
    _session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def get_engine(cls) -> AsyncEngine:
        if cls._engine is None:
            pg = settings.postgres
            cls._engine = create_async_engine(
                pg.async_url,
                echo=settings.debug,
                pool_size=pg.pool_size,
                max_overflow=pg.max_overflow,
                pool_pre_ping=True,
            )
            logger.info("postgres_engine_created", host=pg.host, database=pg.db)
        return cls._engine

    @classmethod
    def get_session_factory(cls) -> async_sessionmaker[AsyncSession]:
        if cls._session_factory is None:
            # Records are read back after commit, so keep attributes loaded
            cls._session_factory = async_sessionmaker(
                cls.get_engine(),
                expire_on_commit=False,
                autoflush=False,
            )
        return cls._session_factory

    @classmethod
    async def create_schema(cls) -> None:
        """Create all tables registered on ``Base.metadata``."""
        async with cls.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("postgres_schema_created", tables=sorted(Base.metadata.tables))

    @classmethod
    async def close(cls) -> None:
        if cls._engine is not None:
            await cls._engine.dispose()
            cls._engine = None
            cls._session_factory = None
            logger.info("postgres_engine_closed")

    @classmethod
    async def health_check(cls) -> dict[str, Any]:
        """Round-trip ``SELECT 1`` and report status and latency."""
        start = time.perf_counter()
        try:
            async with cls.get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("postgres_health_check_failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}

        return {
            "status": "healthy",
            "latency_ms": round((time.perf_counter() - start) * 1000, 2),
            "database": settings.postgres.db,
        }


@asynccontextmanager
async def postgres_session() -> AsyncIterator[AsyncSession]:
    """
    One unit of work: commits when the block exits normally, rolls back
    otherwise.

    Usage:
        async with postgres_session() as session:
            session.add(MemberTypeModel(name="active"))
    """
    async with PostgresClient.get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
