"""
SQLAlchemy Entity Store
=======================

EntityStore backed by an async SQLAlchemy session (PostgreSQL via asyncpg).
The session belongs to the caller; this store flushes but never commits.

Version: 0.1.0
"""

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.logging import get_logger
from shared.models.common import Page, PageRequest
from services.member_registry.exceptions import ConstraintViolationError
from services.member_registry.resources import Resource
from services.member_registry.store.base import EntityStore, R


logger = get_logger(__name__)


class SqlAlchemyEntityStore(EntityStore[R]):
    """Entity store over one ORM model."""

    def __init__(self, resource: Resource, session: AsyncSession) -> None:
        super().__init__(resource)
        self.session = session
        self.model: Any = resource.model

    def _to_record(self, row: Any) -> R:
        return self.schema.model_validate(row)

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.info("integrity_violation", table=self.model.__tablename__, error=str(e.orig))
            raise ConstraintViolationError(self.resource.name, str(e.orig)) from e

    async def get(self, identifier: int) -> R | None:
        row = await self.session.get(self.model, identifier)
        return self._to_record(row) if row is not None else None

    async def _find_page(self, request: PageRequest) -> Page[R]:
        count_stmt = select(func.count()).select_from(self.model)
        total = (await self.session.execute(count_stmt)).scalar() or 0

        order_by = []
        for order in request.sort:
            column = getattr(self.model, order.field)
            order_by.append(column.desc() if order.descending else column.asc())

        stmt = (
            select(self.model)
            .order_by(*order_by)
            .offset(request.offset)
            .limit(request.limit)
        )
        rows = (await self.session.execute(stmt)).scalars().all()

        return Page(
            content=[self._to_record(row) for row in rows],
            number=request.page,
            size=request.size,
            total_elements=total,
        )

    async def find_by_parent(self, field: str, parent_id: int) -> list[R]:
        stmt = (
            select(self.model)
            .where(getattr(self.model, field) == parent_id)
            .order_by(self.model.id.asc())
        )
        rows = (await self.session.execute(stmt)).scalars().all()
        return [self._to_record(row) for row in rows]

    async def insert(self, record: R) -> R:
        row = self.model(**self._values(record))
        self.session.add(row)
        await self._flush()
        await self.session.refresh(row)

        logger.debug("row_inserted", table=self.model.__tablename__, id=row.id)
        return self._to_record(row)

    async def update(self, record: R) -> R | None:
        row = await self.session.get(self.model, record.id)
        if row is None:
            return None

        for key, value in self._values(record).items():
            setattr(row, key, value)
        await self._flush()

        logger.debug("row_updated", table=self.model.__tablename__, id=row.id)
        return self._to_record(row)

    async def delete(self, identifier: int) -> bool:
        result = await self.session.execute(
            delete(self.model).where(self.model.id == identifier)
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def delete_by_parent(self, field: str, parent_id: int) -> int:
        result = await self.session.execute(
            delete(self.model).where(getattr(self.model, field) == parent_id)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
