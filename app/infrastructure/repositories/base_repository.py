"""
SQLAlchemy implementation of the Base Repository.

Each operation is a single statement; writes use ``RETURNING`` so the stored
row comes back in the same round trip.
"""

from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.repositories.base import BaseRepository
from app.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)
SchemaType = TypeVar("SchemaType", bound=BaseModel)


class SQLAlchemyRepository(BaseRepository[SchemaType], Generic[ModelType, SchemaType]):
    """Generic async repository for one mapped table."""

    #: columns callers may write; anything else in ``values`` is dropped
    writable: tuple[str, ...] = ()

    def __init__(self, db: AsyncSession, model: Type[ModelType], schema: Type[SchemaType]):
        self.db = db
        self.model = model
        self.schema = schema
        self.table = model.__table__

    def order_by(self) -> Any:
        return self.table.c.id.asc()

    def _to_schema(self, row) -> SchemaType:
        return self.schema.model_validate(dict(row._mapping))

    def _writable(self, values: Mapping[str, Any]) -> dict[str, Any]:
        if not self.writable:
            return dict(values)
        return {k: v for k, v in values.items() if k in self.writable}

    async def get_by_id(self, id: int) -> Optional[SchemaType]:
        result = await self.db.execute(select(self.table).where(self.table.c.id == id))
        row = result.first()
        return self._to_schema(row) if row is not None else None

    async def list(self) -> List[SchemaType]:
        result = await self.db.execute(select(self.table).order_by(self.order_by()))
        return [self._to_schema(row) for row in result.all()]

    async def create(self, values: Mapping[str, Any]) -> SchemaType:
        stmt = insert(self.table).values(**self._writable(values)).returning(*self.table.c)
        result = await self.db.execute(stmt)
        row = result.one()
        await self.db.commit()
        return self._to_schema(row)

    async def update(self, id: int, values: Mapping[str, Any]) -> Optional[SchemaType]:
        data = self._writable(values)
        if not data:
            return await self.get_by_id(id)

        stmt = update(self.table).where(self.table.c.id == id).values(**data).returning(*self.table.c)
        result = await self.db.execute(stmt)
        row = result.first()
        if row is None:
            await self.db.rollback()
            return None
        await self.db.commit()
        return self._to_schema(row)

    async def delete(self, id: int) -> Optional[SchemaType]:
        stmt = delete(self.table).where(self.table.c.id == id).returning(*self.table.c)
        result = await self.db.execute(stmt)
        row = result.first()
        if row is None:
            await self.db.rollback()
            return None
        await self.db.commit()
        return self._to_schema(row)
