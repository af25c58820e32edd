"""
API Dependencies.
"""

from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.domain.repositories.product_repository import ProductRepository
from app.infrastructure.database import Database
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with by ``create_app``."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """The process-wide pool, installed on ``app.state`` by the lifespan."""
    return request.app.state.database


async def get_db(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    async with database.session_factory() as session:
        yield session


def get_product_repository(db: AsyncSession = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db)
