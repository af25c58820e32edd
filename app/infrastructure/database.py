"""
Async SQLAlchemy engine and session factory.

``Database`` owns the connection pool for the whole process. It is created by
the application lifespan and handed to request handlers through dependencies.
"""

import asyncio
import ssl
from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.config import Settings

logger = structlog.get_logger(__name__)

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Point plain postgres URLs (as handed out by Supabase/Render) at asyncpg."""
    for prefix in ("postgres://", "postgresql://", "postgresql+psycopg2://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def build_ssl_context(reject_unauthorized: bool) -> ssl.SSLContext:
    context = ssl.create_default_context()
    if not reject_unauthorized:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


class Database:
    """Connection pool plus session factory for one datastore."""

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = normalize_database_url(settings.DATABASE_URL)
        kwargs: dict[str, Any] = {"pool_pre_ping": True}

        if make_url(url).get_backend_name() == "postgresql":
            connect_args: dict[str, Any] = {
                "timeout": settings.DB_CONNECT_TIMEOUT,
                "command_timeout": settings.DB_COMMAND_TIMEOUT,
            }
            if settings.DB_SSL:
                connect_args["ssl"] = build_ssl_context(settings.DB_SSL_REJECT_UNAUTHORIZED)
            kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                connect_args=connect_args,
            )

        return cls(url, **kwargs)

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def server_time(self) -> Any:
        """Round trip used by the startup probe."""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT CURRENT_TIMESTAMP"))
            return result.scalar()

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
            logger.warning("Database ping failed", error=str(exc))
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
