"""FastAPI application — main entry point."""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.config import Settings, get_settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.infrastructure.database import Database

# Import all models so SQLAlchemy knows about them
from app.domain.models.product import Product  # noqa: F401

from app.interfaces.api.products import router as products_router
from app.interfaces.api.pages import router as pages_router

logger = structlog.get_logger(__name__)


async def probe_database(database: Database, create_tables: bool = False) -> None:
    """Startup connectivity check. Failures are logged, never raised."""
    try:
        if create_tables:
            await database.create_tables()
            logger.info("Database tables created/verified")
        now = await database.server_time()
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
        logger.error("Error al conectar con la base de datos", error=str(exc), error_type=exc.__class__.__name__)
        return
    logger.info("Conexión exitosa a la base de datos", db_time=str(now))


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — owns the pool unless one was injected."""
        owned = app.state.database is None
        if owned:
            app.state.database = Database.from_settings(settings)

        logger.info("Starting Joyería API...", env=settings.ENVIRONMENT, port=settings.PORT)
        await probe_database(app.state.database, create_tables=settings.DB_CREATE_TABLES)

        yield

        if owned:
            await app.state.database.dispose()
            app.state.database = None
        logger.info("Joyería API stopped")

    app = FastAPI(
        title="Joyería — Inventario de productos",
        description="API Backend — CRUD de productos de joyería",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    setup_middleware(app)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Resource routes first so the root page never shadows them
    app.include_router(products_router)
    app.include_router(pages_router)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("Servidor de Joyería corriendo", url=f"http://localhost:{settings.PORT}")
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
