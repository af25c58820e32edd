from typing import Any, Dict, List, Mapping, Optional

import httpx
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.domain.schemas.product import ProductRead
from app.infrastructure.database import Database
from app.interfaces.deps import get_product_repository
from app.main import create_app


class FakeProductRepository:
    """In-memory stand-in for the productos table."""

    writable = ("nombre", "tipo_producto", "costo_venta", "cantidad_disponible", "proveedor_id", "material")

    def __init__(self) -> None:
        self.rows: Dict[int, Dict[str, Any]] = {}
        self.next_id = 1
        self.calls: List[str] = []

    async def get_by_id(self, id: int) -> Optional[ProductRead]:
        row = self.rows.get(id)
        return ProductRead(**row) if row else None

    async def list(self) -> List[ProductRead]:
        self.calls.append("list")
        return [ProductRead(**self.rows[i]) for i in sorted(self.rows, reverse=True)]

    async def create(self, values: Mapping[str, Any]) -> ProductRead:
        self.calls.append("create")
        row = {k: v for k, v in values.items() if k in self.writable}
        row["id"] = self.next_id
        self.next_id += 1
        self.rows[row["id"]] = row
        return ProductRead(**row)

    async def update(self, id: int, values: Mapping[str, Any]) -> Optional[ProductRead]:
        self.calls.append("update")
        if id not in self.rows:
            return None
        self.rows[id].update({k: v for k, v in values.items() if k in self.writable})
        return ProductRead(**self.rows[id])

    async def delete(self, id: int) -> Optional[ProductRead]:
        self.calls.append("delete")
        row = self.rows.pop(id, None)
        return ProductRead(**row) if row else None


class FailingProductRepository:
    """Every call fails the way a broken datastore connection does."""

    def __init__(self, message: str = "connection refused") -> None:
        self.error = OperationalError("SELECT 1", {}, Exception(message))

    async def get_by_id(self, id):
        raise self.error

    async def list(self):
        raise self.error

    async def create(self, values):
        raise self.error

    async def update(self, id, values):
        raise self.error

    async def delete(self, id):
        raise self.error


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        DB_CREATE_TABLES=True,
        ENVIRONMENT="test",
        _env_file=None,
    )


@pytest.fixture
async def database():
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def app(settings, database):
    application = create_app(settings=settings, database=database)
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake_repo() -> FakeProductRepository:
    return FakeProductRepository()


@pytest.fixture
def failing_repo() -> FailingProductRepository:
    return FailingProductRepository()


@pytest.fixture
def failing_repo_factory():
    return FailingProductRepository


@pytest.fixture
async def fake_client(app, fake_repo):
    app.dependency_overrides[get_product_repository] = lambda: fake_repo
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def failing_client(app, failing_repo):
    app.dependency_overrides[get_product_repository] = lambda: failing_repo
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
