import pytest
from sqlalchemy.exc import IntegrityError

from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository


@pytest.fixture
async def repo(database):
    async with database.session_factory() as session:
        yield SQLAlchemyProductRepository(session)


async def test_create_assigns_id_and_drops_unknown_columns(repo):
    product = await repo.create({"nombre": "Anillo", "costo_venta": 150, "id": 77, "descuento": 5})

    assert product.id != 77
    assert product.nombre == "Anillo"
    assert product.costo_venta == 150


async def test_list_orders_by_id_descending(repo):
    first = await repo.create({"nombre": "Anillo", "costo_venta": 1})
    second = await repo.create({"nombre": "Collar", "costo_venta": 2})

    assert [p.id for p in await repo.list()] == [second.id, first.id]


async def test_get_by_id(repo):
    created = await repo.create({"nombre": "Anillo", "costo_venta": 1})

    assert await repo.get_by_id(created.id) == created
    assert await repo.get_by_id(created.id + 100) is None


async def test_update_returns_none_for_missing_row(repo):
    assert await repo.update(404, {"nombre": "Nadie"}) is None
    assert await repo.list() == []


async def test_update_writes_only_given_columns(repo):
    created = await repo.create({"nombre": "Anillo", "costo_venta": 150, "material": "oro"})

    updated = await repo.update(created.id, {"costo_venta": 175.25})

    assert updated.costo_venta == 175.25
    assert updated.nombre == "Anillo"
    assert updated.material == "oro"


async def test_delete_returns_removed_row(repo):
    created = await repo.create({"nombre": "Anillo", "costo_venta": 150})

    deleted = await repo.delete(created.id)

    assert deleted == created
    assert await repo.delete(created.id) is None


async def test_not_null_violation_surfaces_as_integrity_error(repo):
    with pytest.raises(IntegrityError):
        await repo.create({"nombre": "Anillo"})
