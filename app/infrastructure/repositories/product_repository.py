"""
SQLAlchemy Implementation of Product Repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductRead
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product, ProductRead], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    writable = (
        "nombre",
        "tipo_producto",
        "costo_venta",
        "cantidad_disponible",
        "proveedor_id",
        "material",
    )

    def __init__(self, db: AsyncSession):
        super().__init__(db, Product, ProductRead)

    def order_by(self):
        # Newest first, the order the front end renders the catalogue in
        return self.table.c.id.desc()
