"""Product service — the four catalogue operations and their error contract."""

import asyncio
from typing import List

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DatastoreError, ProductNotFoundError
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductCreate, ProductDeleted, ProductRead, ProductUpdate

logger = structlog.get_logger(__name__)

DATASTORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


def _error_detail(exc: Exception) -> str:
    """Driver message without SQLAlchemy's statement/parameter dump."""
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc) or exc.__class__.__name__


async def list_products(repo: ProductRepository) -> List[ProductRead]:
    try:
        return await repo.list()
    except DATASTORE_ERRORS as exc:
        logger.error("Error al obtener productos", error=_error_detail(exc))
        raise DatastoreError("Error al consultar la base de datos.") from exc


async def create_product(repo: ProductRepository, data: ProductCreate) -> ProductRead:
    try:
        product = await repo.create(data.model_dump())
    except DATASTORE_ERRORS as exc:
        detail = _error_detail(exc)
        logger.error("Error al crear producto", error=detail, proveedor_id=data.proveedor_id)
        raise DatastoreError("Error al crear el producto.", details=detail) from exc

    logger.info("Producto creado", product_id=product.id)
    return product


async def update_product(repo: ProductRepository, product_id: int, data: ProductUpdate) -> ProductRead:
    try:
        product = await repo.update(product_id, data.model_dump(exclude_unset=True))
    except DATASTORE_ERRORS as exc:
        detail = _error_detail(exc)
        logger.error("Error al actualizar producto", product_id=product_id, error=detail)
        raise DatastoreError("Error al actualizar el producto.", details=detail) from exc

    if product is None:
        logger.info("Producto no encontrado", product_id=product_id, operation="update")
        raise ProductNotFoundError("Producto no encontrado para actualizar.")
    return product


async def delete_product(repo: ProductRepository, product_id: int) -> ProductDeleted:
    try:
        product = await repo.delete(product_id)
    except DATASTORE_ERRORS as exc:
        detail = _error_detail(exc)
        logger.error("Error al eliminar producto", product_id=product_id, error=detail)
        raise DatastoreError("Error al eliminar el producto.", details=detail) from exc

    if product is None:
        logger.info("Producto no encontrado", product_id=product_id, operation="delete")
        raise ProductNotFoundError("Producto no encontrado para eliminar.")

    logger.info("Producto eliminado", product_id=product.id)
    return ProductDeleted(id_eliminado=product.id)
