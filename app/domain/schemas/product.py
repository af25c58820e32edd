"""Pydantic schemas for Product domain."""

from typing import Optional

from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError

from app.core.exceptions import MISSING_REQUIRED_FIELDS


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ProductCreate(BaseModel):
    """Body of POST /api/productos. Unknown keys are ignored."""

    nombre: Optional[str] = None
    tipo_producto: Optional[str] = None
    costo_venta: Optional[float] = None
    cantidad_disponible: Optional[int] = None
    proveedor_id: Optional[int] = None
    material: Optional[str] = None

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def require_nombre_and_costo(cls, data):
        if isinstance(data, dict) and (_is_blank(data.get("nombre")) or _is_blank(data.get("costo_venta"))):
            raise PydanticCustomError(
                MISSING_REQUIRED_FIELDS,
                "Faltan campos obligatorios: nombre y costo_venta.",
            )
        return data


class ProductUpdate(BaseModel):
    """Body of PUT /api/productos/{id}; only these three columns are writable."""

    nombre: Optional[str] = None
    costo_venta: Optional[float] = None
    cantidad_disponible: Optional[int] = None

    model_config = {"extra": "ignore"}


class ProductRead(BaseModel):
    id: int
    nombre: str
    tipo_producto: Optional[str] = None
    costo_venta: float
    cantidad_disponible: Optional[int] = None
    proveedor_id: Optional[int] = None
    material: Optional[str] = None

    model_config = {"from_attributes": True}


class ProductDeleted(BaseModel):
    message: str = "Producto eliminado correctamente."
    id_eliminado: int
