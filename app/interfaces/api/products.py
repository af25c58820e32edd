"""Products API routes — CRUD over the productos table."""

from typing import List

from fastapi import APIRouter, Depends, status

from app.interfaces.deps import get_product_repository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductCreate, ProductDeleted, ProductRead, ProductUpdate
from app.application.services import product_service

router = APIRouter(prefix="/api/productos", tags=["Productos"])


@router.get("", response_model=List[ProductRead])
async def list_products(repo: ProductRepository = Depends(get_product_repository)):
    return await product_service.list_products(repo)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    repo: ProductRepository = Depends(get_product_repository),
):
    return await product_service.create_product(repo, body)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: int,
    body: ProductUpdate,
    repo: ProductRepository = Depends(get_product_repository),
):
    return await product_service.update_product(repo, product_id, body)


@router.delete("/{product_id}", response_model=ProductDeleted)
async def delete_product(
    product_id: int,
    repo: ProductRepository = Depends(get_product_repository),
):
    return await product_service.delete_product(repo, product_id)
