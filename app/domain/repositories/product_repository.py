"""
Product Repository Interface.
"""

from typing import Protocol

from app.domain.repositories.base import BaseRepository
from app.domain.schemas.product import ProductRead


class ProductRepository(BaseRepository[ProductRead], Protocol):
    """Interface for the ``productos`` table. Rows come back as ``ProductRead``."""
