"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import Any, List, Mapping, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic async CRUD operations."""

    async def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    async def list(self) -> List[T]:
        """List all entities in the repository's default order."""
        ...

    async def create(self, values: Mapping[str, Any]) -> T:
        """Insert a row and return it as stored."""
        ...

    async def update(self, id: int, values: Mapping[str, Any]) -> Optional[T]:
        """Update the row with ``id``; None when no row matched."""
        ...

    async def delete(self, id: int) -> Optional[T]:
        """Delete the row with ``id``; None when no row matched."""
        ...
