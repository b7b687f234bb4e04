"""
Abstract interface for material catalog storage.

Defines the contract for material creation, lookup and soft deactivation.
"""

from abc import ABC, abstractmethod

from src.core.entities.material import Material, MaterialCategory


class IMaterialStore(ABC):
    """Abstract interface for material catalog storage."""

    @abstractmethod
    async def create_material(self, material: Material) -> Material:
        """Create a new material record."""

    @abstractmethod
    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID (active or not)."""

    @abstractmethod
    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        category: MaterialCategory | None = None,
        active_only: bool = True,
    ) -> list[Material]:
        """List materials with pagination and optional category filter."""

    @abstractmethod
    async def first_active_in_category(
        self, category: MaterialCategory
    ) -> Material | None:
        """Get the oldest active material of a category."""

    @abstractmethod
    async def deactivate_material(self, material_id: str) -> Material | None:
        """Soft-deactivate a material. Returns None if unknown."""
