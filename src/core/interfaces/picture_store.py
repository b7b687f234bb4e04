"""
Abstract interface for picture storage.

Covers picture sizes, pictures and their bill-of-materials lines.
"""

from abc import ABC, abstractmethod

from src.core.entities.picture import (
    Picture,
    PictureMaterial,
    PictureSize,
    PictureType,
)


class IPictureStore(ABC):
    """Abstract interface for pictures, sizes and BOM lines."""

    @abstractmethod
    async def create_size(self, size: PictureSize) -> PictureSize:
        """Create a picture size."""

    @abstractmethod
    async def get_size(self, size_id: str) -> PictureSize | None:
        """Get picture size by ID."""

    @abstractmethod
    async def create_picture(self, picture: Picture) -> Picture:
        """Create a picture."""

    @abstractmethod
    async def get_picture(self, picture_id: str) -> Picture | None:
        """Get picture by ID."""

    @abstractmethod
    async def list_pictures(
        self,
        active_only: bool = True,
        picture_type: PictureType | None = None,
        material_id: str | None = None,
    ) -> list[Picture]:
        """List pictures, optionally only those of a type or using a material."""

    @abstractmethod
    async def update_cost_price(self, picture_id: str, cost_price: float) -> None:
        """Write back the computed cost price."""

    @abstractmethod
    async def update_price(self, picture_id: str, price: float) -> None:
        """Write back a new sale price."""

    @abstractmethod
    async def get_bom(self, picture_id: str) -> list[PictureMaterial]:
        """Get the BOM lines of a picture."""

    @abstractmethod
    async def replace_bom(
        self, picture_id: str, lines: list[PictureMaterial]
    ) -> list[PictureMaterial]:
        """Delete all BOM lines of a picture and insert the given ones atomically."""

    @abstractmethod
    async def upsert_bom_line(self, line: PictureMaterial) -> PictureMaterial:
        """Insert or update a single BOM line."""
