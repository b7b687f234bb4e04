"""
Material domain entity for the warehouse catalog.

Represents a consumable (canvas, paint, frame...) tracked in stock.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class MaterialCategory(str, Enum):
    """Material categories used for stock grouping and BOM generation."""

    CANVAS = "CANVAS"
    PAINT = "PAINT"
    BRUSH = "BRUSH"
    FRAME = "FRAME"
    NUMBER = "NUMBER"
    PACKAGING = "PACKAGING"
    OTHER = "OTHER"


class Material(BaseModel):
    """
    A material in the warehouse catalog.

    Materials are soft-deactivated (is_active=False) once referenced by
    movements or BOM lines, never deleted.
    """

    id: str | None = None
    name: str
    unit: str = "pcs"
    category: MaterialCategory = MaterialCategory.OTHER
    picture_size_id: str | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def strip_name(self) -> "Material":
        """Normalize surrounding whitespace in the display name."""
        self.name = self.name.strip()
        return self
