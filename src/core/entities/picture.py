"""Picture and bill-of-materials entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class PictureType(str, Enum):
    """How a picture is produced."""

    READY_MADE = "READY_MADE"
    CUSTOM_PHOTO = "CUSTOM_PHOTO"


class PictureSize(BaseModel):
    """Physical canvas format, e.g. 30x40 cm."""

    id: str | None = None
    name: str
    width_cm: float = Field(..., gt=0)
    height_cm: float = Field(..., gt=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def area_m2(self) -> float:
        return self.width_cm * self.height_cm / 10000

    @property
    def perimeter_cm(self) -> float:
        return 2 * (self.width_cm + self.height_cm)


class Picture(BaseModel):
    """A sellable picture; cost_price is written back by the cost calculator."""

    id: str | None = None
    name: str
    picture_type: PictureType = PictureType.READY_MADE
    picture_size_id: str
    price: float = 0.0
    cost_price: float | None = None
    work_hours: float | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PictureMaterial(BaseModel):
    """One BOM line: how much of a material a picture consumes."""

    id: int | None = None
    picture_id: str
    material_id: str
    quantity: float
