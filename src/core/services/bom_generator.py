"""
Bill-of-materials generator.

Derives the default material list of a picture from its physical size:

    area (m2)     = width_cm * height_cm / 10 000
    canvas        = ceil(area * waste_factor)            waste_factor = 1.1
    frame (m)     = ceil(2 * (width_cm + height_cm) / 100)
    paint         = ceil(area * paint_per_m2)            paint_per_m2 = 0.5
    brush         = brush_set_size                       brush_set_size = 3

Each category is filled with the oldest active material of that category.
Categories with no active material are skipped and logged; the BOM is
then partial rather than rejected.
"""

import math
from dataclasses import dataclass, field

from src.config import get_logger
from src.core.entities.material import MaterialCategory
from src.core.entities.picture import PictureMaterial
from src.core.exceptions import (
    MaterialNotFoundError,
    PictureNotFoundError,
    PictureSizeNotFoundError,
    ValidationError,
)
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.picture_store import IPictureStore

logger = get_logger(__name__)

BOM_CATEGORIES: tuple[MaterialCategory, ...] = (
    MaterialCategory.CANVAS,
    MaterialCategory.FRAME,
    MaterialCategory.PAINT,
    MaterialCategory.BRUSH,
)


def _ceil(value: float) -> int:
    """Ceiling that ignores float noise such as 11.000000000000002."""
    return math.ceil(round(value, 9))


def compute_bom_quantities(
    width_cm: float,
    height_cm: float,
    waste_factor: float = 1.1,
    paint_per_m2: float = 0.5,
    brush_set_size: int = 3,
) -> dict[MaterialCategory, int]:
    """Required quantity per BOM category for a picture of the given size."""
    if width_cm <= 0 or height_cm <= 0:
        raise ValidationError(
            "size", "width and height must be greater than 0", f"{width_cm}x{height_cm}"
        )

    area_m2 = width_cm * height_cm / 10000
    return {
        MaterialCategory.CANVAS: _ceil(area_m2 * waste_factor),
        MaterialCategory.FRAME: _ceil(2 * (width_cm + height_cm) / 100),
        MaterialCategory.PAINT: _ceil(area_m2 * paint_per_m2),
        MaterialCategory.BRUSH: brush_set_size,
    }


@dataclass
class BomResult:
    """Generated BOM lines plus the categories that could not be filled."""

    picture_id: str
    lines: list[PictureMaterial] = field(default_factory=list)
    skipped_categories: list[MaterialCategory] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.skipped_categories


class BomGenerator:
    """Builds and maintains the bill of materials of pictures."""

    def __init__(
        self,
        picture_store: IPictureStore,
        material_store: IMaterialStore,
        waste_factor: float = 1.1,
        paint_per_m2: float = 0.5,
        brush_set_size: int = 3,
    ) -> None:
        self._picture_store = picture_store
        self._material_store = material_store
        self._waste_factor = waste_factor
        self._paint_per_m2 = paint_per_m2
        self._brush_set_size = brush_set_size

    async def generate_bom(
        self, picture_id: str, picture_size_id: str | None = None
    ) -> BomResult:
        """
        Replace the BOM of a picture with the size-derived default.

        Args:
            picture_id: Picture to generate for.
            picture_size_id: Size to compute from; defaults to the
                picture's own size.

        Returns:
            BomResult with the stored lines and any skipped categories.
        """
        picture = await self._picture_store.get_picture(picture_id)
        if picture is None:
            raise PictureNotFoundError(picture_id)

        size_id = picture_size_id or picture.picture_size_id
        size = await self._picture_store.get_size(size_id)
        if size is None:
            raise PictureSizeNotFoundError(size_id)

        quantities = compute_bom_quantities(
            size.width_cm,
            size.height_cm,
            waste_factor=self._waste_factor,
            paint_per_m2=self._paint_per_m2,
            brush_set_size=self._brush_set_size,
        )

        result = BomResult(picture_id=picture_id)
        lines: list[PictureMaterial] = []
        for category in BOM_CATEGORIES:
            material = await self._material_store.first_active_in_category(category)
            if material is None or material.id is None:
                result.skipped_categories.append(category)
                logger.warning(
                    "bom_category_missing",
                    picture_id=picture_id,
                    category=category.value,
                )
                continue
            lines.append(
                PictureMaterial(
                    picture_id=picture_id,
                    material_id=material.id,
                    quantity=quantities[category],
                )
            )

        result.lines = await self._picture_store.replace_bom(picture_id, lines)

        logger.info(
            "bom_generated",
            picture_id=picture_id,
            picture_size_id=size_id,
            lines=len(result.lines),
            skipped=[c.value for c in result.skipped_categories],
        )
        return result

    async def set_line(
        self, picture_id: str, material_id: str, quantity: float
    ) -> PictureMaterial:
        """Manually set the quantity of one material in a picture's BOM."""
        if quantity is None or not math.isfinite(quantity) or quantity <= 0:
            raise ValidationError("quantity", "must be greater than 0", quantity)

        if await self._picture_store.get_picture(picture_id) is None:
            raise PictureNotFoundError(picture_id)
        if await self._material_store.get_material(material_id) is None:
            raise MaterialNotFoundError(material_id)

        line = await self._picture_store.upsert_bom_line(
            PictureMaterial(picture_id=picture_id, material_id=material_id, quantity=quantity)
        )
        logger.info(
            "bom_line_set",
            picture_id=picture_id,
            material_id=material_id,
            quantity=quantity,
        )
        return line

    async def get_bom(self, picture_id: str) -> list[PictureMaterial]:
        """Current BOM lines of a picture."""
        if await self._picture_store.get_picture(picture_id) is None:
            raise PictureNotFoundError(picture_id)
        return await self._picture_store.get_bom(picture_id)
