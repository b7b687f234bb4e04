"""Core domain entities."""

from src.core.entities.inventory import (
    MaterialMovement,
    MaterialPurchase,
    MovementReference,
    MovementType,
    ReferenceType,
    Stock,
    StockLevel,
    StockSeverity,
)
from src.core.entities.material import Material, MaterialCategory
from src.core.entities.picture import (
    Picture,
    PictureMaterial,
    PictureSize,
    PictureType,
)

__all__ = [
    # Material
    "Material",
    "MaterialCategory",
    # Inventory
    "Stock",
    "StockLevel",
    "MaterialMovement",
    "MaterialPurchase",
    "MovementReference",
    "MovementType",
    "ReferenceType",
    "StockSeverity",
    # Picture
    "Picture",
    "PictureMaterial",
    "PictureSize",
    "PictureType",
]
