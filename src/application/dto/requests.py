"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
Business rules (positive quantities, non-negative levels) are enforced by
the core services so they hold for every caller, not only HTTP.
"""

from datetime import date

from pydantic import BaseModel, Field

from src.core.entities.inventory import ReferenceType
from src.core.entities.material import MaterialCategory
from src.core.entities.picture import PictureType

# --- Materials ---


class CreateMaterialRequest(BaseModel):
    """Request to add a material to the catalog."""

    name: str = Field(..., min_length=1, max_length=200, examples=["Canvas 30x40"])
    unit: str = Field(default="pcs", max_length=20, examples=["pcs", "m", "ml"])
    category: MaterialCategory = Field(default=MaterialCategory.OTHER)
    picture_size_id: str | None = Field(
        default=None,
        description="Picture size this material is cut for (canvas, frame)",
    )


# --- Warehouse ---


class ReferenceRequest(BaseModel):
    """What caused a movement."""

    id: str = Field(..., min_length=1, description="ID of the order, picture or purchase")
    type: ReferenceType = Field(default=ReferenceType.MANUAL)


class AddStockRequest(BaseModel):
    """Request to receive material (IN movement)."""

    material_id: str = Field(..., description="Material catalog ID")
    quantity: float = Field(..., description="Quantity to receive, must be > 0")
    reason: str = Field(..., min_length=1, examples=["Supplier delivery"])
    reference: ReferenceRequest | None = None
    notes: str | None = None


class RemoveStockRequest(BaseModel):
    """Request to take material out (OUT movement)."""

    material_id: str = Field(..., description="Material catalog ID")
    quantity: float = Field(..., description="Quantity to remove, must be > 0")
    reason: str = Field(..., min_length=1, examples=["Used for order"])
    reference: ReferenceRequest | None = None
    notes: str | None = None


class AdjustStockRequest(BaseModel):
    """Request to set an absolute stock quantity (ADJUSTMENT movement)."""

    material_id: str = Field(..., description="Material catalog ID")
    new_quantity: float = Field(..., description="Counted quantity, must be >= 0")
    reason: str = Field(..., min_length=1, examples=["Stocktake"])
    notes: str | None = None


class SetMinLevelRequest(BaseModel):
    """Request to set the low-stock alert threshold."""

    min_level: float = Field(..., description="Alert when quantity <= this, must be >= 0")


class RecordPurchaseRequest(BaseModel):
    """Request to record a material purchase for costing."""

    material_id: str = Field(..., description="Material catalog ID")
    quantity: float = Field(..., description="Purchased quantity, must be > 0")
    unit_price: float = Field(..., description="Price per unit, must be >= 0")
    total_price: float | None = Field(
        default=None,
        description="Invoice total; defaults to quantity * unit_price",
    )
    supplier: str | None = None
    purchase_date: date | None = Field(default=None, description="Defaults to today")
    notes: str | None = None
    receive_stock: bool = Field(
        default=True,
        description="Also book the quantity into stock as an IN movement",
    )


# --- Pictures ---


class CreatePictureSizeRequest(BaseModel):
    """Request to create a canvas format."""

    name: str = Field(..., min_length=1, examples=["30x40"])
    width_cm: float = Field(..., gt=0)
    height_cm: float = Field(..., gt=0)


class CreatePictureRequest(BaseModel):
    """Request to create a picture, optionally with its default BOM."""

    name: str = Field(..., min_length=1, max_length=200)
    picture_type: PictureType = Field(default=PictureType.READY_MADE)
    picture_size_id: str
    price: float = Field(default=0.0, ge=0)
    work_hours: float | None = Field(default=None, ge=0)
    generate_bom: bool = Field(
        default=True,
        description="Fill the BOM from the picture size right away",
    )


class GenerateBomRequest(BaseModel):
    """Request to regenerate a picture's BOM."""

    picture_size_id: str | None = Field(
        default=None,
        description="Size to compute from; defaults to the picture's own size",
    )


class SetBomLineRequest(BaseModel):
    """Request to set one BOM line manually."""

    quantity: float = Field(..., description="Quantity per picture, must be > 0")


class RecalculateCostsRequest(BaseModel):
    """Request to recompute stored cost prices."""

    material_id: str | None = Field(
        default=None,
        description="Only pictures whose BOM uses this material",
    )
    picture_type: PictureType | None = None
    update_prices: bool = Field(
        default=False,
        description="Also replace each sale price with the recommended price",
    )
