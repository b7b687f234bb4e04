"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

# --- Health / errors ---


class ComponentHealthResponse(BaseModel):
    """Health of one dependency."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. MATERIAL_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Materials ---


class MaterialResponse(BaseModel):
    """Material catalog entry response."""

    id: str
    name: str
    unit: str
    category: str
    picture_size_id: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class MaterialListResponse(BaseModel):
    """Page of materials."""

    materials: list[MaterialResponse]
    total: int


# --- Warehouse ---


class StockResponse(BaseModel):
    """Current stock of one material."""

    material_id: str
    quantity: float
    min_level: float | None = None
    is_low_stock: bool = False
    is_negative: bool = False
    last_updated: datetime | None = None


class StockLevelResponse(BaseModel):
    """Row of the warehouse stock list."""

    material_id: str
    name: str
    unit: str
    category: str
    quantity: float
    min_level: float | None = None
    is_low_stock: bool
    is_negative: bool
    movement_count: int
    last_updated: datetime | None = None
    severity: str | None = Field(default=None, description="CRITICAL or WARNING when low")
    critical_level: float | None = None


class StockListResponse(BaseModel):
    """Stock list of active materials."""

    items: list[StockLevelResponse]
    total: int


class LowStockListResponse(StockListResponse):
    """Low-stock rows with counts per severity."""

    critical_count: int
    warning_count: int


class MovementResponse(BaseModel):
    """Stock movement response DTO."""

    id: int
    material_id: str
    stock_id: int | None = None
    movement_type: str
    quantity: float
    reason: str | None = None
    reference_id: str | None = None
    reference_type: str | None = None
    notes: str | None = None
    created_at: datetime


class MovementListResponse(BaseModel):
    """Movements, newest first."""

    movements: list[MovementResponse]
    total: int


class StockChangeResponse(BaseModel):
    """Result of add / remove / adjust.

    warning is set when the stock went below zero; the movement was still
    recorded.
    """

    stock: StockResponse
    movement: MovementResponse
    previous_quantity: float
    new_quantity: float
    is_negative: bool = False
    warning: str | None = None


class WarehouseStatsResponse(BaseModel):
    """Warehouse dashboard numbers."""

    total_materials: int
    low_stock_count: int
    negative_stock_count: int
    critical_stock_count: int = 0
    warning_stock_count: int = 0
    total_quantity: float
    recent_movements: int
    window_days: int


class PurchaseResponse(BaseModel):
    """Material purchase response DTO."""

    id: int
    material_id: str
    quantity: float
    unit_price: float
    total_price: float
    supplier: str | None = None
    purchase_date: date
    notes: str | None = None
    created_at: datetime


class PurchaseRecordedResponse(BaseModel):
    """Recorded purchase and, when booked into stock, the resulting change."""

    purchase: PurchaseResponse
    stock_change: StockChangeResponse | None = None


class PurchaseListResponse(BaseModel):
    """Purchases inside the averaging window plus the resulting average."""

    material_id: str
    purchases: list[PurchaseResponse]
    average_unit_price: float


# --- Pictures ---


class PictureSizeResponse(BaseModel):
    """Canvas format response DTO."""

    id: str
    name: str
    width_cm: float
    height_cm: float
    area_m2: float
    created_at: datetime


class PictureResponse(BaseModel):
    """Picture response DTO."""

    id: str
    name: str
    picture_type: str
    picture_size_id: str
    price: float
    cost_price: float | None = None
    work_hours: float | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class BomLineResponse(BaseModel):
    """One bill-of-materials line."""

    id: int | None = None
    picture_id: str
    material_id: str
    quantity: float


class BomResponse(BaseModel):
    """Bill of materials of a picture."""

    picture_id: str
    lines: list[BomLineResponse]
    skipped_categories: list[str] = Field(default_factory=list)
    complete: bool = True


class CreatePictureResponse(BaseModel):
    """Created picture with its generated BOM, if requested."""

    picture: PictureResponse
    bom: BomResponse | None = None


class CostLineResponse(BaseModel):
    """Cost contribution of one BOM line."""

    material_id: str
    quantity: float
    unit_price: float
    cost: float


class CostResponse(BaseModel):
    """Cost price of a picture."""

    picture_id: str
    lines: list[CostLineResponse]
    material_cost: float
    labor_cost: float
    cost_price: float
    persisted: bool = False


class ProfitResponse(BaseModel):
    """Profit and margin (percent of price)."""

    picture_id: str
    price: float
    cost_price: float
    profit: float
    margin: float


class PriceRecommendationResponse(BaseModel):
    """Recommended sale price."""

    picture_id: str
    cost_price: float
    base_price: float
    recommended_price: float
    profit: float
    profit_margin: float


class RecalculationResponse(BaseModel):
    """Outcome of a batch cost recalculation."""

    total_pictures: int
    updated: int
    errors: int
    details: list[dict[str, Any]] = Field(default_factory=list)


class TypeCostStatsResponse(BaseModel):
    """Averages for one picture type."""

    count: int
    average_cost: float
    average_price: float


class CostStatsResponse(BaseModel):
    """Stored cost price coverage over active pictures."""

    total: int
    with_cost_price: int
    without_cost_price: int
    average_cost_price: float
    average_price: float
    average_margin: float
    by_type: dict[str, TypeCostStatsResponse]


class ShortageResponse(BaseModel):
    """A material that cannot cover its BOM quantity."""

    material_id: str
    required: float
    available: float
    missing: float


class AvailabilityResponse(BaseModel):
    """Whether current stock covers a picture's BOM."""

    picture_id: str
    sufficient: bool
    shortages: list[ShortageResponse] = Field(default_factory=list)
