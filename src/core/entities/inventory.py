"""Inventory domain entities."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"


class ReferenceType(str, Enum):
    """What a movement was caused by."""

    ORDER = "ORDER"
    PICTURE = "PICTURE"
    PURCHASE = "PURCHASE"
    MANUAL = "MANUAL"


class StockSeverity(str, Enum):
    """Urgency of a low-stock alert."""

    CRITICAL = "CRITICAL"
    WARNING = "WARNING"


class MovementReference(BaseModel):
    """Pointer from a movement to the business record that caused it."""

    id: str
    type: ReferenceType = ReferenceType.MANUAL


class Stock(BaseModel):
    """Current quantity and alert threshold for one material."""

    id: int | None = None
    material_id: str  # FK → materials.id, unique
    quantity: float = 0.0  # may go negative
    min_level: float | None = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_negative(self) -> bool:
        return self.quantity < 0

    @property
    def is_low(self) -> bool:
        """True when a minimum level is set and quantity is at or below it."""
        return self.min_level is not None and self.quantity <= self.min_level


class MaterialMovement(BaseModel):
    """
    Immutable audit-log entry for one stock change.

    IN and OUT carry a positive magnitude; ADJUSTMENT carries the signed
    delta between the previous and the new quantity.
    """

    id: int | None = None
    material_id: str
    stock_id: int | None = None
    movement_type: MovementType
    quantity: float
    reason: str | None = None
    reference_id: str | None = None
    reference_type: ReferenceType | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def signed_quantity(self) -> float:
        """Contribution of this movement to the stock quantity."""
        if self.movement_type == MovementType.OUT:
            return -self.quantity
        return self.quantity


class MaterialPurchase(BaseModel):
    """A procurement event used for weighted average costing."""

    id: int | None = None
    material_id: str
    quantity: float
    unit_price: float
    total_price: float | None = None
    supplier: str | None = None
    purchase_date: date = Field(default_factory=date.today)
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class StockLevel(BaseModel):
    """Stock row joined with its material, as listed on the warehouse page."""

    material_id: str
    name: str
    unit: str
    category: str
    quantity: float = 0.0
    min_level: float | None = None
    movement_count: int = 0
    last_updated: datetime | None = None

    @property
    def is_low(self) -> bool:
        return self.min_level is not None and self.quantity <= self.min_level

    @property
    def is_negative(self) -> bool:
        return self.quantity < 0

    def severity(self, critical_ratio: float = 0.5) -> StockSeverity | None:
        """
        Alert level of a low stock row; None when the row is not low.

        CRITICAL at or below critical_ratio * min_level, WARNING above it.
        """
        if not self.is_low:
            return None
        if self.quantity <= self.min_level * critical_ratio:  # type: ignore[operator]
            return StockSeverity.CRITICAL
        return StockSeverity.WARNING
