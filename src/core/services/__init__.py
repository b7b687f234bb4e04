"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.bom_generator import (
    BOM_CATEGORIES,
    BomGenerator,
    BomResult,
    compute_bom_quantities,
)
from src.core.services.cost_calculator import (
    CostBreakdown,
    CostCalculator,
    CostLine,
    CostStats,
    ProfitResult,
    RecalculationReport,
    TypeCostStats,
)
from src.core.services.movement_recorder import MovementRecorder
from src.core.services.pricing import PriceRecommendation, PricingOptions, PricingService
from src.core.services.stock_ledger import (
    AvailabilityReport,
    LowStockAlert,
    LowStockReport,
    StockLedger,
    StockShortage,
    WarehouseStats,
)

__all__ = [
    # Stock Ledger
    "StockLedger",
    "AvailabilityReport",
    "LowStockAlert",
    "LowStockReport",
    "StockShortage",
    "WarehouseStats",
    # Movement Recorder
    "MovementRecorder",
    # BOM
    "BomGenerator",
    "BomResult",
    "BOM_CATEGORIES",
    "compute_bom_quantities",
    # Costing
    "CostCalculator",
    "CostBreakdown",
    "CostLine",
    "CostStats",
    "TypeCostStats",
    "ProfitResult",
    "RecalculationReport",
    # Pricing
    "PricingService",
    "PricingOptions",
    "PriceRecommendation",
]
