"""
Service wiring for dependency injection.

Binds the SQLite stores to the core services for one connection pool.
Entry points (API lifespan, CLI commands) build a container once and pass
it around; nothing here is a module-level singleton.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from dataclasses import dataclass

from src.config import Settings, get_settings
from src.core.interfaces import (
    IInventoryStore,
    IMaterialStore,
    IPictureStore,
    IPurchaseStore,
)
from src.core.services import (
    BomGenerator,
    CostCalculator,
    MovementRecorder,
    PricingOptions,
    PricingService,
    StockLedger,
)
from src.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteInventoryStore,
    SQLiteMaterialStore,
    SQLitePictureStore,
    SQLitePurchaseStore,
)


@dataclass
class ServiceContainer:
    """Stores and services sharing one connection pool."""

    material_store: IMaterialStore
    inventory_store: IInventoryStore
    picture_store: IPictureStore
    purchase_store: IPurchaseStore
    stock_ledger: StockLedger
    movement_recorder: MovementRecorder
    bom_generator: BomGenerator
    cost_calculator: CostCalculator
    pricing: PricingService


def build_services(
    pool: ConnectionPool,
    settings: Settings | None = None,
) -> ServiceContainer:
    """
    Create stores on the given pool and wire the core services to them.

    Args:
        pool: Open (or lazily opened) connection pool
        settings: Settings for business constants (default: cached settings)

    Returns:
        Fully wired ServiceContainer
    """
    settings = settings or get_settings()

    material_store = SQLiteMaterialStore(pool)
    inventory_store = SQLiteInventoryStore(pool)
    picture_store = SQLitePictureStore(pool)
    purchase_store = SQLitePurchaseStore(pool)

    cost_calculator = CostCalculator(
        picture_store=picture_store,
        inventory_store=inventory_store,
        purchase_store=purchase_store,
        material_store=material_store,
        hourly_rate=settings.costing.hourly_rate,
        purchase_window=settings.costing.purchase_window,
    )

    return ServiceContainer(
        material_store=material_store,
        inventory_store=inventory_store,
        picture_store=picture_store,
        purchase_store=purchase_store,
        stock_ledger=StockLedger(
            inventory_store=inventory_store,
            material_store=material_store,
            stats_window_days=settings.warehouse.stats_window_days,
            critical_ratio=settings.warehouse.critical_stock_ratio,
        ),
        movement_recorder=MovementRecorder(
            inventory_store=inventory_store,
            material_store=material_store,
            picture_store=picture_store,
            default_limit=settings.warehouse.default_movement_limit,
            default_all_limit=settings.warehouse.default_all_movements_limit,
        ),
        bom_generator=BomGenerator(
            picture_store=picture_store,
            material_store=material_store,
            waste_factor=settings.bom.canvas_waste_factor,
            paint_per_m2=settings.bom.paint_per_m2,
            brush_set_size=settings.bom.brush_set_size,
        ),
        cost_calculator=cost_calculator,
        pricing=PricingService(
            cost_calculator,
            defaults=PricingOptions(
                markup_percentage=settings.costing.markup_percentage,
                min_price=settings.costing.min_price,
                max_price=settings.costing.max_price,
            ),
        ),
    )
