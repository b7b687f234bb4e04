"""
Dependency injection container for FastAPI.

Provides service instances to route handlers. Services live on
app.state.services, built by the lifespan from its connection pool;
tests replace any provider below via app.dependency_overrides.
"""

from fastapi import Depends, Request

from src.application.services import ServiceContainer
from src.application.use_cases import (
    AdjustStockUseCase,
    CreatePictureUseCase,
    IssueStockUseCase,
    ReceiveStockUseCase,
    RecordPurchaseUseCase,
)
from src.config import Settings, get_settings
from src.core.exceptions import ConfigurationError
from src.core.interfaces import IMaterialStore, IPictureStore
from src.core.services import (
    BomGenerator,
    CostCalculator,
    MovementRecorder,
    PricingService,
    StockLedger,
)


def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


def get_services(request: Request) -> ServiceContainer:
    """Service container created at startup."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise ConfigurationError("Services are not initialized; is the lifespan running?")
    return services


# Store dependencies
def get_material_store(services: ServiceContainer = Depends(get_services)) -> IMaterialStore:
    return services.material_store


def get_picture_store(services: ServiceContainer = Depends(get_services)) -> IPictureStore:
    return services.picture_store


# Service dependencies
def get_stock_ledger(services: ServiceContainer = Depends(get_services)) -> StockLedger:
    return services.stock_ledger


def get_movement_recorder(
    services: ServiceContainer = Depends(get_services),
) -> MovementRecorder:
    return services.movement_recorder


def get_bom_generator(services: ServiceContainer = Depends(get_services)) -> BomGenerator:
    return services.bom_generator


def get_cost_calculator(services: ServiceContainer = Depends(get_services)) -> CostCalculator:
    return services.cost_calculator


def get_pricing_service(services: ServiceContainer = Depends(get_services)) -> PricingService:
    return services.pricing


# Use case dependencies
def get_receive_stock_use_case(
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> ReceiveStockUseCase:
    """Get receive stock use case."""
    return ReceiveStockUseCase(recorder)


def get_issue_stock_use_case(
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> IssueStockUseCase:
    """Get issue stock use case."""
    return IssueStockUseCase(recorder)


def get_adjust_stock_use_case(
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase(recorder)


def get_create_picture_use_case(
    picture_store: IPictureStore = Depends(get_picture_store),
    bom_generator: BomGenerator = Depends(get_bom_generator),
) -> CreatePictureUseCase:
    """Get create picture use case."""
    return CreatePictureUseCase(picture_store, bom_generator)


def get_record_purchase_use_case(
    cost_calculator: CostCalculator = Depends(get_cost_calculator),
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> RecordPurchaseUseCase:
    """Get record purchase use case."""
    return RecordPurchaseUseCase(cost_calculator, recorder)
