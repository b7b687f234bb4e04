"""Warehouse endpoints: stock ledger, movements and purchases."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_adjust_stock_use_case,
    get_cost_calculator,
    get_issue_stock_use_case,
    get_movement_recorder,
    get_receive_stock_use_case,
    get_record_purchase_use_case,
    get_stock_ledger,
)
from src.application.dto.requests import (
    AddStockRequest,
    AdjustStockRequest,
    RecordPurchaseRequest,
    RemoveStockRequest,
    SetMinLevelRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    LowStockListResponse,
    MovementListResponse,
    PurchaseListResponse,
    PurchaseRecordedResponse,
    StockChangeResponse,
    StockListResponse,
    StockResponse,
    WarehouseStatsResponse,
)
from src.application.mappers import (
    to_low_stock_response,
    to_movement_response,
    to_purchase_response,
    to_stock_level_response,
    to_stock_response,
)
from src.application.use_cases import (
    AdjustStockUseCase,
    IssueStockUseCase,
    ReceiveStockUseCase,
    RecordPurchaseUseCase,
)
from src.core.services import CostCalculator, MovementRecorder, StockLedger

router = APIRouter(prefix="/api/warehouse", tags=["warehouse"])


# --- Stock ---


@router.get("/stock", response_model=StockListResponse)
async def get_stock_list(
    ledger: StockLedger = Depends(get_stock_ledger),
) -> StockListResponse:
    """Current stock of every active material."""
    levels = await ledger.get_stock_list()
    return StockListResponse(
        items=[to_stock_level_response(level) for level in levels],
        total=len(levels),
    )


@router.get("/stock/low", response_model=LowStockListResponse)
async def get_low_stock(
    ledger: StockLedger = Depends(get_stock_ledger),
) -> LowStockListResponse:
    """Active materials at or below their minimum level, with severity."""
    report = await ledger.check_low_stock()
    return to_low_stock_response(report)


@router.get(
    "/stock/{material_id}",
    response_model=StockResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_stock(
    material_id: str,
    ledger: StockLedger = Depends(get_stock_ledger),
) -> StockResponse:
    """Current stock of one material (zero if never stocked)."""
    stock = await ledger.get_stock(material_id)
    return to_stock_response(stock)


@router.put(
    "/stock/{material_id}/min-level",
    response_model=StockResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def set_min_level(
    material_id: str,
    request: SetMinLevelRequest,
    ledger: StockLedger = Depends(get_stock_ledger),
) -> StockResponse:
    """Set the low-stock alert threshold of a material."""
    stock = await ledger.set_min_level(material_id, request.min_level)
    return to_stock_response(stock)


# --- Movements ---


@router.post(
    "/add",
    response_model=StockChangeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def add_material(
    request: AddStockRequest,
    use_case: ReceiveStockUseCase = Depends(get_receive_stock_use_case),
) -> StockChangeResponse:
    """Receive material into stock (IN movement)."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/remove",
    response_model=StockChangeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def remove_material(
    request: RemoveStockRequest,
    use_case: IssueStockUseCase = Depends(get_issue_stock_use_case),
) -> StockChangeResponse:
    """
    Take material out of stock (OUT movement).

    Stock may go negative; the response then carries a warning.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/adjust",
    response_model=StockChangeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_stock(
    request: AdjustStockRequest,
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> StockChangeResponse:
    """Set stock to a counted quantity (ADJUSTMENT movement)."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/movements",
    response_model=MovementListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_all_movements(
    limit: int | None = None,
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> MovementListResponse:
    """Latest movements across all materials."""
    movements = await recorder.list_all_movements(limit=limit)
    return MovementListResponse(
        movements=[to_movement_response(m) for m in movements],
        total=len(movements),
    )


@router.get(
    "/movements/{material_id}",
    response_model=MovementListResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def list_movements(
    material_id: str,
    limit: int | None = None,
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> MovementListResponse:
    """Latest movements of one material."""
    movements = await recorder.list_movements(material_id, limit=limit)
    return MovementListResponse(
        movements=[to_movement_response(m) for m in movements],
        total=len(movements),
    )


@router.get("/stats", response_model=WarehouseStatsResponse)
async def get_stats(
    ledger: StockLedger = Depends(get_stock_ledger),
) -> WarehouseStatsResponse:
    """Dashboard numbers for the warehouse."""
    stats = await ledger.get_stats()
    return WarehouseStatsResponse(
        total_materials=stats.total_materials,
        low_stock_count=stats.low_stock_count,
        negative_stock_count=stats.negative_stock_count,
        critical_stock_count=stats.critical_stock_count,
        warning_stock_count=stats.warning_stock_count,
        total_quantity=stats.total_quantity,
        recent_movements=stats.recent_movements,
        window_days=stats.window_days,
    )


# --- Purchases ---


@router.post(
    "/purchases",
    response_model=PurchaseRecordedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_purchase(
    request: RecordPurchaseRequest,
    use_case: RecordPurchaseUseCase = Depends(get_record_purchase_use_case),
) -> PurchaseRecordedResponse:
    """Record a purchase and, by default, book it into stock."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/purchases/{material_id}",
    response_model=PurchaseListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_purchases(
    material_id: str,
    calculator: CostCalculator = Depends(get_cost_calculator),
) -> PurchaseListResponse:
    """Recent purchases of a material and their average unit price."""
    purchases = await calculator.list_purchases(material_id)
    average = await calculator.average_unit_price(material_id)
    return PurchaseListResponse(
        material_id=material_id,
        purchases=[to_purchase_response(p) for p in purchases],
        average_unit_price=average,
    )
