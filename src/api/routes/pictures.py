"""Picture endpoints: sizes, bill of materials, cost and pricing."""

from dataclasses import replace

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_bom_generator,
    get_cost_calculator,
    get_create_picture_use_case,
    get_movement_recorder,
    get_picture_store,
    get_pricing_service,
    get_stock_ledger,
)
from src.application.dto.requests import (
    CreatePictureRequest,
    CreatePictureSizeRequest,
    GenerateBomRequest,
    RecalculateCostsRequest,
    SetBomLineRequest,
)
from src.application.dto.responses import (
    AvailabilityResponse,
    BomLineResponse,
    BomResponse,
    CostResponse,
    CostStatsResponse,
    CreatePictureResponse,
    ErrorResponse,
    PictureResponse,
    PictureSizeResponse,
    PriceRecommendationResponse,
    ProfitResponse,
    RecalculationResponse,
    StockChangeResponse,
    TypeCostStatsResponse,
)
from src.application.mappers import (
    bom_result_to_response,
    to_availability_response,
    to_bom_line_response,
    to_bom_response,
    to_cost_response,
    to_picture_response,
    to_picture_size_response,
    to_stock_change_response,
)
from src.application.use_cases import CreatePictureUseCase
from src.core.entities.picture import PictureSize, PictureType
from src.core.exceptions import PictureNotFoundError, PictureSizeNotFoundError
from src.core.interfaces import IPictureStore
from src.core.services import (
    BomGenerator,
    CostCalculator,
    MovementRecorder,
    PricingService,
    StockLedger,
)

router = APIRouter(prefix="/api/pictures", tags=["pictures"])


# --- Sizes ---


@router.post(
    "/sizes",
    response_model=PictureSizeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_size(
    request: CreatePictureSizeRequest,
    store: IPictureStore = Depends(get_picture_store),
) -> PictureSizeResponse:
    """Create a canvas format."""
    size = await store.create_size(
        PictureSize(
            name=request.name,
            width_cm=request.width_cm,
            height_cm=request.height_cm,
        )
    )
    return to_picture_size_response(size)


@router.get(
    "/sizes/{size_id}",
    response_model=PictureSizeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_size(
    size_id: str,
    store: IPictureStore = Depends(get_picture_store),
) -> PictureSizeResponse:
    """Get a canvas format by ID."""
    size = await store.get_size(size_id)
    if size is None:
        raise PictureSizeNotFoundError(size_id)
    return to_picture_size_response(size)


# --- Pictures ---


@router.post(
    "",
    response_model=CreatePictureResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_picture(
    request: CreatePictureRequest,
    use_case: CreatePictureUseCase = Depends(get_create_picture_use_case),
) -> CreatePictureResponse:
    """Create a picture and, by default, its size-derived BOM."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=list[PictureResponse])
async def list_pictures(
    picture_type: PictureType | None = None,
    material_id: str | None = None,
    active_only: bool = True,
    store: IPictureStore = Depends(get_picture_store),
) -> list[PictureResponse]:
    """List pictures, optionally of one type or using one material."""
    pictures = await store.list_pictures(
        active_only=active_only,
        picture_type=picture_type,
        material_id=material_id,
    )
    return [to_picture_response(p) for p in pictures]


@router.post(
    "/recalculate-costs",
    response_model=RecalculationResponse,
    responses={400: {"model": ErrorResponse}},
)
async def recalculate_costs(
    request: RecalculateCostsRequest,
    calculator: CostCalculator = Depends(get_cost_calculator),
    pricing: PricingService = Depends(get_pricing_service),
) -> RecalculationResponse:
    """Recompute and store the cost price of active pictures, optionally repricing them."""
    report = await calculator.recalculate_costs(
        material_id=request.material_id,
        picture_type=request.picture_type,
        pricing=pricing if request.update_prices else None,
    )
    return RecalculationResponse(
        total_pictures=report.total_pictures,
        updated=report.updated,
        errors=report.errors,
        details=report.details,
    )


@router.get("/cost-stats", response_model=CostStatsResponse)
async def get_cost_stats(
    calculator: CostCalculator = Depends(get_cost_calculator),
) -> CostStatsResponse:
    """How many active pictures have a stored cost price, with averages per type."""
    stats = await calculator.cost_stats()
    return CostStatsResponse(
        total=stats.total,
        with_cost_price=stats.with_cost_price,
        without_cost_price=stats.without_cost_price,
        average_cost_price=stats.average_cost_price,
        average_price=stats.average_price,
        average_margin=stats.average_margin,
        by_type={
            name: TypeCostStatsResponse(
                count=group.count,
                average_cost=group.average_cost,
                average_price=group.average_price,
            )
            for name, group in stats.by_type.items()
        },
    )


@router.get(
    "/{picture_id}",
    response_model=PictureResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_picture(
    picture_id: str,
    store: IPictureStore = Depends(get_picture_store),
) -> PictureResponse:
    """Get a picture by ID."""
    picture = await store.get_picture(picture_id)
    if picture is None:
        raise PictureNotFoundError(picture_id)
    return to_picture_response(picture)


# --- Bill of materials ---


@router.post(
    "/{picture_id}/bom",
    response_model=BomResponse,
    responses={404: {"model": ErrorResponse}},
)
async def generate_bom(
    picture_id: str,
    request: GenerateBomRequest | None = None,
    generator: BomGenerator = Depends(get_bom_generator),
) -> BomResponse:
    """Replace the BOM with the default derived from the picture size."""
    size_id = request.picture_size_id if request else None
    result = await generator.generate_bom(picture_id, picture_size_id=size_id)
    return bom_result_to_response(result)


@router.get(
    "/{picture_id}/bom",
    response_model=BomResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_bom(
    picture_id: str,
    generator: BomGenerator = Depends(get_bom_generator),
) -> BomResponse:
    """Current BOM lines of a picture."""
    lines = await generator.get_bom(picture_id)
    return to_bom_response(picture_id, lines)


@router.put(
    "/{picture_id}/bom/{material_id}",
    response_model=BomLineResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def set_bom_line(
    picture_id: str,
    material_id: str,
    request: SetBomLineRequest,
    generator: BomGenerator = Depends(get_bom_generator),
) -> BomLineResponse:
    """Set the quantity of one material in the BOM."""
    line = await generator.set_line(picture_id, material_id, request.quantity)
    return to_bom_line_response(line)


@router.get(
    "/{picture_id}/availability",
    response_model=AvailabilityResponse,
    responses={404: {"model": ErrorResponse}},
)
async def check_availability(
    picture_id: str,
    generator: BomGenerator = Depends(get_bom_generator),
    ledger: StockLedger = Depends(get_stock_ledger),
) -> AvailabilityResponse:
    """Compare the BOM of a picture against current stock."""
    lines = await generator.get_bom(picture_id)
    report = await ledger.check_availability(lines)
    return to_availability_response(picture_id, report)


@router.post(
    "/{picture_id}/consume",
    response_model=list[StockChangeResponse],
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def consume_materials(
    picture_id: str,
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> list[StockChangeResponse]:
    """Write off the BOM of a picture from stock."""
    changes = await recorder.consume_for_picture(picture_id)
    return [to_stock_change_response(c) for c in changes]


@router.post(
    "/{picture_id}/return",
    response_model=list[StockChangeResponse],
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def return_materials(
    picture_id: str,
    recorder: MovementRecorder = Depends(get_movement_recorder),
) -> list[StockChangeResponse]:
    """Put the BOM of a cancelled picture back into stock."""
    changes = await recorder.return_for_picture(picture_id)
    return [to_stock_change_response(c) for c in changes]


# --- Cost and price ---


@router.get(
    "/{picture_id}/cost",
    response_model=CostResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def get_cost(
    picture_id: str,
    calculator: CostCalculator = Depends(get_cost_calculator),
) -> CostResponse:
    """Compute the cost price without storing it."""
    breakdown = await calculator.cost_breakdown(picture_id)
    return to_cost_response(breakdown)


@router.post(
    "/{picture_id}/cost",
    response_model=CostResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_cost(
    picture_id: str,
    calculator: CostCalculator = Depends(get_cost_calculator),
) -> CostResponse:
    """Compute the cost price and store it on the picture."""
    breakdown = await calculator.persist_cost(picture_id)
    return to_cost_response(breakdown, persisted=True)


@router.get(
    "/{picture_id}/profit",
    response_model=ProfitResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_profit(
    picture_id: str,
    calculator: CostCalculator = Depends(get_cost_calculator),
) -> ProfitResponse:
    """Profit and margin from the stored price and cost price."""
    result = await calculator.picture_profit(picture_id)
    return ProfitResponse(
        picture_id=result.picture_id,
        price=result.price,
        cost_price=result.cost_price,
        profit=result.profit,
        margin=result.margin,
    )


@router.get(
    "/{picture_id}/recommended-price",
    response_model=PriceRecommendationResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def get_recommended_price(
    picture_id: str,
    markup_percentage: float | None = Query(default=None),
    min_price: float | None = Query(default=None),
    max_price: float | None = Query(default=None),
    complexity_multiplier: float | None = Query(default=None),
    size_multiplier: float | None = Query(default=None),
    urgency_multiplier: float | None = Query(default=None),
    pricing: PricingService = Depends(get_pricing_service),
) -> PriceRecommendationResponse:
    """Recommend a sale price; unset parameters use the configured defaults."""
    overrides = {
        name: value
        for name, value in {
            "markup_percentage": markup_percentage,
            "min_price": min_price,
            "max_price": max_price,
            "complexity_multiplier": complexity_multiplier,
            "size_multiplier": size_multiplier,
            "urgency_multiplier": urgency_multiplier,
        }.items()
        if value is not None
    }
    options = replace(pricing.defaults, **overrides)

    recommendation = await pricing.recommend_price(picture_id, options)
    return PriceRecommendationResponse(
        picture_id=recommendation.picture_id,
        cost_price=recommendation.cost_price,
        base_price=recommendation.base_price,
        recommended_price=recommendation.recommended_price,
        profit=recommendation.profit,
        profit_margin=recommendation.profit_margin,
    )
