"""Entity to response DTO conversion shared by routes and use cases."""

from src.application.dto.responses import (
    AvailabilityResponse,
    BomLineResponse,
    BomResponse,
    CostLineResponse,
    CostResponse,
    LowStockListResponse,
    MaterialResponse,
    MovementResponse,
    PictureResponse,
    PictureSizeResponse,
    PurchaseResponse,
    ShortageResponse,
    StockChangeResponse,
    StockLevelResponse,
    StockResponse,
)
from src.core.entities import (
    Material,
    MaterialMovement,
    MaterialPurchase,
    Picture,
    PictureMaterial,
    PictureSize,
    Stock,
    StockLevel,
)
from src.core.interfaces import StockChange
from src.core.services import AvailabilityReport, BomResult, CostBreakdown, LowStockReport


def to_material_response(material: Material) -> MaterialResponse:
    return MaterialResponse(
        id=material.id,  # type: ignore[arg-type]
        name=material.name,
        unit=material.unit,
        category=material.category.value,
        picture_size_id=material.picture_size_id,
        is_active=material.is_active,
        created_at=material.created_at,
        updated_at=material.updated_at,
    )


def to_stock_response(stock: Stock) -> StockResponse:
    return StockResponse(
        material_id=stock.material_id,
        quantity=stock.quantity,
        min_level=stock.min_level,
        is_low_stock=stock.is_low,
        is_negative=stock.is_negative,
        last_updated=stock.last_updated if stock.id is not None else None,
    )


def to_stock_level_response(level: StockLevel) -> StockLevelResponse:
    return StockLevelResponse(
        material_id=level.material_id,
        name=level.name,
        unit=level.unit,
        category=level.category,
        quantity=level.quantity,
        min_level=level.min_level,
        is_low_stock=level.is_low,
        is_negative=level.is_negative,
        movement_count=level.movement_count,
        last_updated=level.last_updated,
    )


def to_movement_response(movement: MaterialMovement) -> MovementResponse:
    return MovementResponse(
        id=movement.id,  # type: ignore[arg-type]
        material_id=movement.material_id,
        stock_id=movement.stock_id,
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        reason=movement.reason,
        reference_id=movement.reference_id,
        reference_type=movement.reference_type.value if movement.reference_type else None,
        notes=movement.notes,
        created_at=movement.created_at,
    )


def to_stock_change_response(change: StockChange) -> StockChangeResponse:
    return StockChangeResponse(
        stock=to_stock_response(change.stock),
        movement=to_movement_response(change.movement),
        previous_quantity=change.previous_quantity,
        new_quantity=change.new_quantity,
        is_negative=change.is_negative,
        warning=change.warning,
    )


def to_purchase_response(purchase: MaterialPurchase) -> PurchaseResponse:
    return PurchaseResponse(
        id=purchase.id,  # type: ignore[arg-type]
        material_id=purchase.material_id,
        quantity=purchase.quantity,
        unit_price=purchase.unit_price,
        total_price=purchase.total_price or 0.0,
        supplier=purchase.supplier,
        purchase_date=purchase.purchase_date,
        notes=purchase.notes,
        created_at=purchase.created_at,
    )


def to_picture_size_response(size: PictureSize) -> PictureSizeResponse:
    return PictureSizeResponse(
        id=size.id,  # type: ignore[arg-type]
        name=size.name,
        width_cm=size.width_cm,
        height_cm=size.height_cm,
        area_m2=size.area_m2,
        created_at=size.created_at,
    )


def to_picture_response(picture: Picture) -> PictureResponse:
    return PictureResponse(
        id=picture.id,  # type: ignore[arg-type]
        name=picture.name,
        picture_type=picture.picture_type.value,
        picture_size_id=picture.picture_size_id,
        price=picture.price,
        cost_price=picture.cost_price,
        work_hours=picture.work_hours,
        is_active=picture.is_active,
        created_at=picture.created_at,
        updated_at=picture.updated_at,
    )


def to_bom_line_response(line: PictureMaterial) -> BomLineResponse:
    return BomLineResponse(
        id=line.id,
        picture_id=line.picture_id,
        material_id=line.material_id,
        quantity=line.quantity,
    )


def to_bom_response(picture_id: str, lines: list[PictureMaterial]) -> BomResponse:
    return BomResponse(
        picture_id=picture_id,
        lines=[to_bom_line_response(line) for line in lines],
    )


def bom_result_to_response(result: BomResult) -> BomResponse:
    return BomResponse(
        picture_id=result.picture_id,
        lines=[to_bom_line_response(line) for line in result.lines],
        skipped_categories=[c.value for c in result.skipped_categories],
        complete=result.complete,
    )


def to_cost_response(breakdown: CostBreakdown, persisted: bool = False) -> CostResponse:
    return CostResponse(
        picture_id=breakdown.picture_id,
        lines=[
            CostLineResponse(
                material_id=line.material_id,
                quantity=line.quantity,
                unit_price=round(line.unit_price, 4),
                cost=round(line.cost, 2),
            )
            for line in breakdown.lines
        ],
        material_cost=round(breakdown.material_cost, 2),
        labor_cost=round(breakdown.labor_cost, 2),
        cost_price=breakdown.total,
        persisted=persisted,
    )


def to_availability_response(picture_id: str, report: AvailabilityReport) -> AvailabilityResponse:
    return AvailabilityResponse(
        picture_id=picture_id,
        sufficient=report.sufficient,
        shortages=[
            ShortageResponse(
                material_id=s.material_id,
                required=s.required,
                available=s.available,
                missing=s.missing,
            )
            for s in report.shortages
        ],
    )


def to_low_stock_response(report: LowStockReport) -> LowStockListResponse:
    items = [
        to_stock_level_response(alert.level).model_copy(
            update={"severity": alert.severity.value, "critical_level": alert.critical_level}
        )
        for alert in report.alerts
    ]
    return LowStockListResponse(
        items=items,
        total=len(items),
        critical_count=report.critical_count,
        warning_count=report.warning_count,
    )
