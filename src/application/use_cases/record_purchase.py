"""Record Purchase Use Case: purchase history plus the matching IN movement."""

from dataclasses import dataclass
from datetime import date

from src.application.dto.requests import RecordPurchaseRequest
from src.application.dto.responses import PurchaseRecordedResponse
from src.application.mappers import to_purchase_response, to_stock_change_response
from src.config import get_logger
from src.core.entities.inventory import MaterialPurchase, MovementReference, ReferenceType
from src.core.interfaces.inventory_store import StockChange
from src.core.services import CostCalculator, MovementRecorder

logger = get_logger(__name__)


@dataclass
class RecordPurchaseResult:
    """Result of recording a purchase."""

    purchase: MaterialPurchase
    stock_change: StockChange | None = None


class RecordPurchaseUseCase:
    """
    Record a purchase for average costing and book it into stock.

    The stock increase goes through the movement recorder with a PURCHASE
    reference, so the ledger stays equal to the movement log. The purchase
    row and the movement are two transactions; if the movement fails the
    purchase is kept and the error propagates.
    """

    def __init__(
        self,
        cost_calculator: CostCalculator,
        movement_recorder: MovementRecorder,
    ):
        self._cost_calculator = cost_calculator
        self._recorder = movement_recorder

    async def execute(self, request: RecordPurchaseRequest) -> RecordPurchaseResult:
        """Execute record purchase use case."""
        purchase = await self._cost_calculator.record_purchase(
            MaterialPurchase(
                material_id=request.material_id,
                quantity=request.quantity,
                unit_price=request.unit_price,
                total_price=request.total_price,
                supplier=request.supplier,
                purchase_date=request.purchase_date or date.today(),
                notes=request.notes,
            )
        )

        change = None
        if request.receive_stock:
            reason = f"Purchase from {purchase.supplier}" if purchase.supplier else "Purchase"
            change = await self._recorder.add_material(
                material_id=purchase.material_id,
                quantity=purchase.quantity,
                reason=reason,
                reference=MovementReference(id=str(purchase.id), type=ReferenceType.PURCHASE),
            )

        logger.info(
            "record_purchase_complete",
            purchase_id=purchase.id,
            material_id=purchase.material_id,
            received=change is not None,
        )
        return RecordPurchaseResult(purchase=purchase, stock_change=change)

    def to_response(self, result: RecordPurchaseResult) -> PurchaseRecordedResponse:
        """Convert result to API response."""
        return PurchaseRecordedResponse(
            purchase=to_purchase_response(result.purchase),
            stock_change=(
                to_stock_change_response(result.stock_change) if result.stock_change else None
            ),
        )
