"""Issue Stock Use Case: OUT movement, allowed to go below zero."""

from src.application.dto.requests import RemoveStockRequest
from src.application.dto.responses import StockChangeResponse
from src.application.mappers import to_stock_change_response
from src.config import get_logger
from src.core.entities.inventory import MovementReference
from src.core.interfaces.inventory_store import StockChange
from src.core.services import MovementRecorder

logger = get_logger(__name__)


class IssueStockUseCase:
    """
    Take material out of the warehouse.

    There is no balance check: a shortfall is recorded and reported as a
    warning on the response.
    """

    def __init__(self, movement_recorder: MovementRecorder):
        self._recorder = movement_recorder

    async def execute(self, request: RemoveStockRequest) -> StockChange:
        """Execute issue stock use case."""
        reference = None
        if request.reference is not None:
            reference = MovementReference(
                id=request.reference.id,
                type=request.reference.type,
            )

        change = await self._recorder.remove_material(
            material_id=request.material_id,
            quantity=request.quantity,
            reason=request.reason,
            reference=reference,
            notes=request.notes,
        )
        if change.is_negative:
            logger.info(
                "issue_stock_went_negative",
                material_id=request.material_id,
                quantity=change.new_quantity,
            )
        return change

    def to_response(self, result: StockChange) -> StockChangeResponse:
        """Convert result to API response."""
        return to_stock_change_response(result)
