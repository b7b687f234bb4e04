"""Receive Stock Use Case: IN movement against the stock ledger."""

from src.application.dto.requests import AddStockRequest
from src.application.dto.responses import StockChangeResponse
from src.application.mappers import to_stock_change_response
from src.core.entities.inventory import MovementReference
from src.core.interfaces.inventory_store import StockChange
from src.core.services import MovementRecorder


class ReceiveStockUseCase:
    """Receive material into the warehouse."""

    def __init__(self, movement_recorder: MovementRecorder):
        self._recorder = movement_recorder

    async def execute(self, request: AddStockRequest) -> StockChange:
        """Execute receive stock use case."""
        reference = None
        if request.reference is not None:
            reference = MovementReference(
                id=request.reference.id,
                type=request.reference.type,
            )

        return await self._recorder.add_material(
            material_id=request.material_id,
            quantity=request.quantity,
            reason=request.reason,
            reference=reference,
            notes=request.notes,
        )

    def to_response(self, result: StockChange) -> StockChangeResponse:
        """Convert result to API response."""
        return to_stock_change_response(result)
