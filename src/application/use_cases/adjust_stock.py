"""Adjust Stock Use Case: set a counted quantity via an ADJUSTMENT movement."""

from src.application.dto.requests import AdjustStockRequest
from src.application.dto.responses import StockChangeResponse
from src.application.mappers import to_stock_change_response
from src.core.interfaces.inventory_store import StockChange
from src.core.services import MovementRecorder


class AdjustStockUseCase:
    """Correct the ledger after a stocktake."""

    def __init__(self, movement_recorder: MovementRecorder):
        self._recorder = movement_recorder

    async def execute(self, request: AdjustStockRequest) -> StockChange:
        return await self._recorder.adjust_stock(
            material_id=request.material_id,
            new_quantity=request.new_quantity,
            reason=request.reason,
            notes=request.notes,
        )

    def to_response(self, result: StockChange) -> StockChangeResponse:
        return to_stock_change_response(result)
