"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from src.core.entities.inventory import MaterialMovement, Stock, StockLevel


@dataclass
class StockChange:
    """Outcome of one atomic ledger update plus its movement row."""

    stock: Stock
    movement: MaterialMovement
    previous_quantity: float

    @property
    def new_quantity(self) -> float:
        return self.stock.quantity

    @property
    def is_negative(self) -> bool:
        return self.stock.quantity < 0

    @property
    def warning(self) -> str | None:
        """Operator-facing message when the ledger went below zero."""
        if not self.is_negative:
            return None
        return (
            f"Stock of material {self.stock.material_id} is negative "
            f"({self.stock.quantity:g})"
        )


class IInventoryStore(ABC):
    """Interface for stock ledger and material movement persistence."""

    @abstractmethod
    async def get_stock(self, material_id: str) -> Stock | None:
        """Get the stock row of a material, or None if never initialized."""
        pass

    @abstractmethod
    async def set_min_level(self, material_id: str, min_level: float | None) -> Stock:
        """Set the alert threshold, creating a zero stock row if absent."""
        pass

    @abstractmethod
    async def apply_movement(
        self,
        movement: MaterialMovement,
        target_quantity: float | None = None,
        create_stock: bool = True,
    ) -> StockChange:
        """
        Update the stock row and insert the movement in one transaction.

        When target_quantity is given the movement quantity is replaced by
        the signed delta from the current quantity to the target.
        """
        pass

    @abstractmethod
    async def list_stock_levels(self, active_only: bool = True) -> list[StockLevel]:
        """List materials with their stock row (zero when absent)."""
        pass

    @abstractmethod
    async def list_movements(
        self, material_id: str, limit: int = 50
    ) -> list[MaterialMovement]:
        """Get movements for a material, newest first."""
        pass

    @abstractmethod
    async def list_all_movements(self, limit: int = 100) -> list[MaterialMovement]:
        """Get movements across all materials, newest first."""
        pass

    @abstractmethod
    async def count_movements_since(self, since: datetime) -> int:
        """Count movements created at or after the given instant."""
        pass

    @abstractmethod
    async def sum_movements(self, material_id: str) -> float:
        """Algebraic sum of signed movement quantities for a material."""
        pass
