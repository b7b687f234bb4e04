"""
Abstract interface for material purchase storage.

Defines the contract for recording purchases and reading the most
recent ones for weighted average costing.
"""

from abc import ABC, abstractmethod

from src.core.entities.inventory import MaterialPurchase


class IPurchaseStore(ABC):
    """Abstract interface for material purchase history."""

    @abstractmethod
    async def add_purchase(self, purchase: MaterialPurchase) -> MaterialPurchase:
        """Record a purchase."""
        pass

    @abstractmethod
    async def list_recent(
        self, material_id: str, limit: int = 10
    ) -> list[MaterialPurchase]:
        """Get the most recent purchases of a material by purchase date DESC."""
        pass
