"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.inventory_store import IInventoryStore, StockChange
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.picture_store import IPictureStore
from src.core.interfaces.purchase_store import IPurchaseStore

__all__ = [
    "IInventoryStore",
    "IMaterialStore",
    "IPictureStore",
    "IPurchaseStore",
    "StockChange",
]
