"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import ConnectionPool, create_pool
from src.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from src.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from src.infrastructure.storage.sqlite.picture_store import SQLitePictureStore
from src.infrastructure.storage.sqlite.purchase_store import SQLitePurchaseStore

__all__ = [
    # Connection
    "ConnectionPool",
    "create_pool",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteMaterialStore",
    "SQLitePictureStore",
    "SQLitePurchaseStore",
]
