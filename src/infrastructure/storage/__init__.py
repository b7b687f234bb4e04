"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteInventoryStore,
    SQLiteMaterialStore,
    SQLitePictureStore,
    SQLitePurchaseStore,
    create_pool,
)

__all__ = [
    # SQLite stores
    "SQLiteInventoryStore",
    "SQLiteMaterialStore",
    "SQLitePictureStore",
    "SQLitePurchaseStore",
    # Connection pool
    "ConnectionPool",
    "create_pool",
]
