"""
SQLite implementation of material purchase storage.

Purchases feed the weighted average unit price; they do not move stock.
"""

from datetime import date, datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import MaterialPurchase
from src.core.interfaces.purchase_store import IPurchaseStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


class SQLitePurchaseStore(IPurchaseStore):
    """SQLite implementation of purchase history."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def add_purchase(self, purchase: MaterialPurchase) -> MaterialPurchase:
        """Record a purchase."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO material_purchases (
                    material_id, quantity, unit_price, total_price,
                    supplier, purchase_date, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    purchase.material_id,
                    purchase.quantity,
                    purchase.unit_price,
                    purchase.total_price,
                    purchase.supplier,
                    purchase.purchase_date.isoformat(),
                    purchase.notes,
                    purchase.created_at.isoformat(),
                ),
            )
            purchase.id = cursor.lastrowid
        logger.info(
            "material_purchase_recorded",
            purchase_id=purchase.id,
            material_id=purchase.material_id,
            qty=purchase.quantity,
            total_price=purchase.total_price,
        )
        return purchase

    async def list_recent(
        self, material_id: str, limit: int = 10
    ) -> list[MaterialPurchase]:
        """Most recent purchases of a material, by purchase date DESC."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM material_purchases
                WHERE material_id = ?
                ORDER BY purchase_date DESC, id DESC
                LIMIT ?
                """,
                (material_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_purchase(row) for row in rows]

    @staticmethod
    def _row_to_purchase(row: aiosqlite.Row) -> MaterialPurchase:
        """Convert a database row to a MaterialPurchase entity."""
        return MaterialPurchase(
            id=row["id"],
            material_id=row["material_id"],
            quantity=float(row["quantity"]),
            unit_price=float(row["unit_price"]),
            total_price=float(row["total_price"]),
            supplier=row["supplier"],
            purchase_date=date.fromisoformat(row["purchase_date"]),
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
