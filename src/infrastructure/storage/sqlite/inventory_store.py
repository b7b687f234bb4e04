"""SQLite implementation of the stock ledger and movement log."""

from datetime import UTC, datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import (
    MaterialMovement,
    MovementType,
    ReferenceType,
    Stock,
    StockLevel,
)
from src.core.exceptions import StockNotFoundError
from src.core.interfaces.inventory_store import IInventoryStore, StockChange
from src.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of stock rows and the append-only movement log."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def get_stock(self, material_id: str) -> Stock | None:
        """Get the stock row of a material."""
        async with self._pool.acquire() as conn:
            row = await self._fetch_stock_row(conn, material_id)
            if row is None:
                return None
            return self._row_to_stock(row)

    async def set_min_level(self, material_id: str, min_level: float | None) -> Stock:
        """Upsert the alert threshold of a material's stock row."""
        now = datetime.now(UTC).isoformat()
        async with self._pool.transaction(immediate=True) as conn:
            await conn.execute(
                """
                INSERT INTO stocks (material_id, quantity, min_level, last_updated, created_at)
                VALUES (?, 0, ?, ?, ?)
                ON CONFLICT(material_id) DO UPDATE SET
                    min_level = excluded.min_level,
                    last_updated = excluded.last_updated
                """,
                (material_id, min_level, now, now),
            )
            row = await self._fetch_stock_row(conn, material_id)
        logger.info("stock_min_level_set", material_id=material_id, min_level=min_level)
        return self._row_to_stock(row)

    async def apply_movement(
        self,
        movement: MaterialMovement,
        target_quantity: float | None = None,
        create_stock: bool = True,
    ) -> StockChange:
        """
        Read, update and log one stock change under the write lock.

        The stock row is read after BEGIN IMMEDIATE, so no other writer can
        change the quantity between the read and the update.
        """
        async with self._pool.transaction(immediate=True) as conn:
            now = datetime.now(UTC)
            row = await self._fetch_stock_row(conn, movement.material_id)
            if row is not None:
                stock = self._row_to_stock(row)
            elif create_stock:
                stock = await self._insert_stock(conn, movement.material_id, now)
            else:
                raise StockNotFoundError(movement.material_id)

            previous_quantity = stock.quantity
            update: dict = {"stock_id": stock.id, "created_at": now}
            if target_quantity is not None:
                update["quantity"] = target_quantity - previous_quantity
                if movement.notes is None:
                    update["notes"] = (
                        f"Adjusted from {previous_quantity:g} to {target_quantity:g}"
                    )
            recorded = movement.model_copy(update=update)

            stock.quantity = previous_quantity + recorded.signed_quantity
            stock.last_updated = now
            await conn.execute(
                "UPDATE stocks SET quantity = ?, last_updated = ? WHERE id = ?",
                (stock.quantity, now.isoformat(), stock.id),
            )

            cursor = await conn.execute(
                """
                INSERT INTO material_movements (
                    material_id, stock_id, movement_type, quantity, reason,
                    reference_id, reference_type, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    recorded.material_id,
                    recorded.stock_id,
                    recorded.movement_type.value,
                    recorded.quantity,
                    recorded.reason,
                    recorded.reference_id,
                    recorded.reference_type.value if recorded.reference_type else None,
                    recorded.notes,
                    now.isoformat(),
                ),
            )
            recorded.id = cursor.lastrowid

        logger.info(
            "stock_movement_recorded",
            movement_id=recorded.id,
            material_id=recorded.material_id,
            type=recorded.movement_type.value,
            qty=recorded.quantity,
            previous=previous_quantity,
            current=stock.quantity,
        )
        return StockChange(
            stock=stock,
            movement=recorded,
            previous_quantity=previous_quantity,
        )

    async def list_stock_levels(self, active_only: bool = True) -> list[StockLevel]:
        """Materials joined with their stock row and movement count."""
        where_clause = "WHERE m.is_active = 1" if active_only else ""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"""
                SELECT
                    m.id AS material_id,
                    m.name,
                    m.unit,
                    m.category,
                    COALESCE(s.quantity, 0) AS quantity,
                    s.min_level,
                    s.last_updated,
                    (
                        SELECT COUNT(*) FROM material_movements mm
                        WHERE mm.material_id = m.id
                    ) AS movement_count
                FROM materials m
                LEFT JOIN stocks s ON s.material_id = m.id
                {where_clause}
                ORDER BY m.category, m.name
                """
            )
            rows = await cursor.fetchall()
            return [self._row_to_stock_level(row) for row in rows]

    async def list_movements(
        self, material_id: str, limit: int = 50
    ) -> list[MaterialMovement]:
        """Get movements for a material, newest first."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM material_movements
                WHERE material_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (material_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_all_movements(self, limit: int = 100) -> list[MaterialMovement]:
        """Get movements across all materials, newest first."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM material_movements
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def count_movements_since(self, since: datetime) -> int:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM material_movements WHERE created_at >= ?",
                (since.isoformat(),),
            )
            row = await cursor.fetchone()
            return row[0]

    async def sum_movements(self, material_id: str) -> float:
        """Replay the movement log for a material."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT COALESCE(SUM(
                    CASE WHEN movement_type = 'OUT' THEN -quantity ELSE quantity END
                ), 0)
                FROM material_movements
                WHERE material_id = ?
                """,
                (material_id,),
            )
            row = await cursor.fetchone()
            return float(row[0])

    @staticmethod
    async def _fetch_stock_row(
        conn: aiosqlite.Connection, material_id: str
    ) -> aiosqlite.Row | None:
        cursor = await conn.execute(
            "SELECT * FROM stocks WHERE material_id = ?", (material_id,)
        )
        return await cursor.fetchone()

    @staticmethod
    async def _insert_stock(
        conn: aiosqlite.Connection, material_id: str, now: datetime
    ) -> Stock:
        cursor = await conn.execute(
            """
            INSERT INTO stocks (material_id, quantity, min_level, last_updated, created_at)
            VALUES (?, 0, NULL, ?, ?)
            """,
            (material_id, now.isoformat(), now.isoformat()),
        )
        logger.info("stock_created", material_id=material_id)
        return Stock(
            id=cursor.lastrowid,
            material_id=material_id,
            quantity=0.0,
            last_updated=now,
            created_at=now,
        )

    @staticmethod
    def _row_to_stock(row: aiosqlite.Row) -> Stock:
        """Convert a database row to a Stock entity."""
        return Stock(
            id=row["id"],
            material_id=row["material_id"],
            quantity=float(row["quantity"]),
            min_level=float(row["min_level"]) if row["min_level"] is not None else None,
            last_updated=datetime.fromisoformat(row["last_updated"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    @staticmethod
    def _row_to_stock_level(row: aiosqlite.Row) -> StockLevel:
        return StockLevel(
            material_id=row["material_id"],
            name=row["name"],
            unit=row["unit"],
            category=row["category"],
            quantity=float(row["quantity"]),
            min_level=float(row["min_level"]) if row["min_level"] is not None else None,
            movement_count=row["movement_count"],
            last_updated=(
                datetime.fromisoformat(row["last_updated"]) if row["last_updated"] else None
            ),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> MaterialMovement:
        """Convert a database row to a MaterialMovement entity."""
        return MaterialMovement(
            id=row["id"],
            material_id=row["material_id"],
            stock_id=row["stock_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=float(row["quantity"]),
            reason=row["reason"],
            reference_id=row["reference_id"],
            reference_type=(
                ReferenceType(row["reference_type"]) if row["reference_type"] else None
            ),
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
