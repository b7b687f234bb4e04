"""SQLite implementation of picture, size and BOM storage."""

import uuid
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.picture import Picture, PictureMaterial, PictureSize, PictureType
from src.core.interfaces.picture_store import IPictureStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


def _generate_id() -> str:
    return str(uuid.uuid4())


class SQLitePictureStore(IPictureStore):
    """SQLite implementation of pictures and their bill of materials."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def create_size(self, size: PictureSize) -> PictureSize:
        if not size.id:
            size.id = _generate_id()
        async with self._pool.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO picture_sizes (id, name, width_cm, height_cm, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    size.id,
                    size.name,
                    size.width_cm,
                    size.height_cm,
                    size.created_at.isoformat(),
                ),
            )
        logger.info("picture_size_created", picture_size_id=size.id, name=size.name)
        return size

    async def get_size(self, size_id: str) -> PictureSize | None:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM picture_sizes WHERE id = ?", (size_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return PictureSize(
                id=row["id"],
                name=row["name"],
                width_cm=row["width_cm"],
                height_cm=row["height_cm"],
                created_at=datetime.fromisoformat(row["created_at"]),
            )

    async def create_picture(self, picture: Picture) -> Picture:
        if not picture.id:
            picture.id = _generate_id()
        picture.updated_at = datetime.now(UTC)
        async with self._pool.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO pictures (
                    id, name, picture_type, picture_size_id, price, cost_price,
                    work_hours, is_active, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    picture.id,
                    picture.name,
                    picture.picture_type.value,
                    picture.picture_size_id,
                    picture.price,
                    picture.cost_price,
                    picture.work_hours,
                    int(picture.is_active),
                    picture.created_at.isoformat(),
                    picture.updated_at.isoformat(),
                ),
            )
        logger.info("picture_created", picture_id=picture.id, name=picture.name)
        return picture

    async def get_picture(self, picture_id: str) -> Picture | None:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM pictures WHERE id = ?", (picture_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_picture(row)

    async def list_pictures(
        self,
        active_only: bool = True,
        picture_type: PictureType | None = None,
        material_id: str | None = None,
    ) -> list[Picture]:
        """List pictures, optionally only those of a type or using a material."""
        conditions: list[str] = []
        params: list[Any] = []
        if active_only:
            conditions.append("p.is_active = 1")
        if picture_type is not None:
            conditions.append("p.picture_type = ?")
            params.append(picture_type.value)
        if material_id is not None:
            conditions.append(
                "EXISTS (SELECT 1 FROM picture_materials pm "
                "WHERE pm.picture_id = p.id AND pm.material_id = ?)"
            )
            params.append(material_id)

        where_clause = ""
        if conditions:
            where_clause = "WHERE " + " AND ".join(conditions)

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"""
                SELECT p.* FROM pictures p
                {where_clause}
                ORDER BY p.created_at, p.rowid
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_picture(row) for row in rows]

    async def update_cost_price(self, picture_id: str, cost_price: float) -> None:
        async with self._pool.transaction() as conn:
            await conn.execute(
                "UPDATE pictures SET cost_price = ?, updated_at = ? WHERE id = ?",
                (cost_price, datetime.now(UTC).isoformat(), picture_id),
            )

    async def update_price(self, picture_id: str, price: float) -> None:
        async with self._pool.transaction() as conn:
            await conn.execute(
                "UPDATE pictures SET price = ?, updated_at = ? WHERE id = ?",
                (price, datetime.now(UTC).isoformat(), picture_id),
            )

    async def get_bom(self, picture_id: str) -> list[PictureMaterial]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM picture_materials
                WHERE picture_id = ?
                ORDER BY id
                """,
                (picture_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_line(row) for row in rows]

    async def replace_bom(
        self, picture_id: str, lines: list[PictureMaterial]
    ) -> list[PictureMaterial]:
        """Delete and re-insert the BOM in one transaction."""
        async with self._pool.transaction(immediate=True) as conn:
            await conn.execute(
                "DELETE FROM picture_materials WHERE picture_id = ?", (picture_id,)
            )
            for line in lines:
                cursor = await conn.execute(
                    """
                    INSERT INTO picture_materials (picture_id, material_id, quantity)
                    VALUES (?, ?, ?)
                    """,
                    (picture_id, line.material_id, line.quantity),
                )
                line.id = cursor.lastrowid
                line.picture_id = picture_id
        logger.info("bom_replaced", picture_id=picture_id, lines=len(lines))
        return lines

    async def upsert_bom_line(self, line: PictureMaterial) -> PictureMaterial:
        async with self._pool.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO picture_materials (picture_id, material_id, quantity)
                VALUES (?, ?, ?)
                ON CONFLICT(picture_id, material_id) DO UPDATE SET
                    quantity = excluded.quantity
                """,
                (line.picture_id, line.material_id, line.quantity),
            )
            cursor = await conn.execute(
                """
                SELECT * FROM picture_materials
                WHERE picture_id = ? AND material_id = ?
                """,
                (line.picture_id, line.material_id),
            )
            row = await cursor.fetchone()
        return self._row_to_line(row)

    @staticmethod
    def _row_to_picture(row: aiosqlite.Row) -> Picture:
        """Convert a database row to a Picture entity."""
        return Picture(
            id=row["id"],
            name=row["name"],
            picture_type=PictureType(row["picture_type"]),
            picture_size_id=row["picture_size_id"],
            price=float(row["price"]),
            cost_price=float(row["cost_price"]) if row["cost_price"] is not None else None,
            work_hours=float(row["work_hours"]) if row["work_hours"] is not None else None,
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @staticmethod
    def _row_to_line(row: aiosqlite.Row) -> PictureMaterial:
        return PictureMaterial(
            id=row["id"],
            picture_id=row["picture_id"],
            material_id=row["material_id"],
            quantity=float(row["quantity"]),
        )
