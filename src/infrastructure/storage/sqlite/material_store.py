"""
SQLite implementation of material catalog storage.

Materials are never deleted; deactivation keeps movement history and BOM
lines pointing at a valid row.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.material import Material, MaterialCategory
from src.core.interfaces.material_store import IMaterialStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


def _generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


class SQLiteMaterialStore(IMaterialStore):
    """SQLite implementation of material catalog storage."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def create_material(self, material: Material) -> Material:
        """Create a new material record."""
        if not material.id:
            material.id = _generate_id()
        material.updated_at = datetime.now(UTC)
        async with self._pool.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO materials (
                    id, name, unit, category, picture_size_id,
                    is_active, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    material.id,
                    material.name,
                    material.unit,
                    material.category.value,
                    material.picture_size_id,
                    int(material.is_active),
                    material.created_at.isoformat(),
                    material.updated_at.isoformat(),
                ),
            )
        logger.info(
            "material_created",
            material_id=material.id,
            name=material.name,
            category=material.category.value,
        )
        return material

    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM materials WHERE id = ?", (material_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_material(row)

    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        category: MaterialCategory | None = None,
        active_only: bool = True,
    ) -> list[Material]:
        """List materials by name with pagination and optional category filter."""
        conditions: list[str] = []
        params: list[Any] = []
        if active_only:
            conditions.append("is_active = 1")
        if category is not None:
            conditions.append("category = ?")
            params.append(category.value)

        where_clause = ""
        if conditions:
            where_clause = "WHERE " + " AND ".join(conditions)
        params.extend([limit, offset])

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM materials
                {where_clause}
                ORDER BY name
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_material(row) for row in rows]

    async def first_active_in_category(
        self, category: MaterialCategory
    ) -> Material | None:
        """Oldest active material of a category; used to fill BOM lines."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM materials
                WHERE category = ? AND is_active = 1
                ORDER BY created_at, rowid
                LIMIT 1
                """,
                (category.value,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_material(row)

    async def deactivate_material(self, material_id: str) -> Material | None:
        """Set is_active = 0. Returns None if the material does not exist."""
        now = datetime.now(UTC)
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                "UPDATE materials SET is_active = 0, updated_at = ? WHERE id = ?",
                (now.isoformat(), material_id),
            )
            if cursor.rowcount == 0:
                return None
            cursor = await conn.execute(
                "SELECT * FROM materials WHERE id = ?", (material_id,)
            )
            row = await cursor.fetchone()
        logger.info("material_deactivated", material_id=material_id)
        return self._row_to_material(row)

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> Material:
        """Convert database row to Material entity."""
        return Material(
            id=row["id"],
            name=row["name"],
            unit=row["unit"],
            category=MaterialCategory(row["category"]),
            picture_size_id=row["picture_size_id"],
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
