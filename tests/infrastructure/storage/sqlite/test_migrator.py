"""Tests for database migrations."""

from pathlib import Path

import aiosqlite

from src.infrastructure.storage.sqlite.migrations import (
    REQUIRED_TABLES,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestMigrator:
    def test_discovers_sql_files(self):
        migrations = discover_migrations()
        assert migrations
        assert migrations[0].version == "001"
        assert migrations[0].checksum

    async def test_creates_required_tables(self, tmp_path: Path):
        db_path = tmp_path / "fresh.db"
        results = await initialize_database(db_path)

        assert all(r.success for r in results)
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert set(REQUIRED_TABLES) <= tables

    async def test_rerun_is_noop(self, db_path: Path):
        assert await initialize_database(db_path) == []
        assert not list(db_path.parent.glob("*.backup*"))

    async def test_status(self, db_path: Path):
        status = await get_migration_status(db_path)
        assert status["exists"] is True
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

    async def test_status_missing_db(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "missing.db")
        assert status["exists"] is False
        assert status["current_version"] is None

    async def test_schema_integrity(self, db_path: Path):
        checks = await verify_schema_integrity(db_path)
        assert all(check["status"] == "PASS" for check in checks)
        assert {check["check"] for check in checks} >= {"append_only_movements", "stock_balance"}

    async def test_detects_unbalanced_stock(self, db_path: Path):
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute(
                "INSERT INTO materials (id, name, created_at, updated_at) "
                "VALUES ('M1', 'Canvas', '2024-01-01', '2024-01-01')"
            )
            await conn.execute(
                "INSERT INTO stocks (material_id, quantity, last_updated, created_at) "
                "VALUES ('M1', 5, '2024-01-01', '2024-01-01')"
            )
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(db_path)}
        assert checks["stock_balance"]["status"] == "FAIL"
        assert checks["stock_balance"]["unbalanced"] == ["M1"]

    async def test_detects_dropped_trigger(self, db_path: Path):
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("DROP TRIGGER trg_movements_no_delete")
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(db_path)}
        assert checks["append_only_movements"]["status"] == "FAIL"
        assert checks["append_only_movements"]["missing"] == ["trg_movements_no_delete"]
