"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from src.application.services import ServiceContainer, build_services
from src.config import Settings
from src.config.settings import StorageSettings
from src.infrastructure.storage.sqlite import ConnectionPool
from src.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary data directory."""
    return Settings(storage=StorageSettings(data_dir=tmp_path, db_name="test.db"))


@pytest.fixture
async def db_path(test_settings: Settings) -> Path:
    """Migrated temporary database."""
    path = test_settings.storage.db_path
    results = await initialize_database(path, create_backup_before=False)
    assert results and all(r.success for r in results)
    return path


@pytest.fixture
async def pool(db_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Single-connection pool on the migrated database."""
    async with ConnectionPool(db_path, pool_size=1, busy_timeout=5000) as p:
        yield p


@pytest.fixture
def services(pool: ConnectionPool, test_settings: Settings) -> ServiceContainer:
    """Stores and services wired to the temporary database."""
    return build_services(pool, test_settings)
