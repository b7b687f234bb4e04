"""Pytest fixtures for SQLite storage tests."""

import pytest

from src.core.entities.material import Material, MaterialCategory
from src.core.entities.picture import PictureSize
from src.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteInventoryStore,
    SQLiteMaterialStore,
    SQLitePictureStore,
    SQLitePurchaseStore,
)


@pytest.fixture
def material_store(pool: ConnectionPool) -> SQLiteMaterialStore:
    return SQLiteMaterialStore(pool)


@pytest.fixture
def inventory_store(pool: ConnectionPool) -> SQLiteInventoryStore:
    return SQLiteInventoryStore(pool)


@pytest.fixture
def picture_store(pool: ConnectionPool) -> SQLitePictureStore:
    return SQLitePictureStore(pool)


@pytest.fixture
def purchase_store(pool: ConnectionPool) -> SQLitePurchaseStore:
    return SQLitePurchaseStore(pool)


@pytest.fixture
async def canvas(material_store: SQLiteMaterialStore) -> Material:
    """A stored canvas material."""
    return await material_store.create_material(
        Material(name="Canvas 30x40", category=MaterialCategory.CANVAS)
    )


@pytest.fixture
async def size_30x40(picture_store: SQLitePictureStore) -> PictureSize:
    """A stored 30x40 cm picture size."""
    return await picture_store.create_size(PictureSize(name="30x40", width_cm=30, height_cm=40))
