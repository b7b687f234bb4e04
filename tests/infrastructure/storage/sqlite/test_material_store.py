"""Tests for SQLite material store."""

from src.core.entities.material import Material, MaterialCategory
from src.infrastructure.storage.sqlite import SQLiteMaterialStore


class TestSQLiteMaterialStore:
    async def test_create_and_get(self, material_store: SQLiteMaterialStore, size_30x40):
        created = await material_store.create_material(
            Material(
                name="Frame 30x40",
                unit="m",
                category=MaterialCategory.FRAME,
                picture_size_id=size_30x40.id,
            )
        )
        assert created.id is not None

        fetched = await material_store.get_material(created.id)
        assert fetched is not None
        assert fetched.name == "Frame 30x40"
        assert fetched.category == MaterialCategory.FRAME
        assert fetched.picture_size_id == size_30x40.id
        assert fetched.is_active is True

    async def test_get_not_found(self, material_store: SQLiteMaterialStore):
        assert await material_store.get_material("missing") is None

    async def test_list_filters(self, material_store: SQLiteMaterialStore):
        await material_store.create_material(Material(name="Brush B", category=MaterialCategory.BRUSH))
        await material_store.create_material(Material(name="Brush A", category=MaterialCategory.BRUSH))
        paint = await material_store.create_material(
            Material(name="Paint", category=MaterialCategory.PAINT)
        )
        await material_store.deactivate_material(paint.id)

        brushes = await material_store.list_materials(category=MaterialCategory.BRUSH)
        assert [m.name for m in brushes] == ["Brush A", "Brush B"]

        active = await material_store.list_materials()
        assert len(active) == 2
        everything = await material_store.list_materials(active_only=False)
        assert len(everything) == 3

        page = await material_store.list_materials(limit=1, offset=1)
        assert [m.name for m in page] == ["Brush B"]

    async def test_first_active_in_category_is_oldest(self, material_store: SQLiteMaterialStore):
        first = await material_store.create_material(
            Material(name="Zinc white", category=MaterialCategory.PAINT)
        )
        await material_store.create_material(Material(name="Acrylic", category=MaterialCategory.PAINT))

        picked = await material_store.first_active_in_category(MaterialCategory.PAINT)
        assert picked.id == first.id

        await material_store.deactivate_material(first.id)
        picked = await material_store.first_active_in_category(MaterialCategory.PAINT)
        assert picked.name == "Acrylic"

    async def test_first_active_in_empty_category(self, material_store: SQLiteMaterialStore):
        assert await material_store.first_active_in_category(MaterialCategory.FRAME) is None

    async def test_deactivate_unknown(self, material_store: SQLiteMaterialStore):
        assert await material_store.deactivate_material("missing") is None
