"""
End-to-end warehouse flows on a real SQLite database.

Covers the ledger/log consistency across mixed movements, BOM generation
from a picture size and picture costing fed by recorded purchases.
"""

import pytest

from src.application.dto.requests import CreatePictureRequest, RecordPurchaseRequest
from src.application.services import ServiceContainer
from src.application.use_cases import CreatePictureUseCase, RecordPurchaseUseCase
from src.core.entities.inventory import MovementType, ReferenceType
from src.core.entities.material import Material, MaterialCategory
from src.core.entities.picture import PictureSize
from src.core.exceptions import DataIntegrityError, StockNotFoundError


async def _material(services: ServiceContainer, name: str, category: MaterialCategory):
    return await services.material_store.create_material(
        Material(name=name, category=category)
    )


@pytest.fixture
async def catalog(services: ServiceContainer) -> dict[MaterialCategory, Material]:
    """One material for each BOM category."""
    return {
        MaterialCategory.CANVAS: await _material(services, "Canvas roll", MaterialCategory.CANVAS),
        MaterialCategory.FRAME: await _material(services, "Pine frame", MaterialCategory.FRAME),
        MaterialCategory.PAINT: await _material(services, "Acrylic set", MaterialCategory.PAINT),
        MaterialCategory.BRUSH: await _material(services, "Nylon brush", MaterialCategory.BRUSH),
    }


@pytest.fixture
async def size_30x40(services: ServiceContainer) -> PictureSize:
    return await services.picture_store.create_size(
        PictureSize(name="30x40", width_cm=30, height_cm=40)
    )


class TestLedgerConsistency:
    async def test_add_then_remove_restores_quantity(self, services: ServiceContainer, catalog):
        canvas = catalog[MaterialCategory.CANVAS]
        recorder = services.movement_recorder

        await recorder.add_material(canvas.id, 5, "Delivery")
        await recorder.remove_material(canvas.id, 5, "Order")

        stock = await services.stock_ledger.get_stock(canvas.id)
        assert stock.quantity == 0

        movements = await recorder.list_movements(canvas.id)
        assert [m.movement_type for m in movements] == [MovementType.OUT, MovementType.IN]

    async def test_remove_may_go_negative(self, services: ServiceContainer, catalog):
        paint = catalog[MaterialCategory.PAINT]
        await services.movement_recorder.add_material(paint.id, 1, "Delivery")

        change = await services.movement_recorder.remove_material(paint.id, 3, "Order")

        assert change.is_negative is True
        assert change.new_quantity == -2
        assert "negative" in change.warning

        stats = await services.stock_ledger.get_stats()
        assert stats.negative_stock_count == 1

    async def test_remove_without_stock_row(self, services: ServiceContainer, catalog):
        with pytest.raises(StockNotFoundError):
            await services.movement_recorder.remove_material(
                catalog[MaterialCategory.FRAME].id, 1, "Order"
            )

    async def test_adjustment_records_delta(self, services: ServiceContainer, catalog):
        brush = catalog[MaterialCategory.BRUSH]
        await services.movement_recorder.add_material(brush.id, 10, "Delivery")

        change = await services.movement_recorder.adjust_stock(brush.id, 4, "Stocktake")

        assert change.previous_quantity == 10
        assert change.new_quantity == 4
        assert change.movement.quantity == -6
        assert change.movement.reference_type == ReferenceType.MANUAL

    async def test_no_drift_after_mixed_movements(self, services: ServiceContainer, catalog):
        canvas = catalog[MaterialCategory.CANVAS]
        recorder = services.movement_recorder

        await recorder.add_material(canvas.id, 12.5, "Delivery")
        await recorder.remove_material(canvas.id, 3, "Order")
        await recorder.adjust_stock(canvas.id, 8, "Stocktake")
        await recorder.remove_material(canvas.id, 10, "Order")
        await recorder.add_material(canvas.id, 1, "Return")

        assert await services.stock_ledger.ledger_drift(canvas.id) == 0
        stock = await services.stock_ledger.get_stock(canvas.id)
        assert stock.quantity == -1

    async def test_low_stock_listing(self, services: ServiceContainer, catalog):
        canvas = catalog[MaterialCategory.CANVAS]
        frame = catalog[MaterialCategory.FRAME]
        await services.movement_recorder.add_material(canvas.id, 2, "Delivery")
        await services.movement_recorder.add_material(frame.id, 20, "Delivery")
        await services.stock_ledger.set_min_level(canvas.id, 5)
        await services.stock_ledger.set_min_level(frame.id, 5)

        low = await services.stock_ledger.list_low_stock()
        assert [level.material_id for level in low] == [canvas.id]


class TestPictureFlow:
    async def test_create_picture_generates_bom(
        self, services: ServiceContainer, catalog, size_30x40
    ):
        use_case = CreatePictureUseCase(services.picture_store, services.bom_generator)

        result = await use_case.execute(
            CreatePictureRequest(name="Sunset", picture_size_id=size_30x40.id)
        )

        assert result.bom.complete is True
        quantities = {line.material_id: line.quantity for line in result.bom.lines}
        assert quantities == {
            catalog[MaterialCategory.CANVAS].id: 1,
            catalog[MaterialCategory.FRAME].id: 2,
            catalog[MaterialCategory.PAINT].id: 1,
            catalog[MaterialCategory.BRUSH].id: 3,
        }

    async def test_regenerate_replaces_lines(
        self, services: ServiceContainer, catalog, size_30x40
    ):
        large = await services.picture_store.create_size(
            PictureSize(name="60x80", width_cm=60, height_cm=80)
        )
        use_case = CreatePictureUseCase(services.picture_store, services.bom_generator)
        result = await use_case.execute(
            CreatePictureRequest(name="Sunset", picture_size_id=size_30x40.id)
        )
        picture_id = result.picture.id

        await services.bom_generator.generate_bom(picture_id, picture_size_id=large.id)

        lines = await services.bom_generator.get_bom(picture_id)
        assert len(lines) == 4
        by_material = {line.material_id: line.quantity for line in lines}
        # 0.48 m2 * 1.1 -> 1 canvas; 280 cm -> 3 m frame
        assert by_material[catalog[MaterialCategory.CANVAS].id] == 1
        assert by_material[catalog[MaterialCategory.FRAME].id] == 3

    async def test_consume_and_return_for_picture(
        self, services: ServiceContainer, catalog, size_30x40
    ):
        use_case = CreatePictureUseCase(services.picture_store, services.bom_generator)
        result = await use_case.execute(
            CreatePictureRequest(name="Sunset", picture_size_id=size_30x40.id)
        )
        for material in catalog.values():
            await services.movement_recorder.add_material(material.id, 10, "Delivery")

        consumed = await services.movement_recorder.consume_for_picture(result.picture.id)
        assert len(consumed) == 4
        brush_stock = await services.stock_ledger.get_stock(catalog[MaterialCategory.BRUSH].id)
        assert brush_stock.quantity == 7
        assert all(c.movement.reference_id == result.picture.id for c in consumed)

        await services.movement_recorder.return_for_picture(result.picture.id)
        for material in catalog.values():
            assert (await services.stock_ledger.get_stock(material.id)).quantity == 10
            assert await services.stock_ledger.ledger_drift(material.id) == 0


class TestCosting:
    async def _buy(self, services: ServiceContainer, material_id: str, qty: float, price: float):
        use_case = RecordPurchaseUseCase(services.cost_calculator, services.movement_recorder)
        return await use_case.execute(
            RecordPurchaseRequest(material_id=material_id, quantity=qty, unit_price=price)
        )

    async def test_purchase_books_stock(self, services: ServiceContainer, catalog):
        canvas = catalog[MaterialCategory.CANVAS]

        result = await self._buy(services, canvas.id, 4, 5)

        assert result.purchase.total_price == 20
        assert result.stock_change.new_quantity == 4
        assert result.stock_change.movement.reference_type == ReferenceType.PURCHASE
        assert result.stock_change.movement.reference_id == str(result.purchase.id)

    async def test_picture_cost_and_profit(
        self, services: ServiceContainer, catalog, size_30x40
    ):
        await self._buy(services, catalog[MaterialCategory.CANVAS].id, 2, 5)
        await self._buy(services, catalog[MaterialCategory.FRAME].id, 10, 2)
        await self._buy(services, catalog[MaterialCategory.PAINT].id, 4, 1)
        await self._buy(services, catalog[MaterialCategory.BRUSH].id, 30, 1)

        use_case = CreatePictureUseCase(services.picture_store, services.bom_generator)
        result = await use_case.execute(
            CreatePictureRequest(
                name="Portrait",
                picture_size_id=size_30x40.id,
                price=150,
                work_hours=2,
            )
        )
        picture_id = result.picture.id

        # 5 + 2*2 + 1 + 3*1 materials, 2h * 15 labor
        breakdown = await services.cost_calculator.persist_cost(picture_id)
        assert breakdown.total == 43.00

        profit = await services.cost_calculator.picture_profit(picture_id)
        assert profit.profit == 107.00
        assert profit.margin == 71.33

        recommendation = await services.pricing.recommend_price(picture_id)
        assert recommendation.recommended_price == 129

    async def test_bom_material_without_stock_row(
        self, services: ServiceContainer, catalog, size_30x40
    ):
        use_case = CreatePictureUseCase(services.picture_store, services.bom_generator)
        result = await use_case.execute(
            CreatePictureRequest(name="Sunset", picture_size_id=size_30x40.id)
        )

        with pytest.raises(DataIntegrityError):
            await services.cost_calculator.picture_cost(result.picture.id)

        report = await services.cost_calculator.recalculate_costs()
        assert report.total_pictures == 1
        assert report.errors == 1
