"""Tests for MovementRecorder with mocked stores."""

from unittest.mock import AsyncMock

import pytest

from src.core.entities.inventory import (
    MaterialMovement,
    MovementReference,
    MovementType,
    ReferenceType,
    Stock,
)
from src.core.entities.material import Material
from src.core.entities.picture import Picture, PictureMaterial
from src.core.exceptions import (
    ConfigurationError,
    MaterialNotFoundError,
    PictureNotFoundError,
    StockNotFoundError,
    ValidationError,
)
from src.core.interfaces.inventory_store import StockChange
from src.core.services.movement_recorder import MovementRecorder


def _apply(previous: float):
    """Fake apply_movement that behaves like the SQLite store."""

    async def apply(movement, target_quantity=None, create_stock=True):
        if target_quantity is not None:
            movement.quantity = target_quantity - previous
        movement.id = 1
        stock = Stock(id=1, material_id=movement.material_id, quantity=previous + movement.signed_quantity)
        return StockChange(stock=stock, movement=movement, previous_quantity=previous)

    return apply


@pytest.fixture
def inventory_store():
    return AsyncMock()


@pytest.fixture
def material_store():
    store = AsyncMock()
    store.get_material.return_value = Material(id="MAT-1", name="Canvas 30x40")
    return store


@pytest.fixture
def picture_store():
    return AsyncMock()


@pytest.fixture
def recorder(inventory_store, material_store, picture_store):
    return MovementRecorder(inventory_store, material_store, picture_store)


class TestAddMaterial:
    async def test_records_in_movement(self, recorder, inventory_store):
        inventory_store.apply_movement.side_effect = _apply(10)

        change = await recorder.add_material(
            "MAT-1", 5, "Delivery",
            reference=MovementReference(id="PO-7", type=ReferenceType.PURCHASE),
        )

        movement = inventory_store.apply_movement.call_args[0][0]
        assert movement.movement_type == MovementType.IN
        assert movement.reference_id == "PO-7"
        assert movement.reference_type == ReferenceType.PURCHASE
        assert inventory_store.apply_movement.call_args.kwargs["create_stock"] is True
        assert change.new_quantity == 15

    @pytest.mark.parametrize("quantity", [0, -1, float("nan"), float("inf")])
    async def test_rejects_non_positive_quantity(self, recorder, inventory_store, quantity):
        with pytest.raises(ValidationError):
            await recorder.add_material("MAT-1", quantity, "Delivery")
        inventory_store.apply_movement.assert_not_called()

    async def test_unknown_material(self, recorder, material_store, inventory_store):
        material_store.get_material.return_value = None
        with pytest.raises(MaterialNotFoundError):
            await recorder.add_material("NOPE", 1, "Delivery")
        inventory_store.apply_movement.assert_not_called()


class TestRemoveMaterial:
    async def test_negative_result_is_flagged_not_raised(self, recorder, inventory_store):
        inventory_store.apply_movement.side_effect = _apply(3)

        change = await recorder.remove_material("MAT-1", 5, "Order #12")

        assert change.new_quantity == -2
        assert change.is_negative is True
        assert change.warning is not None
        assert inventory_store.apply_movement.call_args.kwargs["create_stock"] is False

    async def test_missing_stock_row_propagates(self, recorder, inventory_store):
        inventory_store.apply_movement.side_effect = StockNotFoundError("MAT-1")
        with pytest.raises(StockNotFoundError):
            await recorder.remove_material("MAT-1", 1, "Order")

    async def test_rejects_zero(self, recorder):
        with pytest.raises(ValidationError):
            await recorder.remove_material("MAT-1", 0, "Order")


class TestAdjustStock:
    async def test_movement_carries_signed_delta(self, recorder, inventory_store):
        inventory_store.apply_movement.side_effect = _apply(10)

        change = await recorder.adjust_stock("MAT-1", 4, "Stocktake")

        assert change.movement.movement_type == MovementType.ADJUSTMENT
        assert change.movement.quantity == -6
        assert change.new_quantity == 4
        assert inventory_store.apply_movement.call_args.kwargs["target_quantity"] == 4

    async def test_rejects_negative_target(self, recorder, inventory_store):
        with pytest.raises(ValidationError):
            await recorder.adjust_stock("MAT-1", -1, "Stocktake")
        inventory_store.apply_movement.assert_not_called()

    async def test_zero_target_allowed(self, recorder, inventory_store):
        inventory_store.apply_movement.side_effect = _apply(2)
        change = await recorder.adjust_stock("MAT-1", 0, "Write-off")
        assert change.new_quantity == 0


class TestListMovements:
    async def test_default_limit(self, recorder, inventory_store):
        inventory_store.list_movements.return_value = []
        await recorder.list_movements("MAT-1")
        inventory_store.list_movements.assert_awaited_once_with("MAT-1", limit=50)

    async def test_all_default_limit(self, recorder, inventory_store):
        inventory_store.list_all_movements.return_value = []
        await recorder.list_all_movements()
        inventory_store.list_all_movements.assert_awaited_once_with(limit=100)

    async def test_rejects_zero_limit(self, recorder):
        with pytest.raises(ValidationError):
            await recorder.list_all_movements(limit=0)


class TestPictureMovements:
    async def test_consume_writes_off_each_line(self, recorder, inventory_store, picture_store):
        picture_store.get_picture.return_value = Picture(id="PIC-1", name="Sunset", picture_size_id="S1")
        picture_store.get_bom.return_value = [
            PictureMaterial(picture_id="PIC-1", material_id="MAT-1", quantity=1),
            PictureMaterial(picture_id="PIC-1", material_id="MAT-2", quantity=3),
        ]
        inventory_store.apply_movement.side_effect = _apply(5)

        changes = await recorder.consume_for_picture("PIC-1")

        assert len(changes) == 2
        movements: list[MaterialMovement] = [
            call.args[0] for call in inventory_store.apply_movement.call_args_list
        ]
        assert all(m.movement_type == MovementType.OUT for m in movements)
        assert all(m.reference_type == ReferenceType.PICTURE for m in movements)
        assert [m.quantity for m in movements] == [1, 3]

    async def test_unknown_picture(self, recorder, picture_store):
        picture_store.get_picture.return_value = None
        with pytest.raises(PictureNotFoundError):
            await recorder.return_for_picture("PIC-X")

    async def test_requires_picture_store(self, inventory_store, material_store):
        recorder = MovementRecorder(inventory_store, material_store)
        with pytest.raises(ConfigurationError):
            await recorder.consume_for_picture("PIC-1")
