"""Tests for SQLite stock ledger and movement log."""

import pytest

from src.core.entities.inventory import MaterialMovement, MovementType, ReferenceType
from src.core.entities.material import Material, MaterialCategory
from src.core.exceptions import DatabaseError, StockNotFoundError
from src.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteInventoryStore,
    SQLiteMaterialStore,
)


def _movement(material_id: str, movement_type: MovementType, quantity: float, **kwargs):
    return MaterialMovement(
        material_id=material_id,
        movement_type=movement_type,
        quantity=quantity,
        **kwargs,
    )


class TestApplyMovement:
    async def test_in_creates_stock_row(self, inventory_store: SQLiteInventoryStore, canvas):
        assert await inventory_store.get_stock(canvas.id) is None

        change = await inventory_store.apply_movement(
            _movement(canvas.id, MovementType.IN, 10, reason="Delivery")
        )

        assert change.previous_quantity == 0
        assert change.stock.quantity == 10
        assert change.movement.id is not None
        assert change.movement.stock_id == change.stock.id

        stock = await inventory_store.get_stock(canvas.id)
        assert stock.quantity == 10

    async def test_out_may_go_negative(self, inventory_store: SQLiteInventoryStore, canvas):
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 2))
        change = await inventory_store.apply_movement(
            _movement(canvas.id, MovementType.OUT, 5),
            create_stock=False,
        )

        assert change.previous_quantity == 2
        assert change.stock.quantity == -3
        assert change.stock.is_negative is True

    async def test_out_without_stock_row(self, inventory_store: SQLiteInventoryStore, canvas):
        with pytest.raises(StockNotFoundError):
            await inventory_store.apply_movement(
                _movement(canvas.id, MovementType.OUT, 1),
                create_stock=False,
            )

        assert await inventory_store.get_stock(canvas.id) is None
        assert await inventory_store.list_movements(canvas.id) == []

    async def test_adjustment_stores_delta(self, inventory_store: SQLiteInventoryStore, canvas):
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 10))

        change = await inventory_store.apply_movement(
            _movement(canvas.id, MovementType.ADJUSTMENT, 0),
            target_quantity=7,
        )

        assert change.stock.quantity == 7
        assert change.movement.quantity == -3
        assert change.movement.notes == "Adjusted from 10 to 7"

    async def test_adjustment_keeps_explicit_notes(
        self, inventory_store: SQLiteInventoryStore, canvas
    ):
        change = await inventory_store.apply_movement(
            _movement(canvas.id, MovementType.ADJUSTMENT, 0, notes="Stocktake"),
            target_quantity=4,
        )
        assert change.movement.quantity == 4
        assert change.movement.notes == "Stocktake"

    async def test_reference_round_trip(self, inventory_store: SQLiteInventoryStore, canvas):
        await inventory_store.apply_movement(
            _movement(
                canvas.id,
                MovementType.IN,
                3,
                reference_id="42",
                reference_type=ReferenceType.PURCHASE,
            )
        )

        [movement] = await inventory_store.list_movements(canvas.id)
        assert movement.reference_id == "42"
        assert movement.reference_type == ReferenceType.PURCHASE


class TestMovementLog:
    async def test_quantity_matches_replayed_log(
        self, inventory_store: SQLiteInventoryStore, canvas
    ):
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 10))
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.OUT, 4))
        await inventory_store.apply_movement(
            _movement(canvas.id, MovementType.ADJUSTMENT, 0), target_quantity=5
        )
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.OUT, 7))

        stock = await inventory_store.get_stock(canvas.id)
        assert stock.quantity == -2
        assert await inventory_store.sum_movements(canvas.id) == stock.quantity

    async def test_movements_newest_first(self, inventory_store: SQLiteInventoryStore, canvas):
        for qty in (1, 2, 3):
            await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, qty))

        movements = await inventory_store.list_movements(canvas.id, limit=2)
        assert [m.quantity for m in movements] == [3, 2]

        everything = await inventory_store.list_all_movements(limit=10)
        assert len(everything) == 3

    async def test_update_is_rejected(
        self, pool: ConnectionPool, inventory_store: SQLiteInventoryStore, canvas
    ):
        change = await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 1))

        with pytest.raises(DatabaseError, match="append-only"):
            async with pool.transaction() as conn:
                await conn.execute(
                    "UPDATE material_movements SET quantity = 100 WHERE id = ?",
                    (change.movement.id,),
                )

    async def test_delete_is_rejected(
        self, pool: ConnectionPool, inventory_store: SQLiteInventoryStore, canvas
    ):
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 1))

        with pytest.raises(DatabaseError, match="append-only"):
            async with pool.transaction() as conn:
                await conn.execute("DELETE FROM material_movements")

        assert len(await inventory_store.list_movements(canvas.id)) == 1

    async def test_failed_movement_insert_rolls_back_stock(
        self, pool: ConnectionPool, inventory_store: SQLiteInventoryStore, canvas
    ):
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 5))
        async with pool.transaction() as conn:
            await conn.execute(
                """
                CREATE TRIGGER trg_block_movements BEFORE INSERT ON material_movements
                BEGIN SELECT RAISE(ABORT, 'movement insert blocked'); END
                """
            )

        removal = _movement(canvas.id, MovementType.OUT, 2)
        with pytest.raises(DatabaseError, match="movement insert blocked"):
            await inventory_store.apply_movement(removal, create_stock=False)

        stock = await inventory_store.get_stock(canvas.id)
        assert stock.quantity == 5
        assert len(await inventory_store.list_movements(canvas.id)) == 1

    async def test_caller_movement_is_not_modified(
        self, inventory_store: SQLiteInventoryStore, canvas
    ):
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 10))
        adjustment = _movement(canvas.id, MovementType.ADJUSTMENT, 0)

        change = await inventory_store.apply_movement(adjustment, target_quantity=4)

        assert change.movement is not adjustment
        assert change.movement.quantity == -6
        assert adjustment.quantity == 0
        assert adjustment.notes is None
        assert adjustment.id is None
        assert adjustment.stock_id is None


class TestStockLevels:
    async def test_set_min_level_creates_row(
        self, inventory_store: SQLiteInventoryStore, canvas
    ):
        stock = await inventory_store.set_min_level(canvas.id, 5)
        assert stock.quantity == 0
        assert stock.min_level == 5
        assert stock.is_low is True

        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 8))
        stock = await inventory_store.set_min_level(canvas.id, None)
        assert stock.quantity == 8
        assert stock.min_level is None

    async def test_list_stock_levels(
        self,
        inventory_store: SQLiteInventoryStore,
        material_store: SQLiteMaterialStore,
        canvas,
    ):
        paint = await material_store.create_material(
            Material(name="Paint set", category=MaterialCategory.PAINT)
        )
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.IN, 3))
        await inventory_store.apply_movement(_movement(canvas.id, MovementType.OUT, 1))

        levels = {lvl.material_id: lvl for lvl in await inventory_store.list_stock_levels()}

        assert levels[canvas.id].quantity == 2
        assert levels[canvas.id].movement_count == 2
        assert levels[canvas.id].category == "CANVAS"
        # never stocked
        assert levels[paint.id].quantity == 0
        assert levels[paint.id].last_updated is None

        await material_store.deactivate_material(paint.id)
        active = await inventory_store.list_stock_levels()
        assert [lvl.material_id for lvl in active] == [canvas.id]
        assert len(await inventory_store.list_stock_levels(active_only=False)) == 2
