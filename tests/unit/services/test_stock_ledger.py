"""Tests for StockLedger with mocked stores."""

from unittest.mock import AsyncMock

import pytest

from src.core.entities.inventory import Stock, StockLevel, StockSeverity
from src.core.entities.material import Material
from src.core.entities.picture import PictureMaterial
from src.core.exceptions import MaterialNotFoundError, ValidationError
from src.core.services.stock_ledger import StockLedger


def _level(material_id: str, quantity: float, min_level: float | None = None) -> StockLevel:
    return StockLevel(
        material_id=material_id,
        name=material_id,
        unit="pcs",
        category="PAINT",
        quantity=quantity,
        min_level=min_level,
    )


@pytest.fixture
def inventory_store():
    return AsyncMock()


@pytest.fixture
def material_store():
    store = AsyncMock()
    store.get_material.return_value = Material(id="MAT-1", name="Paint set")
    return store


@pytest.fixture
def ledger(inventory_store, material_store):
    return StockLedger(inventory_store, material_store, stats_window_days=7)


class TestGetStock:
    async def test_never_stocked_is_zero(self, ledger, inventory_store):
        inventory_store.get_stock.return_value = None
        stock = await ledger.get_stock("MAT-1")
        assert stock.quantity == 0
        assert stock.min_level is None

    async def test_unknown_material(self, ledger, material_store):
        material_store.get_material.return_value = None
        with pytest.raises(MaterialNotFoundError):
            await ledger.get_stock("NOPE")


class TestSetMinLevel:
    async def test_sets_level(self, ledger, inventory_store):
        inventory_store.set_min_level.return_value = Stock(id=1, material_id="MAT-1", quantity=3, min_level=5)
        stock = await ledger.set_min_level("MAT-1", 5)
        assert stock.is_low is True
        inventory_store.set_min_level.assert_awaited_once_with("MAT-1", 5)

    @pytest.mark.parametrize("level", [-1, float("nan")])
    async def test_rejects_invalid_level(self, ledger, inventory_store, level):
        with pytest.raises(ValidationError):
            await ledger.set_min_level("MAT-1", level)
        inventory_store.set_min_level.assert_not_called()


class TestLowStock:
    async def test_compares_quantity_with_min_level(self, ledger, inventory_store):
        inventory_store.list_stock_levels.return_value = [
            _level("A", 2, min_level=5),
            _level("B", 5, min_level=5),
            _level("C", 6, min_level=5),
            _level("D", 0),
        ]
        low = await ledger.list_low_stock()
        assert [level.material_id for level in low] == ["A", "B"]

    async def test_classifies_severity(self, ledger, inventory_store):
        inventory_store.list_stock_levels.return_value = [
            _level("A", 2, min_level=10),
            _level("B", 5, min_level=10),
            _level("C", 6, min_level=10),
            _level("D", 20, min_level=10),
        ]

        report = await ledger.check_low_stock()

        severities = {a.level.material_id: a.severity for a in report.alerts}
        assert severities == {
            "A": StockSeverity.CRITICAL,
            "B": StockSeverity.CRITICAL,
            "C": StockSeverity.WARNING,
        }
        assert report.critical_count == 2
        assert report.warning_count == 1
        assert report.alerts[0].critical_level == 5

    async def test_critical_ratio_is_configurable(self, inventory_store, material_store):
        ledger = StockLedger(inventory_store, material_store, critical_ratio=0.25)
        inventory_store.list_stock_levels.return_value = [_level("A", 4, min_level=10)]

        report = await ledger.check_low_stock()

        assert report.alerts[0].severity == StockSeverity.WARNING
        assert report.alerts[0].critical_level == 2.5


class TestStats:
    async def test_aggregates(self, ledger, inventory_store):
        inventory_store.list_stock_levels.return_value = [
            _level("A", 2, min_level=5),
            _level("B", -1),
            _level("C", 10),
            _level("D", 4, min_level=5),
        ]
        inventory_store.count_movements_since.return_value = 4

        stats = await ledger.get_stats()

        assert stats.total_materials == 4
        assert stats.low_stock_count == 2
        assert stats.negative_stock_count == 1
        assert stats.critical_stock_count == 1
        assert stats.warning_stock_count == 1
        assert stats.total_quantity == 15
        assert stats.recent_movements == 4
        assert stats.window_days == 7


class TestAvailability:
    async def test_sums_requirements_per_material(self, ledger, inventory_store):
        stocks = {"A": Stock(material_id="A", quantity=3), "B": None}
        inventory_store.get_stock.side_effect = lambda material_id: stocks[material_id]

        report = await ledger.check_availability([
            PictureMaterial(picture_id="P", material_id="A", quantity=2),
            PictureMaterial(picture_id="Q", material_id="A", quantity=2),
            PictureMaterial(picture_id="P", material_id="B", quantity=1),
        ])

        assert report.sufficient is False
        shortages = {s.material_id: s for s in report.shortages}
        assert shortages["A"].missing == 1
        assert shortages["B"].available == 0


class TestLedgerDrift:
    async def test_zero_when_consistent(self, ledger, inventory_store):
        inventory_store.get_stock.return_value = Stock(material_id="MAT-1", quantity=7)
        inventory_store.sum_movements.return_value = 7
        assert await ledger.ledger_drift("MAT-1") == 0

    async def test_reports_difference(self, ledger, inventory_store):
        inventory_store.get_stock.return_value = Stock(material_id="MAT-1", quantity=7)
        inventory_store.sum_movements.return_value = 5
        assert await ledger.ledger_drift("MAT-1") == 2
