"""
Stock ledger service.

Authoritative read side of the warehouse: current quantity and minimum
level per material, low-stock alerts, availability checks and the
aggregate numbers shown on the warehouse dashboard. Quantities are only
ever changed by the movement recorder; the one write here is the alert
threshold.
"""

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from src.config import get_logger
from src.core.entities.inventory import Stock, StockLevel, StockSeverity
from src.core.entities.picture import PictureMaterial
from src.core.exceptions import MaterialNotFoundError, ValidationError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.interfaces.material_store import IMaterialStore

logger = get_logger(__name__)


@dataclass
class StockShortage:
    """A material that cannot cover a requirement."""

    material_id: str
    required: float
    available: float

    @property
    def missing(self) -> float:
        return self.required - self.available


@dataclass
class AvailabilityReport:
    """Result of checking a set of requirements against the ledger."""

    shortages: list[StockShortage] = field(default_factory=list)

    @property
    def sufficient(self) -> bool:
        return not self.shortages


@dataclass
class LowStockAlert:
    """A low stock row with its alert level."""

    level: StockLevel
    severity: StockSeverity
    critical_level: float


@dataclass
class LowStockReport:
    """Low-stock alerts split by severity."""

    alerts: list[LowStockAlert] = field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return sum(1 for a in self.alerts if a.severity == StockSeverity.CRITICAL)

    @property
    def warning_count(self) -> int:
        return sum(1 for a in self.alerts if a.severity == StockSeverity.WARNING)


@dataclass
class WarehouseStats:
    """Aggregate warehouse numbers."""

    total_materials: int
    low_stock_count: int
    negative_stock_count: int
    critical_stock_count: int
    warning_stock_count: int
    total_quantity: float
    recent_movements: int
    window_days: int


class StockLedger:
    """
    Read model over the stock table.

    Low-stock detection compares quantity and min_level here rather than
    in SQL, so the rule lives in one place regardless of the backend.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        material_store: IMaterialStore,
        stats_window_days: int = 7,
        critical_ratio: float = 0.5,
    ) -> None:
        self._inventory_store = inventory_store
        self._material_store = material_store
        self._stats_window_days = stats_window_days
        self._critical_ratio = critical_ratio

    async def _require_material(self, material_id: str) -> None:
        material = await self._material_store.get_material(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)

    async def get_stock(self, material_id: str) -> Stock:
        """
        Get current quantity and min level of a material.

        Returns a zero stock without a minimum when the material has never
        been stocked.
        """
        await self._require_material(material_id)
        stock = await self._inventory_store.get_stock(material_id)
        if stock is None:
            return Stock(material_id=material_id, quantity=0.0, min_level=None)
        return stock

    async def set_min_level(self, material_id: str, level: float) -> Stock:
        """Update the low-stock alert threshold of a material."""
        if level is None or not math.isfinite(level) or level < 0:
            raise ValidationError("min_level", "must be a number >= 0", level)

        await self._require_material(material_id)
        stock = await self._inventory_store.set_min_level(material_id, level)
        logger.info(
            "min_level_updated",
            material_id=material_id,
            min_level=level,
            quantity=stock.quantity,
        )
        return stock

    async def get_stock_list(self) -> list[StockLevel]:
        """All active materials with their current stock."""
        return await self._inventory_store.list_stock_levels(active_only=True)

    async def list_low_stock(self) -> list[StockLevel]:
        """Active materials whose quantity is at or below their min level."""
        levels = await self._inventory_store.list_stock_levels(active_only=True)
        low = [level for level in levels if level.is_low]
        if low:
            logger.info("low_stock_detected", count=len(low))
        return low

    async def check_low_stock(self) -> LowStockReport:
        """
        Low-stock alerts classified by severity.

        A material is CRITICAL once its quantity falls to the configured
        share of its min level, WARNING while it is between that and the
        min level.
        """
        report = LowStockReport()
        for level in await self.list_low_stock():
            report.alerts.append(
                LowStockAlert(
                    level=level,
                    severity=level.severity(self._critical_ratio),  # type: ignore[arg-type]
                    critical_level=level.min_level * self._critical_ratio,  # type: ignore[operator]
                )
            )
        if report.critical_count:
            logger.warning(
                "critical_stock_detected",
                critical=report.critical_count,
                warning=report.warning_count,
            )
        return report

    async def get_stats(self) -> WarehouseStats:
        """Aggregate counts over active materials and recent movements."""
        levels = await self._inventory_store.list_stock_levels(active_only=True)
        since = datetime.now(UTC) - timedelta(days=self._stats_window_days)
        recent = await self._inventory_store.count_movements_since(since)
        severities = [level.severity(self._critical_ratio) for level in levels]

        return WarehouseStats(
            total_materials=len(levels),
            low_stock_count=sum(1 for level in levels if level.is_low),
            negative_stock_count=sum(1 for level in levels if level.is_negative),
            critical_stock_count=sum(1 for s in severities if s == StockSeverity.CRITICAL),
            warning_stock_count=sum(1 for s in severities if s == StockSeverity.WARNING),
            total_quantity=sum(level.quantity for level in levels),
            recent_movements=recent,
            window_days=self._stats_window_days,
        )

    async def check_availability(
        self, requirements: list[PictureMaterial]
    ) -> AvailabilityReport:
        """
        Compare required quantities against current stock.

        Requirements for the same material are summed before comparing.
        A material without a stock row counts as zero available.
        """
        required: dict[str, float] = {}
        for line in requirements:
            required[line.material_id] = required.get(line.material_id, 0.0) + line.quantity

        report = AvailabilityReport()
        for material_id, quantity in required.items():
            stock = await self._inventory_store.get_stock(material_id)
            available = stock.quantity if stock is not None else 0.0
            if available < quantity:
                report.shortages.append(
                    StockShortage(
                        material_id=material_id,
                        required=quantity,
                        available=available,
                    )
                )
        return report

    async def ledger_drift(self, material_id: str) -> float:
        """
        Difference between the cached quantity and the movement log.

        Zero for a consistent ledger.
        """
        stock = await self.get_stock(material_id)
        total = await self._inventory_store.sum_movements(material_id)
        drift = stock.quantity - total
        if abs(drift) > 1e-9:
            logger.warning(
                "ledger_drift_detected",
                material_id=material_id,
                quantity=stock.quantity,
                movements_total=total,
            )
        return drift
