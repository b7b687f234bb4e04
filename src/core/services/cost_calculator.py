"""
Cost and profit calculator.

Prices materials by the weighted average of their most recent purchases
and rolls the BOM of a picture up into a cost price. Costs are written back
only through persist_cost / recalculate_costs, never on read.
"""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from src.config import get_logger
from src.core.entities.inventory import MaterialPurchase
from src.core.entities.picture import PictureType
from src.core.exceptions import (
    DataIntegrityError,
    MaterialNotFoundError,
    PictureNotFoundError,
    ValidationError,
)
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.picture_store import IPictureStore
from src.core.interfaces.purchase_store import IPurchaseStore

if TYPE_CHECKING:
    from src.core.services.pricing import PricingOptions, PricingService

logger = get_logger(__name__)


def round_money(value: float) -> float:
    """Round a currency amount to cents."""
    return round(value, 2)


@dataclass
class CostLine:
    """Cost contribution of one BOM line."""

    material_id: str
    quantity: float
    unit_price: float

    @property
    def cost(self) -> float:
        return self.quantity * self.unit_price


@dataclass
class CostBreakdown:
    """Material and labor components of a picture's cost price."""

    picture_id: str
    lines: list[CostLine] = field(default_factory=list)
    work_hours: float = 0.0
    hourly_rate: float = 0.0

    @property
    def material_cost(self) -> float:
        return sum(line.cost for line in self.lines)

    @property
    def labor_cost(self) -> float:
        return self.work_hours * self.hourly_rate

    @property
    def total(self) -> float:
        return round_money(self.material_cost + self.labor_cost)


@dataclass
class ProfitResult:
    """Profit and margin (percent of price) of a picture."""

    picture_id: str
    price: float
    cost_price: float
    profit: float
    margin: float


@dataclass
class RecalculationReport:
    """Outcome of a batch cost recalculation."""

    total_pictures: int = 0
    updated: int = 0
    errors: int = 0
    details: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class TypeCostStats:
    """Average cost and price of one picture type."""

    count: int = 0
    average_cost: float = 0.0
    average_price: float = 0.0


@dataclass
class CostStats:
    """How far stored cost prices cover the active catalog."""

    total: int = 0
    with_cost_price: int = 0
    without_cost_price: int = 0
    average_cost_price: float = 0.0
    average_price: float = 0.0
    average_margin: float = 0.0
    by_type: dict[str, TypeCostStats] = field(default_factory=dict)


class CostCalculator:
    """Derives picture cost basis and margin from BOM and purchase history."""

    def __init__(
        self,
        picture_store: IPictureStore,
        inventory_store: IInventoryStore,
        purchase_store: IPurchaseStore,
        material_store: IMaterialStore,
        hourly_rate: float = 15.0,
        purchase_window: int = 10,
    ) -> None:
        self._picture_store = picture_store
        self._inventory_store = inventory_store
        self._purchase_store = purchase_store
        self._material_store = material_store
        self._hourly_rate = hourly_rate
        self._purchase_window = purchase_window

    async def average_unit_price(self, material_id: str) -> float:
        """
        Weighted average unit price over the most recent purchases.

        Sum of total prices divided by sum of quantities; 0 when the
        material was never purchased.
        """
        purchases = await self._purchase_store.list_recent(
            material_id, limit=self._purchase_window
        )
        if not purchases:
            return 0.0

        total_cost = sum(p.total_price or 0.0 for p in purchases)
        total_quantity = sum(p.quantity for p in purchases)
        return total_cost / total_quantity if total_quantity > 0 else 0.0

    async def record_purchase(self, purchase: MaterialPurchase) -> MaterialPurchase:
        """
        Store a purchase for average costing.

        total_price is derived from quantity * unit_price when not given.
        Stock is booked separately by the caller.
        """
        if not math.isfinite(purchase.quantity) or purchase.quantity <= 0:
            raise ValidationError("quantity", "must be greater than 0", purchase.quantity)
        if not math.isfinite(purchase.unit_price) or purchase.unit_price < 0:
            raise ValidationError("unit_price", "must be >= 0", purchase.unit_price)
        if await self._material_store.get_material(purchase.material_id) is None:
            raise MaterialNotFoundError(purchase.material_id)

        if purchase.total_price is None:
            purchase.total_price = round_money(purchase.quantity * purchase.unit_price)
        elif not math.isfinite(purchase.total_price) or purchase.total_price < 0:
            raise ValidationError("total_price", "must be >= 0", purchase.total_price)

        return await self._purchase_store.add_purchase(purchase)

    async def list_purchases(self, material_id: str) -> list[MaterialPurchase]:
        """Purchases inside the averaging window, newest first."""
        if await self._material_store.get_material(material_id) is None:
            raise MaterialNotFoundError(material_id)
        return await self._purchase_store.list_recent(
            material_id, limit=self._purchase_window
        )

    async def cost_breakdown(self, picture_id: str) -> CostBreakdown:
        """Itemized cost of a picture."""
        picture = await self._picture_store.get_picture(picture_id)
        if picture is None:
            raise PictureNotFoundError(picture_id)

        breakdown = CostBreakdown(picture_id=picture_id)
        for line in await self._picture_store.get_bom(picture_id):
            stock = await self._inventory_store.get_stock(line.material_id)
            if stock is None:
                raise DataIntegrityError(picture_id, line.material_id)

            unit_price = await self.average_unit_price(line.material_id)
            breakdown.lines.append(
                CostLine(
                    material_id=line.material_id,
                    quantity=line.quantity,
                    unit_price=unit_price,
                )
            )

        if picture.work_hours and picture.work_hours > 0:
            breakdown.work_hours = picture.work_hours
            breakdown.hourly_rate = self._hourly_rate

        return breakdown

    async def picture_cost(self, picture_id: str) -> float:
        """Cost price of a picture rounded to 2 decimals."""
        breakdown = await self.cost_breakdown(picture_id)
        return breakdown.total

    async def picture_profit(self, picture_id: str) -> ProfitResult:
        """Profit and margin from the stored price and cost price."""
        picture = await self._picture_store.get_picture(picture_id)
        if picture is None:
            raise PictureNotFoundError(picture_id)

        cost_price = picture.cost_price or 0.0
        profit = picture.price - cost_price
        margin = profit / picture.price * 100 if picture.price > 0 else 0.0

        return ProfitResult(
            picture_id=picture_id,
            price=picture.price,
            cost_price=cost_price,
            profit=round_money(profit),
            margin=round_money(margin),
        )

    async def persist_cost(self, picture_id: str) -> CostBreakdown:
        """Recompute the cost price and store it on the picture."""
        breakdown = await self.cost_breakdown(picture_id)
        await self._picture_store.update_cost_price(picture_id, breakdown.total)
        logger.info("picture_cost_updated", picture_id=picture_id, cost_price=breakdown.total)
        return breakdown

    async def recalculate_costs(
        self,
        material_id: str | None = None,
        picture_type: PictureType | None = None,
        pricing: "PricingService | None" = None,
        pricing_options: "PricingOptions | None" = None,
    ) -> RecalculationReport:
        """
        Recompute and store cost prices of active pictures.

        Args:
            material_id: Only pictures whose BOM uses this material.
            picture_type: Only pictures of this type.
            pricing: When given, each recalculated picture also gets its
                sale price replaced by the recommended price.
            pricing_options: Markup rules for the new prices (default:
                the pricing service defaults).

        Per-picture domain failures are collected in the report; storage
        failures abort the batch.
        """
        if pricing is not None:
            pricing_options = pricing_options or pricing.defaults
            pricing_options.validate()

        pictures = await self._picture_store.list_pictures(
            active_only=True,
            picture_type=picture_type,
            material_id=material_id,
        )
        report = RecalculationReport(total_pictures=len(pictures))
        logger.info(
            "cost_recalculation_started",
            material_id=material_id,
            picture_type=picture_type.value if picture_type else None,
            pictures=len(pictures),
            update_prices=pricing is not None,
        )

        for picture in pictures:
            try:
                breakdown = await self.persist_cost(picture.id)  # type: ignore[arg-type]
            except (DataIntegrityError, PictureNotFoundError) as e:
                report.errors += 1
                report.details.append(
                    {"picture_id": picture.id, "name": picture.name, "error": e.message}
                )
                logger.warning(
                    "picture_cost_update_failed",
                    picture_id=picture.id,
                    error=e.code,
                )
                continue

            detail: dict[str, Any] = {
                "picture_id": picture.id,
                "name": picture.name,
                "old_cost_price": picture.cost_price,
                "new_cost_price": breakdown.total,
                "price_updated": False,
            }
            if pricing is not None:
                recommendation = await pricing.recommend_price(
                    picture.id, pricing_options  # type: ignore[arg-type]
                )
                await self._picture_store.update_price(
                    picture.id, recommendation.recommended_price  # type: ignore[arg-type]
                )
                detail.update(
                    old_price=picture.price,
                    new_price=recommendation.recommended_price,
                    price_updated=True,
                )

            report.updated += 1
            report.details.append(detail)

        logger.info(
            "cost_recalculation_completed",
            total=report.total_pictures,
            updated=report.updated,
            errors=report.errors,
        )
        return report

    async def cost_stats(self) -> CostStats:
        """Coverage and averages of stored cost prices over active pictures."""
        pictures = await self._picture_store.list_pictures(active_only=True)
        stats = CostStats(
            total=len(pictures),
            by_type={t.value: TypeCostStats() for t in PictureType},
        )
        if not pictures:
            return stats

        cost_sums = {t.value: 0.0 for t in PictureType}
        price_sums = {t.value: 0.0 for t in PictureType}
        for picture in pictures:
            key = picture.picture_type.value
            cost = picture.cost_price or 0.0
            if cost > 0:
                stats.with_cost_price += 1
            stats.by_type[key].count += 1
            cost_sums[key] += cost
            price_sums[key] += picture.price
        stats.without_cost_price = stats.total - stats.with_cost_price

        stats.average_cost_price = round_money(sum(cost_sums.values()) / stats.total)
        stats.average_price = round_money(sum(price_sums.values()) / stats.total)
        if stats.average_price > 0:
            stats.average_margin = round_money(
                (stats.average_price - stats.average_cost_price) / stats.average_price * 100
            )

        for type_name, group in stats.by_type.items():
            if group.count:
                group.average_cost = round_money(cost_sums[type_name] / group.count)
                group.average_price = round_money(price_sums[type_name] / group.count)

        return stats
