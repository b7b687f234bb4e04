"""
Recommended sale price from cost price and markup rules.

    price = cost * (1 + markup / 100) * complexity * size * urgency
    price = clamp(price, min_price, max_price), rounded to a whole unit
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from src.config import get_logger
from src.core.exceptions import ValidationError
from src.core.services.cost_calculator import CostCalculator, round_money

logger = get_logger(__name__)


@dataclass
class PricingOptions:
    """Markup, bounds and multipliers for a price recommendation."""

    markup_percentage: float = 200.0
    min_price: float = 50.0
    max_price: float = 1000.0
    complexity_multiplier: float = 1.0
    size_multiplier: float = 1.0
    urgency_multiplier: float = 1.0

    def validate(self) -> None:
        if self.markup_percentage < 0:
            raise ValidationError("markup_percentage", "must be >= 0", self.markup_percentage)
        if self.min_price < 0:
            raise ValidationError("min_price", "must be >= 0", self.min_price)
        if self.max_price < self.min_price:
            raise ValidationError("max_price", "must be >= min_price", self.max_price)
        for name in ("complexity_multiplier", "size_multiplier", "urgency_multiplier"):
            if getattr(self, name) <= 0:
                raise ValidationError(name, "must be greater than 0", getattr(self, name))


@dataclass
class PriceRecommendation:
    """Recommended price with the figures it was derived from."""

    picture_id: str
    cost_price: float
    base_price: float
    recommended_price: float
    profit: float
    profit_margin: float


def _round_whole(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PricingService:
    """Suggests sale prices from computed cost prices."""

    def __init__(
        self,
        cost_calculator: CostCalculator,
        defaults: PricingOptions | None = None,
    ) -> None:
        self._cost_calculator = cost_calculator
        self._defaults = defaults or PricingOptions()

    @property
    def defaults(self) -> PricingOptions:
        return self._defaults

    async def recommend_price(
        self, picture_id: str, options: PricingOptions | None = None
    ) -> PriceRecommendation:
        """Recommend a sale price for a picture."""
        options = options or self._defaults
        options.validate()

        cost_price = await self._cost_calculator.picture_cost(picture_id)
        base_price = cost_price * (1 + options.markup_percentage / 100)

        price = (
            base_price
            * options.complexity_multiplier
            * options.size_multiplier
            * options.urgency_multiplier
        )
        price = min(max(price, options.min_price), options.max_price)
        price = _round_whole(price)

        profit = price - cost_price
        margin = profit / price * 100 if price > 0 else 0.0

        recommendation = PriceRecommendation(
            picture_id=picture_id,
            cost_price=cost_price,
            base_price=round_money(base_price),
            recommended_price=price,
            profit=round_money(profit),
            profit_margin=round_money(margin),
        )
        logger.info(
            "price_recommended",
            picture_id=picture_id,
            cost_price=cost_price,
            recommended_price=price,
        )
        return recommendation
