"""
Default pricing and reward policies handed to ``analyze_sales``.
"""

from decimal import Decimal
from typing import Any

from app.models import AnalysisOptions, LineItem, Product, SellerStats

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# Share of profit paid out per rank position (0 = highest profit)
BONUS_RATE_TOP = Decimal("0.15")
BONUS_RATE_PODIUM = Decimal("0.10")
BONUS_RATE_LAST = Decimal("0")
BONUS_RATE_DEFAULT = Decimal("0.05")


def calculate_simple_revenue(item: LineItem, product: Product) -> Decimal:
    """Line revenue: price x quantity, less the percentage discount."""
    sale_price = item.sale_price if item.sale_price is not None else product.sale_price
    full_price = sale_price * item.effective_quantity
    return full_price * (1 - item.effective_discount / _HUNDRED)


def bonus_rate_for_rank(index: int, total: int) -> Decimal:
    # order matters: a lone seller is both first and last and gets the top rate
    if index == 0:
        return BONUS_RATE_TOP
    if index in (1, 2):
        return BONUS_RATE_PODIUM
    if index == total - 1:
        return BONUS_RATE_LAST
    return BONUS_RATE_DEFAULT


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStats) -> Decimal:
    """Bonus amount for the seller at ``index`` in the profit ranking."""
    profit = getattr(seller, "profit", None)
    if profit is None:
        return _ZERO
    return Decimal(str(profit)) * bonus_rate_for_rank(index, total)


def default_options(**overrides: Any) -> AnalysisOptions:
    fields = {
        "calculate_revenue": calculate_simple_revenue,
        "calculate_bonus": calculate_bonus_by_profit,
    }
    fields.update(overrides)
    return AnalysisOptions(**fields)
