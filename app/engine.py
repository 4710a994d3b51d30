import logging
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from pydantic import ValidationError

from app.errors import InvalidInputError, InvalidOptionsError, MissingStrategyError
from app.models import (
    AnalysisOptions,
    LineContribution,
    Product,
    ReportRow,
    SalesData,
    SellerStats,
    TopProduct,
    TOP_PRODUCTS_LIMIT,
)

logger = logging.getLogger(__name__)

_COLLECTIONS = ("sellers", "products", "purchase_records")
_TWO_DP = Decimal("0.01")
_ZERO = Decimal("0")
# scalars and sequences can never carry strategies
_NOT_OPTIONS = (str, bytes, bool, int, float, Decimal, list, tuple, set)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _money(value: Decimal) -> Decimal:
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def _validate_data(data: Any) -> SalesData:
    if data is None:
        raise InvalidInputError("Sales data is required")
    if isinstance(data, SalesData):
        raw = {name: getattr(data, name) for name in _COLLECTIONS}
    elif isinstance(data, Mapping):
        raw = data
    else:
        raise InvalidInputError(f"Sales data must be a mapping, got {type(data).__name__}")

    for name in _COLLECTIONS:
        value = raw.get(name)
        if not isinstance(value, (list, tuple)) or len(value) == 0:
            raise InvalidInputError(f"'{name}' must be a non-empty list")

    if isinstance(data, SalesData):
        return data
    try:
        return SalesData.model_validate(data)
    except ValidationError as exc:
        raise InvalidInputError(f"Malformed sales data: {exc.error_count()} invalid field(s)") from exc


def _validate_options(options: Any) -> AnalysisOptions:
    if options is None:
        raise InvalidOptionsError("Options are required")
    if isinstance(options, AnalysisOptions):
        resolved = options
    elif isinstance(options, Mapping):
        resolved = AnalysisOptions.model_construct(
            calculate_revenue=options.get("calculate_revenue"),
            calculate_bonus=options.get("calculate_bonus"),
            top_products_limit=options.get("top_products_limit", TOP_PRODUCTS_LIMIT),
        )
    elif isinstance(options, _NOT_OPTIONS):
        raise InvalidOptionsError(f"Options must be a mapping or object, got {type(options).__name__}")
    else:
        # any object exposing the strategies as attributes
        resolved = AnalysisOptions.model_construct(
            calculate_revenue=getattr(options, "calculate_revenue", None),
            calculate_bonus=getattr(options, "calculate_bonus", None),
            top_products_limit=getattr(options, "top_products_limit", TOP_PRODUCTS_LIMIT),
        )

    missing = [
        name for name in ("calculate_revenue", "calculate_bonus")
        if not callable(getattr(resolved, name))
    ]
    if missing:
        raise MissingStrategyError(f"Missing strategy function(s): {', '.join(missing)}")
    return resolved


def _top_products(stats: SellerStats, limit: int) -> list[TopProduct]:
    # sorted() is stable, so equal quantities stay in first-sold order
    ranked = sorted(stats.products_sold.items(), key=lambda kv: kv[1], reverse=True)
    return [TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit]]


def analyze_sales(data: Any, options: Any) -> list[ReportRow]:
    """
    Build the seller performance report.

    Every seller gets exactly one row, ordered by profit (highest first).
    Purchase records pointing at an unknown seller, and line items pointing
    at an unknown SKU, are skipped with a warning.
    """
    sales = _validate_data(data)
    opts = _validate_options(options)

    # ── 1. One accumulator per seller, in input order ────────────────────────
    seller_stats = [
        SellerStats(seller_id=s.id, name=f"{s.first_name} {s.last_name}")
        for s in sales.sellers
    ]

    # ── 2. Lookup indices ────────────────────────────────────────────────────
    seller_index: dict[str, SellerStats] = {s.seller_id: s for s in seller_stats}
    product_index: dict[str, Product] = {p.sku: p for p in sales.products}

    # ── 3. Fold purchase records ─────────────────────────────────────────────
    skipped_records = skipped_items = 0

    for record in sales.purchase_records:
        stats = seller_index.get(record.seller_id)
        if stats is None:
            logger.warning("Seller not found: %s", record.seller_id)
            skipped_records += 1
            continue

        stats.sales_count += 1

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                logger.warning("Product not found: %s (seller %s)", item.sku, record.seller_id)
                skipped_items += 1
                continue

            quantity = item.effective_quantity
            revenue = _to_decimal(opts.calculate_revenue(item, product))
            cost = product.purchase_price * quantity
            profit = revenue - cost

            stats.revenue += revenue
            stats.profit += profit
            stats.products_sold[item.sku] = stats.products_sold.get(item.sku, _ZERO) + quantity
            stats.items.append(
                LineContribution(sku=item.sku, revenue=revenue, profit=profit, quantity=quantity)
            )

    # ── 4. Rank by profit (stable: ties keep input order) ────────────────────
    ranked = sorted(seller_stats, key=lambda s: s.profit, reverse=True)
    total = len(ranked)

    for index, stats in enumerate(ranked):
        stats.bonus = _to_decimal(opts.calculate_bonus(index, total, stats))
        stats.top_products = _top_products(stats, opts.top_products_limit)

    logger.debug(
        "Analyzed %d sellers, %d records (%d skipped), %d line items skipped",
        total, len(sales.purchase_records), skipped_records, skipped_items,
    )

    # ── 5. Report rows ───────────────────────────────────────────────────────
    return [
        ReportRow(
            seller_id=s.seller_id,
            name=s.name,
            revenue=_money(s.revenue),
            profit=_money(s.profit),
            sales_count=s.sales_count,
            top_products=s.top_products,
            bonus=_money(s.bonus),
        )
        for s in ranked
    ]
