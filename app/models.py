from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Any, Callable, Optional

# Number of best-selling products kept per seller when no limit is given
TOP_PRODUCTS_LIMIT = 10


class Seller(BaseModel):
    # numeric ids are kept as text keys
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    first_name: str
    last_name: str


class Product(BaseModel):
    # catalog records carry descriptive fields (name, category, ...) we pass through
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    sku: str
    purchase_price: Decimal  # cost basis per unit
    sale_price: Decimal


class LineItem(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    sku: str
    quantity: Optional[Decimal] = None  # fractional for goods sold by weight
    discount: Optional[Decimal] = None  # percent, 0-100
    sale_price: Optional[Decimal] = None

    @property
    def effective_quantity(self) -> Decimal:
        # a zero quantity counts as one unit, same as a missing one
        return self.quantity or Decimal("1")

    @property
    def effective_discount(self) -> Decimal:
        return self.discount or Decimal("0")


class PurchaseRecord(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    seller_id: str
    items: list[LineItem] = Field(default_factory=list)
    total_amount: Optional[Decimal] = None


class SalesData(BaseModel):
    sellers: list[Seller]
    products: list[Product]
    purchase_records: list[PurchaseRecord]


class AnalysisOptions(BaseModel):
    calculate_revenue: Optional[Callable[..., Any]] = None
    calculate_bonus: Optional[Callable[..., Any]] = None
    top_products_limit: int = TOP_PRODUCTS_LIMIT


# ── Accumulators ─────────────────────────────────────────────────────────────

class LineContribution(BaseModel):
    sku: str
    revenue: Decimal
    profit: Decimal
    quantity: Decimal


class TopProduct(BaseModel):
    sku: str
    quantity: Decimal


class SellerStats(BaseModel):
    seller_id: str
    name: str
    revenue: Decimal = Decimal("0")
    profit: Optional[Decimal] = Decimal("0")
    sales_count: int = 0
    # sku -> units sold, in first-sold order
    products_sold: dict[str, Decimal] = Field(default_factory=dict)
    items: list[LineContribution] = Field(default_factory=list)
    bonus: Decimal = Decimal("0")
    top_products: list[TopProduct] = Field(default_factory=list)


# ── Response models ──────────────────────────────────────────────────────────

class ReportRow(BaseModel):
    seller_id: str
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    bonus: Decimal
