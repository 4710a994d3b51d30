"""
Deterministic test-data generator.

Produces:
  - 6 sellers
  - 30 products across a few categories
  - 300 purchase records, 1-4 line items each
    - ~60 % of line items carry a 5-25 % discount
    - ~2 % of records reference a seller that does not exist
    - ~2 % of line items reference a SKU that is not in the catalog
"""

import random
from decimal import Decimal

from app.models import LineItem, Product, PurchaseRecord, Seller
from app.store import DataStore

SEED = 42

SELLERS = [
    ("seller_1", "Alexey", "Petrov"),
    ("seller_2", "Maria", "Ivanova"),
    ("seller_3", "Dmitry", "Sokolov"),
    ("seller_4", "Elena", "Kuznetsova"),
    ("seller_5", "Ivan", "Smirnov"),
    ("seller_6", "Olga", "Volkova"),
]

CATEGORIES = ["Electronics", "Home", "Garden", "Toys", "Sports"]

N_PRODUCTS = 30
N_RECORDS = 300


def _money(rng: random.Random, lo: float, hi: float) -> Decimal:
    return Decimal(str(round(rng.uniform(lo, hi), 2)))


def seed(store: DataStore) -> None:
    rng = random.Random(SEED)

    # ── sellers ──────────────────────────────────────────────────────────────
    for seller_id, first_name, last_name in SELLERS:
        store.add_seller(Seller(id=seller_id, first_name=first_name, last_name=last_name))

    # ── catalog ──────────────────────────────────────────────────────────────
    for n in range(1, N_PRODUCTS + 1):
        purchase_price = _money(rng, 5, 400)
        markup = Decimal(str(round(rng.uniform(1.1, 1.8), 2)))
        store.add_product(Product(
            sku=f"SKU_{n:03d}",
            name=f"Product {n}",
            category=rng.choice(CATEGORIES),
            purchase_price=purchase_price,
            sale_price=(purchase_price * markup).quantize(Decimal("0.01")),
        ))

    skus = [p.sku for p in store.list_products()]
    seller_ids = [s[0] for s in SELLERS]

    # ── purchase records ─────────────────────────────────────────────────────
    for _ in range(N_RECORDS):
        # a few records point at sellers that were never registered
        if rng.random() < 0.02:
            seller_id = f"seller_{rng.randint(100, 199)}"
        else:
            seller_id = rng.choice(seller_ids)

        items = []
        for _ in range(rng.randint(1, 4)):
            if rng.random() < 0.02:
                sku = f"SKU_{rng.randint(900, 999)}"
                sale_price = _money(rng, 5, 500)
            else:
                sku = rng.choice(skus)
                sale_price = store.get_product(sku).sale_price
            discount = Decimal(rng.randint(5, 25)) if rng.random() < 0.6 else Decimal("0")
            items.append(LineItem(
                sku=sku,
                quantity=rng.randint(1, 5),
                discount=discount,
                sale_price=sale_price,
            ))

        total_amount = sum(
            (i.sale_price * i.quantity * (1 - i.discount / 100) for i in items),
            Decimal("0"),
        ).quantize(Decimal("0.01"))
        store.add_purchase_record(PurchaseRecord(
            seller_id=seller_id,
            items=items,
            total_amount=total_amount,
        ))
