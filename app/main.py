import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query

from app.config import settings
from app.engine import analyze_sales
from app.errors import SalesAnalysisError
from app.models import ReportRow, SalesData
from app.store import store
from app.strategies import default_options

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ON_STARTUP:
        from scripts.seed_data import seed
        seed(store)
        logger.info("Seeded store with %d sellers", len(store.sellers))
    yield


app = FastAPI(
    title="Sales Performance Service",
    version="1.0.0",
    description="Seller revenue, profit and ranking bonus reports",
    lifespan=lifespan,
)


def _run_report(data: SalesData, limit: int) -> list[ReportRow]:
    try:
        return analyze_sales(data, default_options(top_products_limit=limit))
    except SalesAnalysisError as exc:
        raise HTTPException(400, str(exc))


# ── Sellers & catalog ────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump() for s in store.list_sellers()]}


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details")
def get_seller(seller_id: str):
    seller = store.get_seller(seller_id)
    if not seller:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    return {
        **seller.model_dump(),
        "purchase_record_count": len(store.get_records_for_seller(seller_id)),
    }


@app.get("/api/v1/products", summary="List the product catalog")
def list_products():
    return {"products": [p.model_dump() for p in store.list_products()]}


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/reports/sales", summary="Seller performance report over stored data")
def get_sales_report(
    limit: int = Query(default=settings.TOP_PRODUCTS_LIMIT, ge=1, le=100),
):
    rows = _run_report(store.as_sales_data(), limit)
    return {"report": [r.model_dump() for r in rows]}


@app.get(
    "/api/v1/reports/sales/{seller_id}",
    summary="Performance report row for a single seller",
)
def get_seller_report(
    seller_id: str,
    limit: int = Query(default=settings.TOP_PRODUCTS_LIMIT, ge=1, le=100),
):
    if not store.get_seller(seller_id):
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    rows = _run_report(store.as_sales_data(), limit)
    for rank, row in enumerate(rows):
        if row.seller_id == seller_id:
            return {"rank": rank, **row.model_dump()}
    raise HTTPException(404, f"Seller '{seller_id}' not found")


@app.post("/api/v1/reports/sales", summary="Seller performance report over posted data")
def post_sales_report(
    data: SalesData,
    limit: int = Query(default=settings.TOP_PRODUCTS_LIMIT, ge=1, le=100),
):
    rows = _run_report(data, limit)
    return {"report": [r.model_dump() for r in rows]}


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed test data")
def reseed():
    from scripts.seed_data import seed
    store.clear()
    seed(store)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }
