from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    BarChartResponse,
    CategoryCountModel,
    CombinedResponse,
    MessageResponse,
    MetaCategoriesResponse,
    MetaMonthsResponse,
    StatisticsResponse,
    TransactionPageResponse,
)
from core.config import cors_allow_origins, server_host, server_port
from core.data import load_transactions, prepare_context
from core.filters import MonthRequiredError, TransactionFilters, normalize_filters, require_month
from core.metrics_bar_chart import compute_bar_chart
from core.metrics_combined import compute_combined
from core.metrics_meta import compute_category_list, compute_month_summary
from core.metrics_pie_chart import compute_pie_chart
from core.metrics_statistics import compute_statistics
from core.metrics_transactions import compute_transactions


app = FastAPI(title="Product Transactions Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {400: {"model": MessageResponse}, 500: {"model": MessageResponse}}


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _month_filters(month: Optional[str]) -> TransactionFilters:
    f = normalize_filters({"month": month})
    require_month(f)
    return f


@app.exception_handler(MonthRequiredError)
async def month_required_handler(request: Request, exc: MonthRequiredError) -> JSONResponse:
    return _message(400, str(exc))


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/product-transaction", response_model=TransactionPageResponse, responses=ERROR_RESPONSES)
def product_transaction(
    month: Optional[str] = Query(default=None),
    search: str = Query(default=""),
    page: str = Query(default="1"),
    per_page: str = Query(default="10", alias="perPage"),
):
    try:
        f = normalize_filters({"month": month, "search": search, "page": page, "per_page": per_page})
        ctx = prepare_context(f, load_transactions())
        return _json(compute_transactions(f, ctx))
    except Exception:
        logger.exception("product_transaction failed")
        return _message(500, "Error fetching data from S3")


@app.get("/api/statistics", response_model=StatisticsResponse, responses=ERROR_RESPONSES)
def statistics(month: Optional[str] = Query(default=None)):
    f = _month_filters(month)
    try:
        ctx = prepare_context(f, load_transactions())
        return _json(compute_statistics(f, ctx))
    except Exception:
        logger.exception("statistics failed")
        return _message(500, "Error fetching data for statistics")


@app.get("/api/bar-chart", response_model=BarChartResponse, responses=ERROR_RESPONSES)
def bar_chart(month: Optional[str] = Query(default=None)):
    f = _month_filters(month)
    try:
        ctx = prepare_context(f, load_transactions())
        return _json(compute_bar_chart(f, ctx))
    except Exception:
        logger.exception("bar_chart failed")
        return _message(500, "Error fetching bar chart data")


@app.get("/api/pie-chart", response_model=List[CategoryCountModel], responses=ERROR_RESPONSES)
def pie_chart(month: Optional[str] = Query(default=None)):
    f = _month_filters(month)
    try:
        ctx = prepare_context(f, load_transactions())
        return _json(compute_pie_chart(f, ctx))
    except Exception:
        logger.exception("pie_chart failed")
        return _message(500, "Error fetching pie chart data")


@app.get("/api/combined-data", response_model=CombinedResponse, responses={500: {"model": MessageResponse}})
def combined_data(month: Optional[str] = Query(default=None)):
    try:
        f = normalize_filters({"month": month})
        ctx = prepare_context(f, load_transactions())
        return _json(compute_combined(f, ctx))
    except Exception:
        logger.exception("combined_data failed")
        return _message(500, "Server error")


@app.get("/api/meta/months", response_model=MetaMonthsResponse, responses={500: {"model": MessageResponse}})
def meta_months():
    try:
        ctx = prepare_context({}, load_transactions())
        return _json(compute_month_summary(ctx))
    except Exception:
        logger.exception("meta_months failed")
        return _message(500, "Error fetching metadata")


@app.get("/api/meta/categories", response_model=MetaCategoriesResponse, responses={500: {"model": MessageResponse}})
def meta_categories():
    try:
        ctx = prepare_context({}, load_transactions())
        return _json(compute_category_list(ctx))
    except Exception:
        logger.exception("meta_categories failed")
        return _message(500, "Error fetching metadata")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=server_host(), port=server_port())
