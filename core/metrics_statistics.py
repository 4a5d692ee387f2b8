from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from core.data import json_number
from core.filters import TransactionFilters, require_month


def summarize_sales(frame: pd.DataFrame) -> Dict[str, Any]:
    """Sale amount and sold quantity are sums; the not-sold figure counts records."""
    prices = frame["price_value"]
    sold = frame["sold_value"]
    sold_mask = sold.notna() & (sold != 0)
    return {
        "totalSaleAmount": json_number(prices.fillna(0).sum()),
        "totalSoldItems": json_number(sold[sold_mask].sum()),
        "totalNotSoldItems": int((~sold_mask).sum()),
    }


def compute_statistics(filters: TransactionFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    require_month(filters)
    month_frame: pd.DataFrame = ctx["month_frame"]
    return summarize_sales(month_frame)
