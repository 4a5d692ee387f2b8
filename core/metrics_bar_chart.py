from __future__ import annotations

from typing import Any, Dict, List

import numpy as np
import pandas as pd

from core.filters import TransactionFilters, require_month


PRICE_BUCKET_EDGES = [100, 200, 300, 400, 500, 600, 700, 800, 900]
PRICE_RANGE_LABELS = [
    "0 - 100",
    "101 - 200",
    "201 - 300",
    "301 - 400",
    "401 - 500",
    "501 - 600",
    "601 - 700",
    "701 - 800",
    "801 - 900",
    "901 - above",
]


def compute_price_ranges(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """Count records per price bucket; each bucket's upper bound is inclusive."""
    prices = frame["price_value"].dropna()
    bins = [-np.inf, *PRICE_BUCKET_EDGES, np.inf]
    buckets = pd.cut(prices, bins=bins, labels=PRICE_RANGE_LABELS, right=True)
    counts = buckets.value_counts(sort=False).reindex(PRICE_RANGE_LABELS, fill_value=0)
    return [{"range": label, "count": int(counts[label])} for label in PRICE_RANGE_LABELS]


def compute_bar_chart(filters: TransactionFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    """Price ranges for one month.

    ``month`` in the payload is the normalized two-digit month, not the raw query
    value: "march" and "3" both come back as "03".
    """
    month = require_month(filters)
    month_frame: pd.DataFrame = ctx["month_frame"]
    return {"month": month, "priceRanges": compute_price_ranges(month_frame)}
