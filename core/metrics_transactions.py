from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import pandas as pd

from core.filters import TransactionFilters


def page_positions(frame: pd.DataFrame, page: Optional[int], per_page: Optional[int]) -> List[int]:
    """Record positions in [(page-1)*per_page, page*per_page); pages before the first or
    a non-positive page size yield no rows."""
    if page is None or per_page is None or page < 1 or per_page <= 0:
        return []
    start = (page - 1) * per_page
    return [int(i) for i in frame.index[start : start + per_page]]


def total_pages(total: int, per_page: Optional[int]) -> Optional[int]:
    if per_page is None or per_page <= 0:
        return None
    return int(math.ceil(total / per_page))


def compute_transactions(filters: TransactionFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    records: List[Dict[str, Any]] = ctx.get("records", [])
    filtered: pd.DataFrame = ctx.get("filtered", pd.DataFrame())

    total = int(len(filtered))
    positions = page_positions(filtered, filters.page, filters.per_page)
    return {
        "transactions": [records[i] for i in positions],
        "totalTransactions": total,
        "totalPages": total_pages(total, filters.per_page),
        "currentPage": filters.page,
    }
