from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from core.filters import TransactionFilters, require_month


def compute_category_counts(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    cats = frame["category"].dropna()
    if cats.empty:
        return []
    counts = cats.groupby(cats, sort=False).size()
    return [{"category": str(category), "count": int(count)} for category, count in counts.items()]


def compute_pie_chart(filters: TransactionFilters, ctx: Dict[str, Any]) -> List[Dict[str, Any]]:
    require_month(filters)
    month_frame: pd.DataFrame = ctx["month_frame"]
    return compute_category_counts(month_frame)
