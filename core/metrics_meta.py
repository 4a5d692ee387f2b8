from __future__ import annotations

from typing import Any, Dict

import pandas as pd


def compute_month_summary(ctx: Dict[str, Any]) -> Dict[str, Any]:
    frame: pd.DataFrame = ctx.get("frame", pd.DataFrame())
    if frame.empty:
        return {"months": []}
    counts = frame["sale_month"].dropna().value_counts().sort_index()
    return {"months": [{"month": str(m), "count": int(n)} for m, n in counts.items()]}


def compute_category_list(ctx: Dict[str, Any]) -> Dict[str, Any]:
    frame: pd.DataFrame = ctx.get("frame", pd.DataFrame())
    if frame.empty:
        return {"categories": []}
    cats = sorted(str(x) for x in frame["category"].dropna().unique().tolist())
    return {"categories": cats}
