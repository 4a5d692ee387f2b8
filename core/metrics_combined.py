from __future__ import annotations

from typing import Any, Dict

from core.filters import TransactionFilters
from core.metrics_bar_chart import compute_bar_chart
from core.metrics_pie_chart import compute_pie_chart
from core.metrics_statistics import compute_statistics


def compute_combined(filters: TransactionFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    """Statistics, price ranges and categories for one month, all from the same snapshot."""
    statistics = compute_statistics(filters, ctx)
    bar_chart = compute_bar_chart(filters, ctx)
    pie_chart = compute_pie_chart(filters, ctx)
    return {
        "statistics": statistics,
        "barChartData": bar_chart,
        "pieChartData": {
            "categories": [{"name": item["category"], "count": item["count"]} for item in pie_chart],
        },
    }
