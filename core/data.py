from __future__ import annotations

import logging
import math
import re
import time
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import requests

from core.config import dataset_cache_ttl, dataset_timeout, dataset_url
from core.filters import TransactionFilters, normalize_filters


logger = logging.getLogger(__name__)

# Leading YYYY-MM-DD; any time/offset suffix is ignored and no timezone shift is applied.
SALE_DATE_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})")

FRAME_COLUMNS = {
    "title": object,
    "description": object,
    "price_text": object,
    "category": object,
    "price_value": "float64",
    "sold_value": "float64",
}


class DatasetError(RuntimeError):
    """Upstream payload is not a JSON array of records."""


# ---------------- Upstream fetch ----------------
def fetch_transactions(url: Optional[str] = None, timeout: Optional[float] = None) -> List[Dict[str, Any]]:
    url = url or dataset_url()
    timeout = dataset_timeout() if timeout is None else timeout
    logger.debug("dataset_fetch url=%s timeout=%s", url, timeout)
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    payload = r.json()
    if not isinstance(payload, list):
        raise DatasetError(f"Expected a JSON array from {url}, got {type(payload).__name__}")
    records = [row for row in payload if isinstance(row, dict)]
    if len(records) != len(payload):
        logger.warning("dataset_fetch dropped %d non-object entries", len(payload) - len(records))
    logger.info("dataset_fetched url=%s records=%d", url, len(records))
    return records


@lru_cache(maxsize=4)
def _fetch_transactions_cached(url: str, time_bucket: int) -> Tuple[Dict[str, Any], ...]:
    return tuple(fetch_transactions(url))


def load_transactions() -> List[Dict[str, Any]]:
    """Return the upstream records, re-fetched on every call unless DATASET_CACHE_TTL is set."""
    url = dataset_url()
    ttl = dataset_cache_ttl()
    if ttl <= 0:
        return fetch_transactions(url)
    bucket = int(time.time() // ttl)
    hits = _fetch_transactions_cached.cache_info().hits
    records = list(_fetch_transactions_cached(url, bucket))
    if _fetch_transactions_cached.cache_info().hits > hits:
        logger.debug("dataset_cache_hit url=%s bucket=%d", url, bucket)
    return records


# ---------------- Coercion helpers ----------------
def coerce_number(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        out = float(value)
    else:
        s = str(value).strip()
        if not s:
            return None
        try:
            out = float(s)
        except ValueError:
            return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def coerce_sold(value: object) -> Optional[float]:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    return coerce_number(value)


def json_number(value: float) -> int | float:
    """Render integral floats as ints (150.0 -> 150)."""
    value = float(value)
    if value.is_integer():
        return int(value)
    return value


def to_text(value: object) -> str:
    """Stringify a free-form field the way it is displayed; falsy values become ''."""
    if value is None or value is False or value == "":
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, (int, np.integer)):
        return str(int(value)) if value else ""
    if isinstance(value, (float, np.floating)):
        if math.isnan(value) or math.isinf(value) or value == 0:
            return ""
        return str(json_number(value))
    return str(value)


def sale_months(values: pd.Series) -> pd.Series:
    """Two-digit month of each leading YYYY-MM-DD; NaN for non-strings and impossible dates."""
    text = values.astype(object).where(values.map(lambda v: isinstance(v, str)).astype(bool))
    parts = text.str.extract(SALE_DATE_PATTERN)
    iso = parts[0] + "-" + parts[1].str.zfill(2) + "-" + parts[2].str.zfill(2)
    dates = pd.to_datetime(iso, format="%Y-%m-%d", errors="coerce")
    return dates.dt.strftime("%m").astype(object).where(dates.notna())


def normalize_category(value: object) -> Optional[str]:
    text = to_text(value)
    return text or None


# ---------------- Frame construction ----------------
def build_frame(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per record; the RangeIndex is the record's position in ``records``."""
    data = {
        "title": [to_text(r.get("title")) for r in records],
        "description": [to_text(r.get("description")) for r in records],
        "price_text": [to_text(r.get("price")) for r in records],
        "category": [normalize_category(r.get("category")) for r in records],
        "price_value": [coerce_number(r.get("price")) for r in records],
        "sold_value": [coerce_sold(r.get("sold")) for r in records],
    }
    frame = pd.DataFrame(
        {col: pd.Series(values, dtype=FRAME_COLUMNS[col]) for col, values in data.items()},
        index=pd.RangeIndex(len(records)),
    )
    frame["sale_month"] = sale_months(pd.Series([r.get("dateOfSale") for r in records], dtype=object))
    return frame


def filter_by_month(frame: pd.DataFrame, month: Optional[str]) -> pd.DataFrame:
    if not month:
        return frame.iloc[0:0]
    return frame[frame["sale_month"] == month]


def search_frame(frame: pd.DataFrame, search: str) -> pd.DataFrame:
    if not search or frame.empty:
        return frame
    q = search.lower()
    mask = (
        frame["title"].str.lower().str.contains(q, regex=False)
        | frame["description"].str.lower().str.contains(q, regex=False)
        | frame["price_text"].str.contains(search, regex=False)
    )
    return frame[mask.fillna(False).astype(bool)]


# ---------------- Public API (FastAPI use) ----------------
def prepare_context(filters: dict | TransactionFilters, records: List[Dict[str, Any]]) -> Dict[str, object]:
    filt = filters if isinstance(filters, TransactionFilters) else normalize_filters(filters)
    frame = build_frame(records)

    month_frame = filter_by_month(frame, filt.month) if filt.month else frame
    filtered = search_frame(month_frame, filt.search)

    return {
        "filters": filt,
        "records": records,
        "frame": frame,
        "month_frame": month_frame,
        "filtered": filtered,
    }
