from __future__ import annotations

import math

import pandas as pd
import pytest
import requests

import core.data
from core.data import (
    DatasetError,
    build_frame,
    coerce_number,
    coerce_sold,
    fetch_transactions,
    filter_by_month,
    load_transactions,
    prepare_context,
    sale_months,
    search_frame,
    to_text,
)


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2023-07-15", "07"),
        ("2021-11-27T20:29:54+05:30", "11"),
        ("2022-1-05", "01"),
        ("2022-02-30", None),
        ("not-a-date", None),
        ("", None),
        (None, None),
        (20230715, None),
    ],
)
def test_sale_months(value, expected) -> None:
    month = sale_months(pd.Series([value], dtype=object)).iloc[0]
    assert (pd.isna(month) if expected is None else month == expected)


def test_coercion_helpers() -> None:
    assert coerce_number(100) == 100.0
    assert coerce_number("12.5") == 12.5
    assert coerce_number("bad") is None
    assert coerce_number(True) is None
    assert coerce_number(float("nan")) is None
    assert coerce_sold(True) == 1.0
    assert coerce_sold(False) == 0.0
    assert coerce_sold(None) is None
    assert to_text(199) == "199"
    assert to_text(200.0) == "200"
    assert to_text(109.95) == "109.95"
    assert to_text(0) == ""
    assert to_text(None) == ""


def test_build_frame_keeps_record_positions(records) -> None:
    frame = build_frame(records)
    assert list(frame.index) == list(range(len(records)))
    assert frame.loc[2, "price_value"] == 695.0
    assert math.isnan(frame.loc[4, "price_value"])
    assert frame.loc[4, "description"] == ""
    assert frame.loc[5, "title"] == ""
    assert frame.loc[6, "category"] is None
    assert pd.isna(frame.loc[6, "sale_month"])


def test_build_frame_empty() -> None:
    frame = build_frame([])
    assert frame.empty
    assert {"price_value", "sold_value", "sale_month", "category"}.issubset(frame.columns)


def test_filter_by_month_ignores_year(records) -> None:
    frame = build_frame(records)
    march = filter_by_month(frame, "03")
    assert [records[i]["id"] for i in march.index] == [3, 4, 5]
    assert filter_by_month(frame, "07").index.tolist() == [5]
    assert filter_by_month(frame, "02").empty
    assert filter_by_month(frame, None).empty


def test_filter_by_month_matches_single_month_only() -> None:
    frame = build_frame([{"dateOfSale": "2023-07-15"}])
    for month in range(1, 13):
        matched = filter_by_month(frame, f"{month:02d}")
        assert len(matched) == (1 if month == 7 else 0)


def test_search_frame_matches_title_description_and_price(records) -> None:
    frame = build_frame(records)
    assert [records[i]["id"] for i in search_frame(frame, "99").index] == [3, 4]
    assert [records[i]["id"] for i in search_frame(frame, "LAPTOP").index] == [1]
    assert search_frame(frame, "").equals(frame)
    assert search_frame(frame, "nothing matches this").empty


def test_prepare_context_applies_month_then_search(records) -> None:
    ctx = prepare_context({"month": "03", "search": "ring"}, records)
    assert len(ctx["month_frame"]) == 3
    assert [records[i]["id"] for i in ctx["filtered"].index] == [3]
    assert ctx["records"] is records
    assert isinstance(ctx["frame"], pd.DataFrame)


def test_fetch_transactions_returns_records(monkeypatch) -> None:
    calls = {}

    def fake_get(url, timeout):
        calls["url"] = url
        calls["timeout"] = timeout
        return _FakeResponse([{"id": 1}, "junk", {"id": 2}])

    monkeypatch.setattr(core.data.requests, "get", fake_get)
    out = fetch_transactions("https://example.com/data.json", timeout=3)
    assert out == [{"id": 1}, {"id": 2}]
    assert calls == {"url": "https://example.com/data.json", "timeout": 3}


def test_fetch_transactions_uses_configured_url(monkeypatch) -> None:
    seen = []
    monkeypatch.setenv("DATASET_URL", "https://example.com/other.json")
    monkeypatch.setenv("DATASET_TIMEOUT", "2.5")
    monkeypatch.setattr(core.data.requests, "get", lambda url, timeout: seen.append((url, timeout)) or _FakeResponse([]))
    assert fetch_transactions() == []
    assert seen == [("https://example.com/other.json", 2.5)]


def test_fetch_transactions_rejects_non_array(monkeypatch) -> None:
    monkeypatch.setattr(core.data.requests, "get", lambda url, timeout: _FakeResponse({"items": []}))
    with pytest.raises(DatasetError):
        fetch_transactions("https://example.com/data.json")


def test_fetch_transactions_propagates_http_errors(monkeypatch) -> None:
    monkeypatch.setattr(core.data.requests, "get", lambda url, timeout: _FakeResponse([], status_code=503))
    with pytest.raises(requests.HTTPError):
        fetch_transactions("https://example.com/data.json")


def test_load_transactions_refetches_without_ttl(monkeypatch) -> None:
    calls = []
    monkeypatch.delenv("DATASET_CACHE_TTL", raising=False)
    monkeypatch.setattr(core.data, "fetch_transactions", lambda url=None: calls.append(url) or [{"id": len(calls)}])
    assert load_transactions() == [{"id": 1}]
    assert load_transactions() == [{"id": 2}]
    assert len(calls) == 2


def test_load_transactions_reuses_snapshot_within_ttl(monkeypatch) -> None:
    calls = []
    core.data._fetch_transactions_cached.cache_clear()
    monkeypatch.setenv("DATASET_CACHE_TTL", "3600")
    monkeypatch.setattr(core.data.time, "time", lambda: 7200.0)
    monkeypatch.setattr(core.data, "fetch_transactions", lambda url=None: calls.append(url) or [{"id": 1}])
    try:
        assert load_transactions() == [{"id": 1}]
        assert load_transactions() == [{"id": 1}]
        assert len(calls) == 1
    finally:
        core.data._fetch_transactions_cached.cache_clear()


def test_sale_months_is_vectorized_and_keeps_index() -> None:
    values = pd.Series(["2023-07-15", None, "2022-13-01", "2021-12-31T23:59:59-08:00"], index=[4, 5, 6, 7], dtype=object)
    months = sale_months(values)
    assert list(months.index) == [4, 5, 6, 7]
    assert months.loc[4] == "07"
    assert pd.isna(months.loc[5])
    assert pd.isna(months.loc[6])
    assert months.loc[7] == "12"


def test_sale_months_empty() -> None:
    assert sale_months(pd.Series([], dtype=object)).empty
