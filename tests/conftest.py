"""Shared fixtures: a small upstream snapshot and an API client that never touches the network."""

from __future__ import annotations

import copy
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

import api.main


SAMPLE_RECORDS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Fjallraven Backpack",
        "description": "Fits 15 inch laptops",
        "price": 109.95,
        "category": "men's clothing",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
        "image": "https://example.com/1.jpg",
    },
    {
        "id": 2,
        "title": "Mens Casual T-Shirt",
        "description": "Slim-fitting style",
        "price": 22.3,
        "category": "men's clothing",
        "sold": True,
        "dateOfSale": "2022-11-05T20:29:54+05:30",
    },
    {
        "id": 3,
        "title": "Gold Ring item99",
        "description": "Wedding ring",
        "price": 695,
        "category": "jewelery",
        "sold": 2,
        "dateOfSale": "2022-03-15",
    },
    {
        "id": 4,
        "title": "Monitor",
        "description": "27 inch",
        "price": 199,
        "category": "electronics",
        "sold": 0,
        "dateOfSale": "2021-03-01",
    },
    {
        "id": 5,
        "title": "Hard Drive",
        "description": None,
        "price": "bad",
        "category": "electronics",
        "dateOfSale": "2022-03-20",
    },
    {"id": 6, "description": "no title", "price": 950, "sold": 1, "dateOfSale": "2022-07-15"},
    {"id": 7, "title": "Bad date", "price": 10, "category": "", "sold": 1, "dateOfSale": "not-a-date"},
    {"id": 8, "title": "Invalid calendar date", "price": 20, "category": "electronics", "dateOfSale": "2022-02-30"},
]


@pytest.fixture
def records() -> List[Dict[str, Any]]:
    return copy.deepcopy(SAMPLE_RECORDS)


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, records: List[Dict[str, Any]]) -> TestClient:
    monkeypatch.setattr(api.main, "load_transactions", lambda: records)
    return TestClient(api.main.app)
