from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str


class TransactionPageResponse(BaseModel):
    transactions: List[Dict[str, Any]] = Field(default_factory=list)
    totalTransactions: int
    totalPages: Optional[int] = None
    currentPage: Optional[int] = None


class StatisticsResponse(BaseModel):
    totalSaleAmount: float
    totalSoldItems: float
    totalNotSoldItems: int


class PriceRangeModel(BaseModel):
    range: str
    count: int


class BarChartResponse(BaseModel):
    month: str
    priceRanges: List[PriceRangeModel]


class CategoryCountModel(BaseModel):
    category: str
    count: int


class NamedCategoryCountModel(BaseModel):
    name: str
    count: int


class PieChartData(BaseModel):
    categories: List[NamedCategoryCountModel]


class CombinedResponse(BaseModel):
    statistics: StatisticsResponse
    barChartData: BarChartResponse
    pieChartData: PieChartData


class MonthCountModel(BaseModel):
    month: str
    count: int


class MetaMonthsResponse(BaseModel):
    months: List[MonthCountModel]


class MetaCategoriesResponse(BaseModel):
    categories: List[str]
