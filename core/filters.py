from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10

MONTH_NAMES = [
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class MonthRequiredError(ValueError):
    """Raised when a view that needs a month is requested without one."""

    def __init__(self, message: str = "Month parameter is required") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class TransactionFilters:
    month: Optional[str] = None
    search: str = ""
    page: Optional[int] = DEFAULT_PAGE
    per_page: Optional[int] = DEFAULT_PER_PAGE


def parse_int(value: object) -> Optional[int]:
    """Parse the leading integer of a value ("4x" -> 4, "2.7" -> 2); None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def normalize_month(value: object) -> Optional[str]:
    """Two-digit month for "3", "03", "March" or "mar"; None for blank or whitespace-only input,
    which month-required views then reject with a 400 instead of answering with empty data."""
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    if s.isdigit():
        n = int(s)
        if 1 <= n <= 12 and len(s) <= 2:
            return f"{n:02d}"
        return s
    low = s.lower()
    for idx, name in enumerate(MONTH_NAMES, start=1):
        if low == name or (len(low) == 3 and name.startswith(low)):
            return f"{idx:02d}"
    return s


def normalize_filters(raw: dict) -> TransactionFilters:
    month = normalize_month(raw.get("month"))
    search = raw.get("search")
    search = "" if search is None else str(search)

    page = raw.get("page")
    page = DEFAULT_PAGE if page is None or page == "" else parse_int(page)
    per_page = raw.get("per_page", raw.get("perPage"))
    per_page = DEFAULT_PER_PAGE if per_page is None or per_page == "" else parse_int(per_page)

    return TransactionFilters(month=month, search=search, page=page, per_page=per_page)


def require_month(filters: TransactionFilters) -> str:
    if not filters.month:
        raise MonthRequiredError()
    return filters.month
