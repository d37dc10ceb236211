from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from app.models.transaction import Transaction
from app.utils.classifier import month_key, non_transfers, percentage_change, shift_months

STABLE_BAND = 5.0
DEFAULT_CATEGORY = "Other"


@dataclass
class CategoryTrend:
    """A category whose latest month moved notably against the month before."""

    category: str
    change: float
    trend: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze_category_trends(
    transactions: Sequence[Transaction],
    months: int = 6,
    today: Optional[date] = None,
) -> Dict[str, Dict[str, float]]:
    """
    Sum non-transfer amounts per (category, month) over the trailing window.
    Income and expense categories are bucketed the same way.
    """
    end_date = today or date.today()
    start_date = shift_months(end_date, -months)

    by_category: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(float))
    for t in non_transfers(transactions):
        if start_date <= t.date <= end_date:
            by_category[t.category or DEFAULT_CATEGORY][month_key(t.date)] += t.amount

    return {category: dict(series) for category, series in by_category.items()}


def category_mom_change(series: Mapping[str, float]) -> float:
    months = sorted(series)
    if len(months) < 2:
        return 0.0
    return percentage_change(series[months[-2]], series[months[-1]])


def trend_direction(series: Mapping[str, float]) -> str:
    if len(series) < 2:
        return "stable"
    change = category_mom_change(series)
    if abs(change) < STABLE_BAND:
        return "stable"
    return "up" if change > 0 else "down"


def _category_changes(
    transactions: Sequence[Transaction],
    months: int,
    today: Optional[date],
) -> List[Tuple[str, float]]:
    trends = analyze_category_trends(transactions, months=months, today=today)
    return [
        (category, category_mom_change(series))
        for category, series in trends.items()
        if len(series) >= 2
    ]


def identify_growing_categories(
    transactions: Sequence[Transaction],
    threshold: float = 10.0,
    months: int = 3,
    today: Optional[date] = None,
) -> List[CategoryTrend]:
    growing = [
        CategoryTrend(category=category, change=round(change, 1), trend="up")
        for category, change in _category_changes(transactions, months, today)
        if change > threshold
    ]
    return sorted(growing, key=lambda item: item.change, reverse=True)


def identify_declining_categories(
    transactions: Sequence[Transaction],
    threshold: float = -10.0,
    months: int = 3,
    today: Optional[date] = None,
) -> List[CategoryTrend]:
    declining = [
        CategoryTrend(category=category, change=round(change, 1), trend="down")
        for category, change in _category_changes(transactions, months, today)
        if change < threshold
    ]
    return sorted(declining, key=lambda item: item.change)
