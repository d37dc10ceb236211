from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Sequence

from app.models.transaction import Transaction
from app.utils.classifier import DAY_NAMES, day_name, expenses_only, shift_months, week_key


@dataclass
class DaySpending:
    totals: Dict[str, float]
    counts: Dict[str, int]
    averages: Dict[str, float]
    peak_day: str = ""
    peak_average: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class WeekSpending:
    week_totals: Dict[str, float] = field(default_factory=dict)
    peak_week: str = ""
    peak_total: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PeakSpendingTimes:
    """Summary consumed by dashboards: the heaviest weekday and week."""

    peak_day: str
    peak_day_average: float
    peak_week: str
    peak_week_total: float
    day_breakdown: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze_spending_by_day(transactions: Sequence[Transaction]) -> DaySpending:
    totals = {day: 0.0 for day in DAY_NAMES}
    counts = {day: 0 for day in DAY_NAMES}

    for t in expenses_only(transactions):
        day = day_name(t.date)
        totals[day] += t.amount
        counts[day] += 1

    averages = {
        day: totals[day] / counts[day] if counts[day] > 0 else 0.0
        for day in DAY_NAMES
    }

    # Strictly greater wins, so ties keep the earlier weekday.
    peak_day, peak_average = "", 0.0
    for day in DAY_NAMES:
        if averages[day] > peak_average:
            peak_day, peak_average = day, averages[day]

    return DaySpending(
        totals=totals,
        counts=counts,
        averages=averages,
        peak_day=peak_day,
        peak_average=peak_average,
    )


def analyze_spending_by_week(transactions: Sequence[Transaction]) -> WeekSpending:
    week_totals: Dict[str, float] = defaultdict(float)
    for t in expenses_only(transactions):
        week_totals[week_key(t.date)] += t.amount

    peak_week, peak_total = "", 0.0
    for week, total in week_totals.items():
        if total > peak_total:
            peak_week, peak_total = week, total

    return WeekSpending(week_totals=dict(week_totals), peak_week=peak_week, peak_total=peak_total)


def spending_heatmap(
    transactions: Sequence[Transaction],
    months: int = 3,
    today: Optional[date] = None,
) -> Dict[str, float]:
    """
    Per-date expense totals for the trailing `months` window (both ends inclusive),
    keyed by ISO date for calendar views.
    """
    end_date = today or date.today()
    start_date = shift_months(end_date, -months)

    heatmap: Dict[str, float] = defaultdict(float)
    for t in expenses_only(transactions):
        if start_date <= t.date <= end_date:
            heatmap[t.date.isoformat()] += t.amount
    return dict(heatmap)


def peak_spending_times(transactions: Sequence[Transaction]) -> PeakSpendingTimes:
    by_day = analyze_spending_by_day(transactions)
    by_week = analyze_spending_by_week(transactions)
    return PeakSpendingTimes(
        peak_day=by_day.peak_day,
        peak_day_average=by_day.peak_average,
        peak_week=by_week.peak_week,
        peak_week_total=by_week.peak_total,
        day_breakdown=by_day.averages,
    )
