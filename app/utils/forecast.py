"""
Next-month expense forecasting.

Both models share the ForecastStrategy interface so callers pick a model without
the engine hard-coding which one runs:

- MovingAverageStrategy: mean of the trailing window, with a one-sigma band
  over the whole series and a coefficient-of-variation confidence label.
- LinearTrendStrategy: least-squares line over the month index, projected one
  month ahead. Needs at least two months, otherwise defers to the moving average.
"""
from __future__ import annotations

import statistics
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from app.models.transaction import Transaction
from app.utils.classifier import expenses_only, month_key, round_half_up

HIGH_CONFIDENCE_CV = 20.0
LOW_CONFIDENCE_CV = 40.0


@dataclass
class Forecast:
    prediction: int
    based_on_months: int
    model: str
    confidence: Optional[str] = None
    range: Optional[Dict[str, int]] = None
    trend: Optional[str] = None
    monthly_change: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Each model only fills its own fields
        return {k: v for k, v in data.items() if v is not None}


class ForecastStrategy(Protocol):
    name: str

    def forecast(self, series: Sequence[float]) -> Forecast:
        ...


def monthly_expense_series(transactions: Sequence[Transaction]) -> Dict[str, float]:
    """Non-transfer expense totals keyed by month, in ascending month order."""
    totals: Dict[str, float] = defaultdict(float)
    for t in expenses_only(transactions):
        totals[month_key(t.date)] += t.amount
    return {month: totals[month] for month in sorted(totals)}


def moving_average(values: Sequence[float], periods: int = 3) -> float:
    if not values:
        return 0.0
    if len(values) < periods:
        return values[-1]
    return statistics.fmean(values[-periods:])


def confidence_label(values: Sequence[float]) -> str:
    mean = statistics.fmean(values)
    if mean == 0:
        return "low"
    cv = statistics.pstdev(values) / mean * 100
    if cv < HIGH_CONFIDENCE_CV:
        return "high"
    if cv > LOW_CONFIDENCE_CV:
        return "low"
    return "medium"


class MovingAverageStrategy:
    name = "moving_average"

    def __init__(self, periods: int = 3) -> None:
        self._periods = periods

    def forecast(self, series: Sequence[float]) -> Forecast:
        values: List[float] = list(series)
        if not values:
            return Forecast(
                prediction=0,
                based_on_months=0,
                model=self.name,
                confidence="low",
                range={"min": 0, "max": 0},
            )

        prediction = moving_average(values, min(self._periods, len(values)))
        std_dev = statistics.pstdev(values)

        return Forecast(
            prediction=round_half_up(prediction),
            based_on_months=len(values),
            model=self.name,
            confidence=confidence_label(values),
            range={
                "min": round_half_up(max(0.0, prediction - std_dev)),
                "max": round_half_up(prediction + std_dev),
            },
        )


class LinearTrendStrategy:
    name = "linear_trend"

    def __init__(self, fallback: Optional[ForecastStrategy] = None) -> None:
        self._fallback = fallback or MovingAverageStrategy()

    def forecast(self, series: Sequence[float]) -> Forecast:
        values: List[float] = list(series)
        n = len(values)
        if n < 2:
            return self._fallback.forecast(values)

        slope, intercept = statistics.linear_regression(range(n), values)
        prediction = slope * n + intercept

        if slope > 0:
            trend = "increasing"
        elif slope < 0:
            trend = "decreasing"
        else:
            trend = "stable"

        return Forecast(
            prediction=max(0, round_half_up(prediction)),
            based_on_months=n,
            model=self.name,
            trend=trend,
            monthly_change=round_half_up(slope),
        )


STRATEGIES = {
    MovingAverageStrategy.name: MovingAverageStrategy,
    LinearTrendStrategy.name: LinearTrendStrategy,
}


def get_strategy(name: str) -> ForecastStrategy:
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown forecast model '{name}'. Expected one of: {', '.join(STRATEGIES)}"
        ) from None


def predict_next_month_spending(
    transactions: Sequence[Transaction],
    strategy: Optional[ForecastStrategy] = None,
) -> Forecast:
    series = monthly_expense_series(transactions)
    return (strategy or MovingAverageStrategy()).forecast(list(series.values()))


def get_trend_based_prediction(transactions: Sequence[Transaction]) -> Forecast:
    return predict_next_month_spending(transactions, LinearTrendStrategy())
