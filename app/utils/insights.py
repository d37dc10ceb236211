from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from app.models.transaction import Transaction
from app.utils.classifier import round_half_up
from app.utils.comparison import compare_month_over_month, generate_comparison_insights
from app.utils.forecast import ForecastStrategy, predict_next_month_spending
from app.utils.patterns import peak_spending_times
from app.utils.trends import identify_declining_categories, identify_growing_categories

INSIGHT_TREND_THRESHOLD = 15.0
MIN_FORECAST_MONTHS = 2

# Indonesian grouping: "." for thousands, "," for decimals
_ID_SEPARATORS = str.maketrans({",": ".", ".": ","})


@dataclass
class Insight:
    type: str
    icon: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def format_currency(amount: float) -> str:
    if float(amount).is_integer():
        text = f"{amount:,.0f}"
    else:
        text = f"{amount:,.2f}"
    return f"Rp {text.translate(_ID_SEPARATORS)}"


def generate_insights(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
    trend_threshold: float = INSIGHT_TREND_THRESHOLD,
    trend_months: int = 3,
    strategy: Optional[ForecastStrategy] = None,
) -> List[Insight]:
    """
    Compose the analyzers' outputs into a short list of observations.
    Order follows the rules below, not magnitude; missing data skips a rule.
    `strategy` and `trend_months` should match whatever the caller uses for its
    standalone forecast and trend views.
    """
    insights: List[Insight] = []

    peak = peak_spending_times(transactions)
    if peak.peak_day:
        insights.append(Insight(
            type="pattern",
            icon="🎯",
            message=(
                f"Your highest spending day is {peak.peak_day} "
                f"(avg {format_currency(round_half_up(peak.peak_day_average))})"
            ),
        ))

    growing = identify_growing_categories(
        transactions, threshold=trend_threshold, months=trend_months, today=today
    )
    if growing:
        top = growing[0]
        insights.append(Insight(
            type="trend",
            icon="📈",
            message=f"Spending on '{top.category}' increased by {top.change:.1f}% this month",
        ))

    declining = identify_declining_categories(
        transactions, threshold=-trend_threshold, months=trend_months, today=today
    )
    if declining:
        top = declining[0]
        insights.append(Insight(
            type="trend",
            icon="✅",
            message=f"Great job! '{top.category}' expenses decreased by {abs(top.change):.1f}%",
        ))

    forecast = predict_next_month_spending(transactions, strategy)
    if forecast.based_on_months >= MIN_FORECAST_MONTHS:
        if forecast.confidence:
            qualifier = f"{forecast.confidence} confidence"
        else:
            qualifier = f"{forecast.trend} trend"
        insights.append(Insight(
            type="prediction",
            icon="🔮",
            message=(
                f"Expected expenses next month: {format_currency(forecast.prediction)} "
                f"({qualifier})"
            ),
        ))

    mom = compare_month_over_month(transactions, today=today)
    for message in generate_comparison_insights(mom):
        insights.append(Insight(type="comparison", icon="📊", message=message))

    return insights
