from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence

from app.models.transaction import Transaction
from app.utils.classifier import month_key, non_transfers, percentage_change, shift_months

NOTABLE_CHANGE = 10.0
NOTABLE_BALANCE_CHANGE = 20.0


@dataclass
class PeriodTotals:
    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        return self.income - self.expense

    def add(self, record: Transaction) -> None:
        if record.is_income:
            self.income += record.amount
        else:
            self.expense += record.amount

    def to_dict(self) -> Dict[str, float]:
        return {"income": self.income, "expense": self.expense, "balance": self.balance}


@dataclass
class PeriodComparison:
    current: PeriodTotals = field(default_factory=PeriodTotals)
    previous: PeriodTotals = field(default_factory=PeriodTotals)

    @property
    def changes(self) -> Dict[str, float]:
        return {
            "income": percentage_change(self.previous.income, self.current.income),
            "expense": percentage_change(self.previous.expense, self.current.expense),
            "balance": percentage_change(self.previous.balance, self.current.balance),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict(),
            "changes": self.changes,
        }


def _compare(
    transactions: Sequence[Transaction],
    in_current: Callable[[date], bool],
    in_previous: Callable[[date], bool],
) -> PeriodComparison:
    comparison = PeriodComparison()
    for t in non_transfers(transactions):
        # A record matching both periods only counts towards the current one
        if in_current(t.date):
            comparison.current.add(t)
        elif in_previous(t.date):
            comparison.previous.add(t)
    return comparison


def compare_month_over_month(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
) -> PeriodComparison:
    """Calendar month containing `today` against the month before it."""
    today = today or date.today()
    current_month = month_key(today)
    previous_month = month_key(shift_months(today, -1))
    return _compare(
        transactions,
        lambda d: month_key(d) == current_month,
        lambda d: month_key(d) == previous_month,
    )


def compare_year_over_year(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
) -> PeriodComparison:
    """Calendar month containing `today` against the same month a year earlier."""
    today = today or date.today()
    return _compare(
        transactions,
        lambda d: d.year == today.year and d.month == today.month,
        lambda d: d.year == today.year - 1 and d.month == today.month,
    )


def compare_custom_period(
    transactions: Sequence[Transaction],
    start1: date,
    end1: date,
    start2: date,
    end2: date,
) -> PeriodComparison:
    """`start1..end1` is the current period, `start2..end2` the baseline. Both inclusive."""
    return _compare(
        transactions,
        lambda d: start1 <= d <= end1,
        lambda d: start2 <= d <= end2,
    )


def generate_comparison_insights(comparison: PeriodComparison) -> List[str]:
    insights: List[str] = []
    changes = comparison.changes

    if abs(changes["income"]) > NOTABLE_CHANGE:
        direction = "increased" if changes["income"] > 0 else "decreased"
        insights.append(f"💰 Income {direction} by {abs(changes['income']):.1f}%")

    if abs(changes["expense"]) > NOTABLE_CHANGE:
        direction = "increased" if changes["expense"] > 0 else "decreased"
        emoji = "⚠️" if changes["expense"] > 0 else "✅"
        insights.append(f"{emoji} Expenses {direction} by {abs(changes['expense']):.1f}%")

    if changes["balance"] > NOTABLE_BALANCE_CHANGE:
        insights.append(f"🎉 Balance improved by {changes['balance']:.1f}%")
    elif changes["balance"] < -NOTABLE_BALANCE_CHANGE:
        insights.append(f"📉 Balance decreased by {abs(changes['balance']):.1f}%")

    return insights
