"""
Transaction classification and time-bucketing helpers shared by every analyzer.
"""
import math
from datetime import date
from typing import Iterable, Iterator

from dateutil.relativedelta import relativedelta

from app.models.transaction import Transaction

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

TRANSFER_PREFIX = "transfer "


def is_transfer(record: Transaction) -> bool:
    """Transfers move money between the user's own accounts and never count as income/expense."""
    return (record.category or "").lower().startswith(TRANSFER_PREFIX)


def non_transfers(transactions: Iterable[Transaction]) -> Iterator[Transaction]:
    return (t for t in transactions if not is_transfer(t))


def expenses_only(transactions: Iterable[Transaction]) -> Iterator[Transaction]:
    return (t for t in transactions if t.is_expense and not is_transfer(t))


def day_name(value: date) -> str:
    return DAY_NAMES[value.weekday()]


def week_number(value: date) -> int:
    # Week 1 starts on January 1st, whatever weekday that is (not ISO-8601).
    first_day = date(value.year, 1, 1)
    past_days = (value - first_day).days
    first_weekday = (first_day.weekday() + 1) % 7  # Sunday == 0
    return math.ceil((past_days + first_weekday + 1) / 7)


def week_key(value: date) -> str:
    return f"{value.year}-W{week_number(value)}"


def month_key(value: date) -> str:
    return value.isoformat()[:7]


def shift_months(value: date, months: int) -> date:
    """Calendar month arithmetic; the day is clamped to the target month's length."""
    return value + relativedelta(months=months)


def percentage_change(old_value: float, new_value: float) -> float:
    if old_value == 0:
        return 100.0 if new_value > 0 else 0.0
    return (new_value - old_value) / old_value * 100


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
