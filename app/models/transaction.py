import datetime as dt
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(BaseModel):
    """A single income or expense record as handed to the analytics engine.

    ``amount`` is always a magnitude; the sign is implied by ``type``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: dt.date
    type: TransactionType
    category: str = ""
    amount: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, value: Any) -> Any:
        return value or ""

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME


class DateRange(BaseModel):
    start: dt.date
    end: dt.date


class CustomPeriodRequest(BaseModel):
    transactions: list[Transaction]
    current: DateRange
    previous: DateRange


RawRecord = Union[Transaction, Mapping[str, Any]]


def parse_transactions(records: Optional[Iterable[RawRecord]]) -> Tuple[Transaction, ...]:
    """
    Validate raw records once at the boundary.
    Already-built Transaction objects pass through untouched; anything else
    raises pydantic.ValidationError.
    """
    if not records:
        return ()
    return tuple(
        record if isinstance(record, Transaction) else Transaction.model_validate(record)
        for record in records
    )
