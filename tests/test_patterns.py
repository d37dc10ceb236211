from datetime import date

from app.models.transaction import parse_transactions
from app.utils.classifier import DAY_NAMES
from app.utils.patterns import (
    analyze_spending_by_day,
    analyze_spending_by_week,
    peak_spending_times,
    spending_heatmap,
)

# 2024-01-01 is a Monday
sample_transactions = parse_transactions([
    {"date": "2024-01-01", "type": "expense", "category": "Food", "amount": 100.0},
    {"date": "2024-01-08", "type": "expense", "category": "Food", "amount": 50.0},
    {"date": "2024-01-15", "type": "expense", "category": "Food", "amount": 150.0},
    {"date": "2024-01-02", "type": "expense", "category": "Transport", "amount": 80.0},
    {"date": "2024-01-09", "type": "expense", "category": "Transport", "amount": 80.0},
    {"date": "2024-01-03", "type": "income", "category": "Salary", "amount": 5000.0},
    {"date": "2024-01-04", "type": "expense", "category": "Transfer Out", "amount": 9000.0},
])


def test_peak_day_is_highest_average():
    result = analyze_spending_by_day(sample_transactions)
    assert result.peak_day == "Monday"
    assert result.peak_average == 100.0
    assert result.counts["Monday"] == 3
    assert result.averages["Tuesday"] == 80.0


def test_day_breakdown_covers_every_weekday_without_division_errors():
    result = analyze_spending_by_day(sample_transactions)
    assert list(result.averages) == list(DAY_NAMES)
    assert result.averages["Sunday"] == 0.0
    # income and transfers are ignored
    assert result.averages["Wednesday"] == 0.0
    assert result.averages["Thursday"] == 0.0


def test_peak_day_ties_keep_earlier_weekday():
    transactions = parse_transactions([
        {"date": "2024-01-03", "type": "expense", "category": "Food", "amount": 40.0},
        {"date": "2024-01-02", "type": "expense", "category": "Food", "amount": 40.0},
    ])
    assert analyze_spending_by_day(transactions).peak_day == "Tuesday"


def test_week_totals_and_peak_week():
    result = analyze_spending_by_week(sample_transactions)
    assert result.week_totals == {"2024-W1": 180.0, "2024-W2": 130.0, "2024-W3": 150.0}
    assert result.peak_week == "2024-W1"
    assert result.peak_total == 180.0


def test_empty_input_defaults():
    peak = peak_spending_times([])
    assert peak.peak_day == ""
    assert peak.peak_day_average == 0.0
    assert peak.peak_week == ""
    assert peak.peak_week_total == 0.0
    assert all(value == 0.0 for value in peak.day_breakdown.values())


def test_heatmap_window_is_inclusive():
    transactions = parse_transactions([
        {"date": "2023-12-14", "type": "expense", "category": "Food", "amount": 1.0},
        {"date": "2023-12-15", "type": "expense", "category": "Food", "amount": 2.0},
        {"date": "2024-03-15", "type": "expense", "category": "Food", "amount": 3.0},
        {"date": "2024-03-15", "type": "expense", "category": "Rent", "amount": 4.0},
        {"date": "2024-03-16", "type": "expense", "category": "Food", "amount": 5.0},
        {"date": "2024-02-01", "type": "income", "category": "Salary", "amount": 6.0},
        {"date": "2024-02-02", "type": "expense", "category": "transfer out", "amount": 7.0},
    ])
    heatmap = spending_heatmap(transactions, months=3, today=date(2024, 3, 15))
    assert heatmap == {"2023-12-15": 2.0, "2024-03-15": 7.0}


def test_peak_spending_times_is_idempotent():
    first = peak_spending_times(sample_transactions).to_dict()
    second = peak_spending_times(sample_transactions).to_dict()
    assert first == second
    assert first["peak_week"] == "2024-W1"
