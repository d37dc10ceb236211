from datetime import date

from app.models.transaction import parse_transactions
from app.utils.comparison import compare_month_over_month, generate_comparison_insights
from app.utils.insights import format_currency, generate_insights
from app.utils.trends import identify_growing_categories

TODAY = date(2024, 3, 15)

# 2024-02-05 and 2024-03-04 are Mondays, 2024-02-06 and 2024-03-05 Tuesdays
sample_transactions = parse_transactions([
    {"date": "2024-02-01", "type": "income", "category": "Salary", "amount": 1000.0},
    {"date": "2024-03-01", "type": "income", "category": "Salary", "amount": 1000.0},
    {"date": "2024-02-05", "type": "expense", "category": "Food", "amount": 100.0},
    {"date": "2024-03-04", "type": "expense", "category": "Food", "amount": 200.0},
    {"date": "2024-02-06", "type": "expense", "category": "Transport", "amount": 400.0},
    {"date": "2024-03-05", "type": "expense", "category": "Transport", "amount": 100.0},
    {"date": "2024-03-06", "type": "expense", "category": "Transfer Out", "amount": 50000.0},
])


def test_format_currency_uses_indonesian_grouping():
    assert format_currency(1217) == "Rp 1.217"
    assert format_currency(1234567) == "Rp 1.234.567"
    assert format_currency(250) == "Rp 250"
    assert format_currency(1234.5) == "Rp 1.234,50"


def test_insights_follow_rule_order():
    insights = [item.to_dict() for item in generate_insights(sample_transactions, today=TODAY)]
    assert insights == [
        {"type": "pattern", "icon": "🎯", "message": "Your highest spending day is Tuesday (avg Rp 250)"},
        {"type": "trend", "icon": "📈", "message": "Spending on 'Food' increased by 100.0% this month"},
        {"type": "trend", "icon": "✅", "message": "Great job! 'Transport' expenses decreased by 75.0%"},
        {"type": "prediction", "icon": "🔮", "message": "Expected expenses next month: Rp 400 (medium confidence)"},
        {"type": "comparison", "icon": "📊", "message": "✅ Expenses decreased by 40.0%"},
        {"type": "comparison", "icon": "📊", "message": "🎉 Balance improved by 40.0%"},
    ]


def test_single_month_has_no_forecast_or_trend_insight():
    transactions = parse_transactions([
        {"date": "2024-03-04", "type": "expense", "category": "Food", "amount": 200.0},
    ])
    insights = generate_insights(transactions, today=TODAY)
    assert [item.type for item in insights] == ["pattern", "comparison"]
    assert insights[1].message == "⚠️ Expenses increased by 100.0%"


def test_no_transactions_no_insights():
    assert generate_insights([], today=TODAY) == []


def test_modest_growth_is_left_out_of_the_summary_view():
    transactions = parse_transactions([
        {"date": "2024-02-05", "type": "expense", "category": "Food", "amount": 100.0},
        {"date": "2024-03-04", "type": "expense", "category": "Food", "amount": 112.0},
    ])
    growing = identify_growing_categories(transactions, today=TODAY)
    assert [item.category for item in growing] == ["Food"]

    insights = generate_insights(transactions, today=TODAY)
    assert "trend" not in [item.type for item in insights]


def test_balance_message_needs_more_than_twenty_percent():
    transactions = parse_transactions([
        {"date": "2024-02-01", "type": "income", "category": "Salary", "amount": 1000.0},
        {"date": "2024-02-05", "type": "expense", "category": "Rent", "amount": 500.0},
        {"date": "2024-03-01", "type": "income", "category": "Salary", "amount": 1100.0},
        {"date": "2024-03-04", "type": "expense", "category": "Rent", "amount": 500.0},
    ])
    comparison = compare_month_over_month(transactions, today=TODAY)
    assert comparison.changes["balance"] == 20.0
    assert generate_comparison_insights(comparison) == []
    assert "comparison" not in [item.type for item in generate_insights(transactions, today=TODAY)]

    cheaper_rent = parse_transactions([
        {"date": "2024-02-01", "type": "income", "category": "Salary", "amount": 1000.0},
        {"date": "2024-02-05", "type": "expense", "category": "Rent", "amount": 500.0},
        {"date": "2024-03-01", "type": "income", "category": "Salary", "amount": 1100.0},
        {"date": "2024-03-04", "type": "expense", "category": "Rent", "amount": 495.0},
    ])
    comparison = compare_month_over_month(cheaper_rent, today=TODAY)
    assert generate_comparison_insights(comparison) == ["🎉 Balance improved by 21.0%"]
