"""
Analytics Router
Thin HTTP wrapper: takes a user's transactions in the request body and returns
the analytics engine's outputs. Nothing is stored.
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.core.config import settings
from app.models.transaction import CustomPeriodRequest, Transaction
from app.utils.analyzer import FinanceAnalyzer
from app.utils.forecast import STRATEGIES

router = APIRouter()
logger = logging.getLogger(__name__)
finance_analyzer = FinanceAnalyzer(settings)


def _analyze(name: str, count: int, action: Callable[[], Any]) -> Any:
    try:
        logger.info(f"Running {name} on {count} transactions")
        return action()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error running {name}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@router.post("/patterns")
def spending_patterns(transactions: List[Transaction]) -> Dict[str, Any]:
    return _analyze(
        "spending patterns", len(transactions),
        lambda: finance_analyzer.peak_spending_times(transactions),
    )


@router.post("/heatmap")
def spending_heatmap(
    transactions: List[Transaction],
    months: Optional[int] = Query(default=None, ge=1),
    today: Optional[date] = None,
) -> Dict[str, float]:
    return _analyze(
        "spending heatmap", len(transactions),
        lambda: finance_analyzer.spending_heatmap(transactions, months=months, today=today),
    )


@router.post("/trends")
def category_trends(
    transactions: List[Transaction],
    months: Optional[int] = Query(default=None, ge=1),
    today: Optional[date] = None,
) -> Dict[str, Any]:
    return _analyze(
        "category trends", len(transactions),
        lambda: finance_analyzer.category_trends(transactions, months=months, today=today),
    )


@router.post("/trends/growing")
def growing_categories(
    transactions: List[Transaction],
    threshold: Optional[float] = None,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    return _analyze(
        "growing categories", len(transactions),
        lambda: finance_analyzer.growing_categories(transactions, threshold=threshold, today=today),
    )


@router.post("/trends/declining")
def declining_categories(
    transactions: List[Transaction],
    threshold: Optional[float] = None,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    return _analyze(
        "declining categories", len(transactions),
        lambda: finance_analyzer.declining_categories(transactions, threshold=threshold, today=today),
    )


@router.post("/forecast")
def forecast_next_month(
    transactions: List[Transaction],
    model: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Next-month expense forecast. `model` is one of the registered strategies
    (moving_average, linear_trend); defaults to the configured model.
    """
    if model is not None and model not in STRATEGIES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown forecast model '{model}'",
        )
    return _analyze(
        "forecast", len(transactions),
        lambda: finance_analyzer.forecast(transactions, model=model),
    )


@router.post("/compare/month")
def compare_month_over_month(
    transactions: List[Transaction],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    return _analyze(
        "month-over-month comparison", len(transactions),
        lambda: finance_analyzer.compare_month_over_month(transactions, today=today),
    )


@router.post("/compare/year")
def compare_year_over_year(
    transactions: List[Transaction],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    return _analyze(
        "year-over-year comparison", len(transactions),
        lambda: finance_analyzer.compare_year_over_year(transactions, today=today),
    )


@router.post("/compare/custom")
def compare_custom_period(request: CustomPeriodRequest) -> Dict[str, Any]:
    return _analyze(
        "custom period comparison", len(request.transactions),
        lambda: finance_analyzer.compare_custom_period(
            request.transactions,
            request.current.start,
            request.current.end,
            request.previous.start,
            request.previous.end,
        ),
    )


@router.post("/insights")
def generate_insights(
    transactions: List[Transaction],
    today: Optional[date] = None,
) -> List[Dict[str, str]]:
    return _analyze(
        "insights", len(transactions),
        lambda: finance_analyzer.insights(transactions, today=today),
    )


@router.post("/summary")
def summarize(
    transactions: List[Transaction],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Every analysis in one response, for dashboards that refresh after a
    transaction is created, updated or deleted.
    """
    summary = _analyze(
        "summary", len(transactions),
        lambda: finance_analyzer.summarize(transactions, today=today),
    )
    logger.info(f"Summary generated: {len(summary['insights'])} insights")
    return summary
