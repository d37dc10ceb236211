from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from app.core.config import Settings, settings as default_settings
from app.models.transaction import RawRecord, Transaction, parse_transactions
from app.utils import comparison, forecast, insights, patterns, trends

logger = logging.getLogger(__name__)


class FinanceAnalyzer:
    """
    Configured entry point to the analytics engine, shared by the API routes
    and any other caller holding a user's transaction history.

    Raw records are validated once on the way in; every analysis is then a pure
    function of those records and the configured windows/thresholds.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        forecast_model: Optional[str] = None,
    ) -> None:
        self._config = config or default_settings
        self._forecast_model = forecast_model or self._config.FORECAST_MODEL
        # Fail fast on a misconfigured model name
        forecast.get_strategy(self._forecast_model)

    @staticmethod
    def load_transactions(records: Optional[Iterable[RawRecord]]) -> List[Transaction]:
        transactions = list(parse_transactions(records))
        logger.debug(f"Validated {len(transactions)} transactions")
        return transactions

    def strategy(self, name: Optional[str] = None) -> forecast.ForecastStrategy:
        name = name or self._forecast_model
        if name == forecast.MovingAverageStrategy.name:
            return forecast.MovingAverageStrategy(periods=self._config.MOVING_AVERAGE_PERIODS)
        return forecast.get_strategy(name)

    def peak_spending_times(self, records: Iterable[RawRecord]) -> Dict[str, Any]:
        return patterns.peak_spending_times(self.load_transactions(records)).to_dict()

    def spending_heatmap(
        self,
        records: Iterable[RawRecord],
        months: Optional[int] = None,
        today: Optional[date] = None,
    ) -> Dict[str, float]:
        return patterns.spending_heatmap(
            self.load_transactions(records),
            months=months or self._config.HEATMAP_MONTHS,
            today=today,
        )

    def category_trends(
        self,
        records: Iterable[RawRecord],
        months: Optional[int] = None,
        today: Optional[date] = None,
    ) -> Dict[str, Dict[str, Any]]:
        table = trends.analyze_category_trends(
            self.load_transactions(records),
            months=months or self._config.TREND_MONTHS,
            today=today,
        )
        return {
            category: {
                "months": series,
                "change": trends.category_mom_change(series),
                "trend": trends.trend_direction(series),
            }
            for category, series in table.items()
        }

    def growing_categories(
        self,
        records: Iterable[RawRecord],
        threshold: Optional[float] = None,
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        items = trends.identify_growing_categories(
            self.load_transactions(records),
            threshold=self._config.GROWTH_THRESHOLD if threshold is None else threshold,
            months=self._config.GROWTH_WINDOW_MONTHS,
            today=today,
        )
        return [item.to_dict() for item in items]

    def declining_categories(
        self,
        records: Iterable[RawRecord],
        threshold: Optional[float] = None,
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        items = trends.identify_declining_categories(
            self.load_transactions(records),
            threshold=self._config.DECLINE_THRESHOLD if threshold is None else threshold,
            months=self._config.GROWTH_WINDOW_MONTHS,
            today=today,
        )
        return [item.to_dict() for item in items]

    def forecast(self, records: Iterable[RawRecord], model: Optional[str] = None) -> Dict[str, Any]:
        return forecast.predict_next_month_spending(
            self.load_transactions(records), self.strategy(model)
        ).to_dict()

    def compare_month_over_month(
        self, records: Iterable[RawRecord], today: Optional[date] = None
    ) -> Dict[str, Any]:
        return comparison.compare_month_over_month(self.load_transactions(records), today).to_dict()

    def compare_year_over_year(
        self, records: Iterable[RawRecord], today: Optional[date] = None
    ) -> Dict[str, Any]:
        return comparison.compare_year_over_year(self.load_transactions(records), today).to_dict()

    def compare_custom_period(
        self,
        records: Iterable[RawRecord],
        start1: date,
        end1: date,
        start2: date,
        end2: date,
    ) -> Dict[str, Any]:
        return comparison.compare_custom_period(
            self.load_transactions(records), start1, end1, start2, end2
        ).to_dict()

    def insights(self, records: Iterable[RawRecord], today: Optional[date] = None) -> List[Dict[str, str]]:
        return [
            item.to_dict()
            for item in insights.generate_insights(
                self.load_transactions(records),
                today=today,
                trend_threshold=self._config.INSIGHT_TREND_THRESHOLD,
                trend_months=self._config.GROWTH_WINDOW_MONTHS,
                strategy=self.strategy(),
            )
        ]

    def summarize(
        self,
        records: Optional[Iterable[RawRecord]],
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        transactions = self.load_transactions(records)
        logger.debug(f"Summarizing {len(transactions)} transactions")

        return {
            "transaction_count": len(transactions),
            "peak_spending": self.peak_spending_times(transactions),
            "category_trends": self.category_trends(transactions, today=today),
            "growing_categories": self.growing_categories(transactions, today=today),
            "declining_categories": self.declining_categories(transactions, today=today),
            "forecast": self.forecast(transactions),
            "trend_forecast": self.forecast(transactions, model=forecast.LinearTrendStrategy.name),
            "month_over_month": self.compare_month_over_month(transactions, today),
            "year_over_year": self.compare_year_over_year(transactions, today),
            "insights": self.insights(transactions, today),
        }
