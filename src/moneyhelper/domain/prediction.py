"""Prediction domain service."""

import logging
from typing import Optional

from moneyhelper.database.base import Database
from moneyhelper.domain.entities import (
    Category,
    CategoryForecast,
    MonthlyExpensePoint,
    RegressionResult,
)
from moneyhelper.domain.errors import NotFoundError, category_not_found
from moneyhelper.domain.forecaster import ExpenseForecaster
from moneyhelper.utils.date_parser import month_key

logger = logging.getLogger(__name__)

NO_EXPENSE_DATA = "no expense data"


class PredictionService:
    """Service for forecasting and storing next-month spending per category.

    A batch run owns the prediction store for its duration: callers must not
    write predictions concurrently with ``forecast_all_categories``.
    """

    def __init__(self, db: Database, forecaster: Optional[ExpenseForecaster] = None):
        """Initialize prediction service.

        Args:
            db: Database instance
            forecaster: Forecaster to use, the least-squares one if omitted
        """
        self.db = db
        self.forecaster = forecaster or ExpenseForecaster()

    def monthly_points(self, category_id: int) -> list[MonthlyExpensePoint]:
        """Sum a category's expenses per calendar month.

        Months without expenses are skipped; the remaining months are
        numbered 1..n from oldest to newest.
        """
        totals: dict[str, float] = {}
        for expense in self.db.list_expenses(category_id=category_id):
            key = month_key(expense.occurred_at)
            totals[key] = totals.get(key, 0.0) + float(expense.amount)

        return [
            MonthlyExpensePoint(month_index=index, total=totals[key])
            for index, key in enumerate(sorted(totals), start=1)
        ]

    def forecast_category(self, category_id: int) -> CategoryForecast:
        """Forecast next month's spending for one category.

        Nothing is stored.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return self._forecast(category)

    def forecast_all_categories(self) -> list[CategoryForecast]:
        """Recompute stored predictions for every variable category.

        All stored predictions are cleared first, so categories whose
        forecast fails this round keep none.

        Returns:
            One CategoryForecast per variable category, ordered by name
        """
        deleted = self.db.clear_predictions()
        logger.debug("Cleared %d stored predictions", deleted)

        forecasts = []
        for category in self.db.list_categories(include_fixed=False):
            forecast = self._forecast(category)
            forecasts.append(forecast)
            if forecast.valid:
                self.db.upsert_prediction(category.id, forecast.result.predicted_next)

        stored = sum(1 for forecast in forecasts if forecast.valid)
        logger.info("Forecast run finished: %d of %d categories predicted", stored, len(forecasts))
        return forecasts

    def get_all_predictions(self) -> dict[int, float]:
        """Return stored predictions keyed by category ID."""
        return {p.category_id: p.amount for p in self.db.list_predictions()}

    def get_prediction(self, category_id: int) -> Optional[float]:
        """Return the stored prediction for a category, if any."""
        prediction = self.db.get_prediction(category_id)
        return prediction.amount if prediction is not None else None

    def _forecast(self, category: Category) -> CategoryForecast:
        points = self.monthly_points(category.id)
        if not points:
            result = RegressionResult.failure(NO_EXPENSE_DATA)
        else:
            result = self.forecaster.forecast(points)

        if result.valid:
            logger.debug("Prediction for %s: %.2f", category.name, result.predicted_next)
        else:
            logger.debug("No prediction for %s: %s", category.name, result.failure_reason)

        return CategoryForecast(
            category_id=category.id,
            category_name=category.name,
            result=result,
            months=len(points),
        )
