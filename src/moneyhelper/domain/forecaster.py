"""Least-squares forecasting of monthly category spending."""

import logging
from collections.abc import Sequence
from typing import Optional

from moneyhelper.domain.entities import MonthlyExpensePoint, RegressionResult

logger = logging.getLogger(__name__)

MIN_POINTS = 2
DENOMINATOR_EPSILON = 1e-10

INVALID_INPUT = "invalid input data"
INSUFFICIENT_DATA = "insufficient data; need at least 2 months"
ZERO_DENOMINATOR = "division by zero computing slope"


def calculate_regression(
    x_values: Optional[Sequence[float]], y_values: Optional[Sequence[float]]
) -> RegressionResult:
    """Fit y = slope * x + intercept and predict the next point.

    The next x is the last x plus the gap between the last two x values.
    Negative predictions are clamped to zero.

    Args:
        x_values: Month indices in chronological order
        y_values: Totals paired with ``x_values``

    Returns:
        RegressionResult, invalid with a reason when no fit is possible
    """
    if x_values is None or y_values is None or len(x_values) != len(y_values):
        return RegressionResult.failure(INVALID_INPUT)

    n = len(x_values)
    if n < MIN_POINTS:
        return RegressionResult.failure(INSUFFICIENT_DATA)

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for x, y in zip(x_values, y_values):
        x = float(x)
        y = float(y)
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x

    logger.debug(
        "n=%d, sum_x=%.2f, sum_y=%.2f, sum_xy=%.2f, sum_x2=%.2f",
        n, sum_x, sum_y, sum_xy, sum_x2,
    )

    denominator = n * sum_x2 - sum_x * sum_x
    if abs(denominator) < DENOMINATOR_EPSILON:
        return RegressionResult.failure(ZERO_DENOMINATOR)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    last_x = float(x_values[-1])
    step = last_x - float(x_values[-2])
    predicted = slope * (last_x + step) + intercept

    if predicted < 0:
        logger.warning("Negative prediction %.2f clamped to 0", predicted)
        predicted = 0.0

    logger.debug("Regression: slope=%.2f, intercept=%.2f, next=%.2f", slope, intercept, predicted)
    return RegressionResult(
        valid=True,
        slope=slope,
        intercept=intercept,
        predicted_next=predicted,
    )


def forecast(points: Optional[Sequence[MonthlyExpensePoint]]) -> RegressionResult:
    """Forecast next month's total from chronologically ordered points.

    The points are used in the given order and are not re-sorted.
    """
    if points is None:
        return RegressionResult.failure(INVALID_INPUT)
    return calculate_regression(
        [point.month_index for point in points],
        [point.total for point in points],
    )


def predict_next_value(y_values: Optional[Sequence[float]]) -> Optional[float]:
    """Predict the value following a dense series of monthly totals.

    Returns:
        Predicted value, or None when there are fewer than two values
    """
    if y_values is None or len(y_values) < MIN_POINTS:
        return None
    result = calculate_regression(list(range(1, len(y_values) + 1)), y_values)
    return result.predicted_next if result.valid else None


class ExpenseForecaster:
    """Object wrapper around ``forecast`` for callers that inject strategies."""

    def forecast(self, points: Optional[Sequence[MonthlyExpensePoint]]) -> RegressionResult:
        """Forecast next month's total. See ``forecast``."""
        return forecast(points)
