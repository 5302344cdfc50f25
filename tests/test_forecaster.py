"""Tests for least-squares expense forecasting."""

import pytest

from moneyhelper.domain.entities import MonthlyExpensePoint
from moneyhelper.domain.forecaster import (
    INSUFFICIENT_DATA,
    INVALID_INPUT,
    ZERO_DENOMINATOR,
    ExpenseForecaster,
    calculate_regression,
    forecast,
    predict_next_value,
)


def points(*totals):
    return [MonthlyExpensePoint(month_index=i, total=t) for i, t in enumerate(totals, start=1)]


class TestCalculateRegression:
    """Tests for calculate_regression."""

    def test_linear_growth(self):
        result = calculate_regression([1, 2], [100, 200])

        assert result.valid
        assert result.slope == pytest.approx(100)
        assert result.intercept == pytest.approx(0)
        assert result.predicted_next == pytest.approx(300)
        assert result.failure_reason is None

    def test_three_points(self):
        result = calculate_regression([1, 2, 3], [100, 110, 130])

        assert result.slope == pytest.approx(15)
        assert result.intercept == pytest.approx(250 / 3)
        assert result.predicted_next == pytest.approx(60 + 250 / 3)

    def test_flat_series(self):
        result = calculate_regression([1, 2, 3], [500, 500, 500])

        assert result.slope == pytest.approx(0)
        assert result.predicted_next == pytest.approx(500)

    def test_negative_prediction_clamped(self):
        """A falling trend never predicts negative spending."""
        result = calculate_regression([1, 2], [10, 1])

        assert result.valid
        assert result.slope == pytest.approx(-9)
        assert result.intercept == pytest.approx(19)
        assert result.predicted_next == 0

    def test_next_x_follows_last_step(self):
        """The next x is the last x plus the last gap."""
        result = calculate_regression([2, 4], [10, 20])

        assert result.slope == pytest.approx(5)
        assert result.predicted_next == pytest.approx(30)

    def test_identical_x_values(self):
        result = calculate_regression([1, 1], [10, 20])

        assert not result.valid
        assert result.failure_reason == ZERO_DENOMINATOR
        assert result.slope is None
        assert result.predicted_next is None

    def test_single_point(self):
        result = calculate_regression([1], [100])
        assert result.failure_reason == INSUFFICIENT_DATA

    def test_empty_input(self):
        result = calculate_regression([], [])
        assert result.failure_reason == INSUFFICIENT_DATA

    def test_missing_input(self):
        assert calculate_regression(None, [1, 2]).failure_reason == INVALID_INPUT
        assert calculate_regression([1, 2], None).failure_reason == INVALID_INPUT

    def test_length_mismatch(self):
        result = calculate_regression([1, 2, 3], [10, 20])
        assert not result.valid
        assert result.failure_reason == INVALID_INPUT


class TestForecast:
    """Tests for forecasting from monthly points."""

    def test_forecast_points(self):
        result = forecast(points(1000, 1200, 1400))

        assert result.valid
        assert result.predicted_next == pytest.approx(1600)

    def test_points_not_resorted(self):
        """Points are used in the order given."""
        result = forecast(
            [
                MonthlyExpensePoint(month_index=2, total=200),
                MonthlyExpensePoint(month_index=1, total=100),
            ]
        )

        assert result.slope == pytest.approx(100)
        assert result.predicted_next == pytest.approx(0)

    def test_forecast_none(self):
        assert forecast(None).failure_reason == INVALID_INPUT

    def test_forecaster_object(self):
        result = ExpenseForecaster().forecast(points(300, 300))
        assert result.predicted_next == pytest.approx(300)

    def test_forecast_is_deterministic(self):
        history = points(120.5, 98.25, 143.0, 150.75)
        assert forecast(history) == forecast(history)


class TestPredictNextValue:
    """Tests for predict_next_value."""

    def test_predict(self):
        assert predict_next_value([100, 200]) == pytest.approx(300)

    def test_not_enough_values(self):
        assert predict_next_value([100]) is None
        assert predict_next_value([]) is None
        assert predict_next_value(None) is None

    def test_clamped(self):
        assert predict_next_value([500, 100]) == 0
