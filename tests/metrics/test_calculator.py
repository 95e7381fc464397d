"""Tests for the metrics calculator"""

import pytest
from datetime import date
from unittest.mock import patch

from ticker_report.data.models import PricePoint, PriceSeries
from ticker_report.errors import DivisionByZeroError, InsufficientDataError, MetricsCalculationError
from ticker_report.metrics.calculator import MetricsCalculator


def two_point_series(first, last):
    return PriceSeries((
        PricePoint(date=date(2017, 1, 1), close_price=first),
        PricePoint(date=date(2017, 2, 1), close_price=last),
    ))


class TestMetricsCalculator:
    """Test coordinated metric calculation"""

    def test_calculate(self):
        """Test both metrics and series bounds are reported"""
        metrics = MetricsCalculator().calculate(two_point_series(31.0, 34.0), "AAPL", date(2017, 1, 1))

        assert metrics.ticker == "AAPL"
        assert metrics.roi == pytest.approx(3 / 31)
        assert metrics.max_drawdown == 0.0
        assert metrics.point_count == 2
        assert metrics.first_date == date(2017, 1, 1)
        assert metrics.last_date == date(2017, 2, 1)

    def test_empty_series_propagates(self):
        """Test InsufficientDataError is not wrapped"""
        with pytest.raises(InsufficientDataError):
            MetricsCalculator().calculate(PriceSeries(), "AAPL")

    def test_zero_first_price_propagates(self):
        """Test DivisionByZeroError is not wrapped"""
        with pytest.raises(DivisionByZeroError):
            MetricsCalculator().calculate(two_point_series(0.0, 5.0), "AAPL")

    def test_unexpected_error_wrapped(self):
        """Test unexpected failures become MetricsCalculationError"""
        with patch("ticker_report.metrics.calculator.calculate_max_drawdown", side_effect=RuntimeError("boom")):
            with pytest.raises(MetricsCalculationError) as exc_info:
                MetricsCalculator().calculate(two_point_series(1.0, 2.0), "AAPL")

        assert exc_info.value.metric_name == "max_drawdown"
        assert exc_info.value.calculation_input == {"point_count": 2}
