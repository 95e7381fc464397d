"""Tests for maximum drawdown calculation"""

import random
import pytest
from datetime import date, timedelta

from ticker_report.data.models import PricePoint, PriceSeries
from ticker_report.errors import InsufficientDataError
from ticker_report.metrics.drawdown import calculate_max_drawdown


def make_series(*prices):
    """Build a daily series starting 2017-01-01"""
    start = date(2017, 1, 1)
    return PriceSeries(tuple(
        PricePoint(date=start + timedelta(days=i), close_price=float(price))
        for i, price in enumerate(prices)
    ))


class TestMaxDrawdown:
    """Test max drawdown calculation"""

    def test_reference_case(self):
        """Test peak 120 -> trough 60 gives 50%"""
        assert calculate_max_drawdown(make_series(100, 80, 120, 60, 110)) == 0.5

    def test_single_point(self):
        """Test single point has no drawdown and does not raise"""
        assert calculate_max_drawdown(make_series(100)) == 0

    def test_empty_series(self):
        """Test empty series raises InsufficientDataError"""
        with pytest.raises(InsufficientDataError):
            calculate_max_drawdown(PriceSeries())

    def test_non_decreasing(self):
        """Test non-decreasing series has exactly zero drawdown"""
        assert calculate_max_drawdown(make_series(10, 10, 11, 15, 15, 20)) == 0

    def test_flat_series(self):
        """Test equal closes are not a drawdown"""
        assert calculate_max_drawdown(make_series(50, 50, 50)) == 0

    def test_earlier_drawdown_larger(self):
        """Test an early deep drawdown survives a later new peak"""
        series = make_series(100, 40, 200, 180)
        assert calculate_max_drawdown(series) == pytest.approx(0.6)

    def test_trough_measured_from_running_peak(self):
        """Test drawdown uses the highest peak so far, not the first price"""
        series = make_series(100, 150, 90)
        assert calculate_max_drawdown(series) == pytest.approx(0.4)

    def test_zero_close_after_peak(self):
        """Test a zero close after a positive peak is a 100% drawdown"""
        assert calculate_max_drawdown(make_series(100, 50, 0)) == 1.0

    def test_zero_first_price(self):
        """Test zero peak is skipped until a positive close appears"""
        series = make_series(0, 0, 10, 5)
        assert calculate_max_drawdown(series) == 0.5

    def test_all_zero(self):
        """Test all-zero series has no computable drawdown"""
        assert calculate_max_drawdown(make_series(0, 0, 0)) == 0

    def test_bounded_between_zero_and_one(self):
        """Test drawdown stays in [0, 1] for random series"""
        rng = random.Random(7)
        for _ in range(200):
            prices = [rng.uniform(0, 500) for _ in range(rng.randint(1, 40))]
            result = calculate_max_drawdown(make_series(*prices))
            assert 0.0 <= result <= 1.0
