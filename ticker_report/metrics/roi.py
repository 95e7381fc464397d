"""ROI (Return on Investment) calculation"""

from ticker_report.data.models import PriceSeries
from ticker_report.errors import DivisionByZeroError, InsufficientDataError


def return_on_investment(initial_price: float, final_price: float) -> float:
    """
    Calculate return between two prices

    ROI = (final - initial) / initial

    Args:
        initial_price: Price at the start of the period
        final_price: Price at the end of the period

    Returns:
        Unrounded ROI fraction (0.5 means +50%)

    Raises:
        DivisionByZeroError: If initial_price is zero
    """
    if initial_price == 0:
        raise DivisionByZeroError("Cannot compute ROI from a zero initial price", metric_name="roi")

    return (final_price - initial_price) / initial_price


def calculate_roi(series: PriceSeries) -> float:
    """
    Calculate ROI between the first and last close of a series

    Args:
        series: Price series in chronological order

    Returns:
        Unrounded ROI fraction

    Raises:
        InsufficientDataError: If the series is empty
        DivisionByZeroError: If the first close is zero
    """
    if len(series) == 0:
        raise InsufficientDataError(
            "ROI requires at least one price point",
            required_count=1,
            available_count=0
        )

    return return_on_investment(series.first.close_price, series.last.close_price)
