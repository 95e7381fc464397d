"""Maximum drawdown calculation"""

from ticker_report.data.models import PriceSeries
from ticker_report.errors import InsufficientDataError


def calculate_max_drawdown(series: PriceSeries) -> float:
    """
    Calculate the largest peak-to-trough decline of a series

    Single forward pass keeping the running peak. The peak only moves up on a
    strictly higher close. While the peak is zero no drawdown can be measured,
    so those points are skipped until a positive close appears.

    Args:
        series: Price series in chronological order

    Returns:
        Maximum drawdown as a fraction in [0, 1] (0.5 means -50% from peak)

    Raises:
        InsufficientDataError: If the series is empty
    """
    if len(series) == 0:
        raise InsufficientDataError(
            "Max drawdown requires at least one price point",
            required_count=1,
            available_count=0
        )

    peak = series[0].close_price
    max_drawdown = 0.0

    for point in series.points[1:]:
        price = point.close_price
        if price > peak:
            peak = price
        elif peak > 0:
            drawdown = (peak - price) / peak
            if drawdown > max_drawdown:
                max_drawdown = drawdown

    return max_drawdown
