"""Metrics calculator coordinating ROI and max drawdown"""

from datetime import date
from typing import Optional

import structlog

from ..data.models import PriceSeries
from ..errors import (
    DivisionByZeroError,
    InsufficientDataError,
    MetricsCalculationError,
)
from ..models.report import ReportMetrics
from .drawdown import calculate_max_drawdown
from .roi import calculate_roi

logger = structlog.get_logger(__name__)


class MetricsCalculator:
    """
    Runs every report metric over one price series
    """

    def calculate(self, series: PriceSeries, ticker: str,
                  start_date: Optional[date] = None) -> ReportMetrics:
        """
        Calculate ROI and max drawdown for a series

        Args:
            series: Reshaped price series
            ticker: Ticker the series belongs to
            start_date: Requested start date, for reporting

        Returns:
            ReportMetrics with unrounded fractions

        Raises:
            InsufficientDataError: If the series is empty
            DivisionByZeroError: If the first close is zero
            MetricsCalculationError: On any unexpected calculation failure
        """
        roi = self._run("roi", calculate_roi, series)
        max_drawdown = self._run("max_drawdown", calculate_max_drawdown, series)

        logger.debug(
            "Metrics calculated",
            ticker=ticker,
            roi=roi,
            max_drawdown=max_drawdown,
            point_count=len(series)
        )

        return ReportMetrics(
            ticker=ticker,
            roi=roi,
            max_drawdown=max_drawdown,
            point_count=len(series),
            start_date=start_date,
            first_date=series.first.date,
            last_date=series.last.date,
        )

    def _run(self, metric_name: str, func, series: PriceSeries) -> float:
        try:
            return func(series)
        except (InsufficientDataError, DivisionByZeroError):
            raise
        except Exception as e:
            raise MetricsCalculationError(
                f"{metric_name} calculation failed: {str(e)}",
                metric_name=metric_name,
                calculation_input={"point_count": len(series)}
            ) from e
