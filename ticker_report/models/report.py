"""Data models for computed report metrics"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional


def to_percent(fraction: float, decimals: int = 1) -> Decimal:
    """
    Convert a fraction to a percentage rounded half away from zero.

    to_percent(0.0967) -> Decimal("9.7")

    Precision grows with the magnitude, so very large returns still quantize.
    Non-finite values are returned unrounded.
    """
    percent = Decimal(repr(fraction)).scaleb(2)
    if not percent.is_finite():
        return percent

    with localcontext() as ctx:
        ctx.prec = max(28, percent.adjusted() + decimals + 2)
        return percent.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ReportMetrics:
    """ROI and maximum drawdown for one ticker and period"""
    ticker: str
    roi: float                  # Unrounded fraction
    max_drawdown: float         # Unrounded fraction in [0, 1]
    point_count: int
    start_date: Optional[date] = None
    first_date: Optional[date] = None
    last_date: Optional[date] = None

    def roi_percent(self, decimals: int = 1) -> Decimal:
        return to_percent(self.roi, decimals)

    def max_drawdown_percent(self, decimals: int = 1) -> Decimal:
        return to_percent(self.max_drawdown, decimals)

    def format_body(self, decimals: int = 1) -> str:
        """Render the two-line report body"""
        return (
            f"ROI: {self.roi_percent(decimals)} %\n"
            f"Max drawdown: {self.max_drawdown_percent(decimals)} %"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "roi": self.roi,
            "max_drawdown": self.max_drawdown,
            "point_count": self.point_count,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "first_date": self.first_date.isoformat() if self.first_date else None,
            "last_date": self.last_date.isoformat() if self.last_date else None,
        }
