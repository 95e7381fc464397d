"""Risk/return metrics over closing-price series"""

from .calculator import MetricsCalculator
from .drawdown import calculate_max_drawdown
from .roi import calculate_roi, return_on_investment

__all__ = [
    "MetricsCalculator",
    "calculate_max_drawdown",
    "calculate_roi",
    "return_on_investment",
]
