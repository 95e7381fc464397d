"""
Price data sources.

Fetch collaborators return a raw response dict for a ticker and start date,
or raise TransportError when the provider cannot be reached.
"""

from .base import PriceDataSource
from .quandl import QuandlDataSource
from .static import StaticDataSource

__all__ = ["PriceDataSource", "QuandlDataSource", "StaticDataSource"]
