"""
Ticker Report - Closing Price Risk/Return Reporter

Fetches a historical closing-price series for a ticker, validates and reshapes
the response, computes return on investment and maximum drawdown, and
dispatches a short report to a notification destination.
"""

__version__ = "0.1.0"
__author__ = "Ticker Report Team"
