#!/usr/bin/env python3
"""
Basic Usage Example - Ticker ROI and Max Drawdown Report

This script runs the report pipeline offline with canned price data. It shows
how to:
- Initialize the engine with a merged configuration
- Pass any callable as the fetch collaborator
- Inspect run results for success and for each error outcome

Run: python examples/basic_usage.py
"""

import sys
from pathlib import Path
from typing import Any, Dict

sys.path.insert(0, str(Path(__file__).parent.parent))

from ticker_report.config.loader import ConfigLoader
from ticker_report.engine import ReportEngine
from ticker_report.errors import FetchFailedError
from ticker_report.logging import configure_logging
from ticker_report.sources import StaticDataSource


def create_monthly_closes(closes: Dict[str, float]) -> Dict[str, Any]:
    """Create a response in the row format the pipeline validates."""
    return {"data": [{"date": day, "close": close} for day, close in closes.items()]}


def main():
    configure_logging(level="WARNING")

    loader = ConfigLoader.create()
    engine = ReportEngine(loader.merge_config("AAPL"))

    print("1. Successful report")
    response = create_monthly_closes({
        "2017-08-01": 150.05,
        "2017-09-01": 164.05,
        "2017-10-02": 154.12,
        "2017-11-01": 166.89,
    })
    result = engine.run(StaticDataSource(response), "aapl", "2017-08-01", "stdout")
    print(f"   status={result.status.value} roi={result.metrics.roi:.4f} "
          f"max_drawdown={result.metrics.max_drawdown:.4f}")

    print("\n2. Transient failures are retried")
    flaky = StaticDataSource(response, failures=2)
    result = engine.run(flaky, "aapl", "2017-08-01", "stdout")
    print(f"   status={result.status.value} after {len(flaky.calls)} calls")

    print("\n3. Provider rejects the ticker")
    rejected = StaticDataSource({"quandl_error": {"code": "QECx02", "message": "Unknown ticker"}})
    result = engine.run(rejected, "nope", "2017-08-01", "stdout")
    print(f"   status={result.status.value} message={result.message!r}")

    print("\n4. Unexpected payload shape")
    result = engine.run(StaticDataSource({"dataset": None}), "aapl", "2017-08-01", "stdout")
    print(f"   status={result.status.value} message={result.message!r}")

    print("\n5. Provider never reachable")
    try:
        engine.run(StaticDataSource(response, failures=10), "aapl", "2017-08-01", "stdout")
    except FetchFailedError as e:
        print(f"   gave up after {e.attempts} attempts: {e.__cause__}")


if __name__ == "__main__":
    main()
