#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ticker_report.config.loader import ConfigLoader
from ticker_report.config.validation import ConfigValidator, ValidationError


def validate_ticker_config(loader: ConfigLoader, ticker: str) -> List[ValidationError]:
    """Validate merged configuration for a specific ticker."""
    config = loader.merge_config(ticker)
    return ConfigValidator.validate_config(config)


def configured_tickers(loader: ConfigLoader) -> List[str]:
    """List tickers that carry overrides in tickers.yaml."""
    tickers_file = loader.config_dir / "tickers.yaml"
    if not tickers_file.exists():
        return []

    with open(tickers_file) as f:
        data = yaml.safe_load(f) or {}
    return sorted((data.get("tickers") or {}).keys())


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"Validating ticker report configuration in {loader.config_dir}...")

    # Unknown ticker exercises the plain defaults
    tickers = configured_tickers(loader) + ["UNKNOWN"]

    all_valid = True

    for ticker in tickers:
        try:
            errors = validate_ticker_config(loader, ticker)
        except yaml.YAMLError as e:
            print(f"  {ticker}: cannot read tickers.yaml: {e}")
            all_valid = False
            continue

        if errors:
            print(f"  {ticker}: {len(errors)} validation errors")
            for error in errors:
                print(f"    - {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"  {ticker}: ok")

    # Call-level overrides sit on top of ticker overrides
    overrides = {"fetch": {"max_retries": 0}, "report": {"decimals": 2}}
    errors = ConfigValidator.validate_config(loader.merge_config("AAPL", overrides))
    if errors:
        print("  call overrides: failed")
        for error in errors:
            print(f"    - {error.field}: {error.message}")
        all_valid = False
    else:
        print("  call overrides: ok")

    if all_valid:
        print("All configuration validation passed")
        sys.exit(0)
    else:
        print("Configuration validation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
