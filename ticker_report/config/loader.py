"""Layered configuration: built-in defaults, per-ticker YAML, call overrides."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import DefaultConfig, get_default_config

TICKERS_FILE = "tickers.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Builds the merged configuration dict for one ticker."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Loader over config_dir, or the repository's config/ directory."""
        if config_dir is None:
            config_dir = Path(__file__).resolve().parent.parent.parent / "config"

        return cls(config_dir=Path(config_dir), defaults=get_default_config())

    def load_ticker_config(self, ticker: str) -> dict[str, Any]:
        """
        Read the overrides for one ticker from tickers.yaml.

        The file maps upper-case symbols under a top-level "tickers" key; a
        missing file or symbol means no overrides.
        """
        path = self.config_dir / TICKERS_FILE
        if not path.exists():
            return {}

        with open(path) as f:
            document = yaml.safe_load(f) or {}

        tickers = document.get("tickers") or {}
        return tickers.get(ticker.upper()) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        ticker: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge the three configuration layers.

        Later layers win key by key:
        1. Built-in defaults
        2. tickers.yaml entry for the ticker
        3. overrides passed by the caller
        """
        merged = asdict(self.defaults)
        for layer in (self.load_ticker_config(ticker), overrides or {}):
            merged = _deep_merge(merged, layer)
        return merged


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)

    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
