"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Self

from dotenv import load_dotenv

from trendsignal.domain.models import IndicatorConfig
from trendsignal.errors import ConfigError

DEFAULT_SYMBOLS = ["BBCA", "TLKM", "BBRI"]
DATA_SOURCES = {"yfinance", "csv"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_symbols(value: str | None, default: list[str] | None = None) -> list[str]:
    """Parse comma-separated symbols, upper-cased and de-duplicated."""
    fallback = default or DEFAULT_SYMBOLS
    if not value:
        return list(fallback)
    symbols = [item.strip().upper() for item in value.split(",") if item.strip()]
    return dedupe_symbols(symbols) or list(fallback)


def dedupe_symbols(symbols: list[str]) -> list[str]:
    """Remove duplicate symbols while preserving order."""
    deduped: list[str] = []
    seen: set[str] = set()
    for symbol in symbols:
        if symbol in seen:
            continue
        seen.add(symbol)
        deduped.append(symbol)
    return deduped


def parse_positive_int(value: str | None, default: int, *, field_name: str) -> int:
    """Parse a positive integer env string, falling back to ``default`` when unset."""
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ConfigError(f"{field_name} must be positive")
    return parsed


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings, built once at process start."""

    symbols: list[str] = field(default_factory=lambda: list(DEFAULT_SYMBOLS))
    ticker_suffix: str = ".JK"
    history_period: str = "6mo"
    history_interval: str = "1d"
    data_source: str = "yfinance"
    historical_data_dir: str = "historical_data"
    state_db_path: str = "state/trendsignal.db"
    events_dir: str = "runs"
    log_level: str = "INFO"
    ema_short_period: int = 20
    ema_long_period: int = 50
    rsi_period: int = 14

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables (and a ``.env`` file)."""
        load_dotenv()
        raw = cls(
            symbols=parse_symbols(os.getenv("SYMBOLS")),
            ticker_suffix=str(os.getenv("TICKER_SUFFIX", ".JK")).strip(),
            history_period=str(os.getenv("HISTORY_PERIOD", "6mo")).strip(),
            history_interval=str(os.getenv("HISTORY_INTERVAL", "1d")).strip(),
            data_source=str(os.getenv("DATA_SOURCE", "yfinance")).strip().lower(),
            historical_data_dir=str(os.getenv("HISTORICAL_DATA_DIR", "historical_data")).strip(),
            state_db_path=str(os.getenv("STATE_DB_PATH", "state/trendsignal.db")).strip(),
            events_dir=str(os.getenv("EVENTS_DIR", "runs")).strip(),
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
            ema_short_period=parse_positive_int(
                os.getenv("EMA_SHORT_PERIOD"), 20, field_name="ema_short_period"
            ),
            ema_long_period=parse_positive_int(
                os.getenv("EMA_LONG_PERIOD"), 50, field_name="ema_long_period"
            ),
            rsi_period=parse_positive_int(os.getenv("RSI_PERIOD"), 14, field_name="rsi_period"),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        overrides = {key: value for key, value in kwargs.items() if value is not None}
        updated = replace(self, **overrides)
        return updated.validate()

    def indicator_config(self) -> IndicatorConfig:
        return IndicatorConfig(
            ema_short_period=self.ema_short_period,
            ema_long_period=self.ema_long_period,
            rsi_period=self.rsi_period,
        )

    def validate(self) -> Self:
        """Validate settings fields."""
        if not self.symbols:
            raise ConfigError("at least one symbol is required")
        if self.data_source not in DATA_SOURCES:
            supported = ", ".join(sorted(DATA_SOURCES))
            raise ConfigError(f"data_source must be one of {supported}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(sorted(LOG_LEVELS))}")
        if not self.history_period:
            raise ConfigError("history_period must not be empty")
        if not self.state_db_path:
            raise ConfigError("state_db_path must not be empty")
        try:
            self.indicator_config()
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        return self
