"""Core price and signal domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

import pandas as pd


class SignalType(StrEnum):
    """Discrete trading signals."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class Bar:
    """One trading day of OHLCV data."""

    date: date
    close: float
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: float | None = None


@dataclass(frozen=True)
class PriceSeries:
    """Chronologically ordered bars for one ticker, oldest first."""

    ticker: str
    bars: tuple[Bar, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def last_date(self) -> date | None:
        if not self.bars:
            return None
        return self.bars[-1].date

    def closes(self) -> pd.Series:
        """Return closing prices indexed by date."""
        return pd.Series(
            [bar.close for bar in self.bars],
            index=[bar.date for bar in self.bars],
            dtype="float64",
            name="close",
        )

    def is_sufficient(self, window: int) -> bool:
        return len(self.bars) >= window


@dataclass(frozen=True)
class IndicatorConfig:
    """Indicator periods used by the engine."""

    ema_short_period: int = 20
    ema_long_period: int = 50
    rsi_period: int = 14

    def __post_init__(self) -> None:
        if self.ema_short_period <= 0 or self.ema_long_period <= 0:
            raise ValueError("EMA periods must be positive")
        if self.rsi_period <= 0:
            raise ValueError("rsi_period must be positive")
        if self.ema_short_period >= self.ema_long_period:
            raise ValueError("ema_short_period must be less than ema_long_period")


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Latest indicator values as of the final bar of a series."""

    ema_short: float | None
    ema_long: float | None
    rsi: float | None
    as_of_date: date

    def is_complete(self) -> bool:
        return self.ema_short is not None and self.ema_long is not None and self.rsi is not None


@dataclass(frozen=True)
class SignalVerdict:
    """Classifier output for one snapshot."""

    signal_type: SignalType
    confidence: int
    reason: str
