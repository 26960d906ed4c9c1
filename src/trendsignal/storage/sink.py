"""Persistence contract used by the pipeline."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from trendsignal.domain.models import Bar


class PersistenceSink(Protocol):
    """Storage API for price rows and their analysis and signal rows.

    Every write raises ``PersistenceError`` on failure.
    """

    def upsert_price(self, ticker: str, bar: Bar) -> None:
        """Insert or replace the price row keyed by (ticker, date)."""

    def get_price_row_key(self, ticker: str, as_of: date) -> int | None:
        """Return the row key for (ticker, date), or None when absent."""

    def insert_analysis_row(
        self,
        price_row_key: int,
        rsi: float | None,
        macd: float | None,
        sma: float | None,
        ema: float | None,
    ) -> None:
        """Persist indicator values joined to a price row."""

    def insert_signal_row(
        self,
        price_row_key: int,
        signal_type: str,
        confidence: int,
        reason: str,
    ) -> None:
        """Persist a signal verdict joined to a price row."""

    def close(self) -> None:
        """Close persistence resources."""
