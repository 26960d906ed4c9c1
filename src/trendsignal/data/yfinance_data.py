"""Yahoo Finance price history provider."""

from __future__ import annotations

import re
from typing import Any

import pandas as pd

from trendsignal.data.base import HISTORY_COLUMNS, empty_history
from trendsignal.errors import DataProviderError


class YFinanceHistoryProvider:
    """Fetch daily OHLCV history from Yahoo Finance via yfinance."""

    def __init__(self, ticker_suffix: str = ".JK") -> None:
        self.ticker_suffix = ticker_suffix.strip().upper()

    def fetch(self, ticker: str, period: str, interval: str) -> pd.DataFrame:
        import yfinance as yf

        symbol = self.resolve_symbol(ticker)
        try:
            history = yf.Ticker(symbol).history(
                period=period,
                interval=self._normalize_interval(interval),
                auto_adjust=False,
                actions=False,
            )
        except Exception as exc:
            raise DataProviderError(
                f"yfinance request failed for {ticker} ({symbol}): {exc}"
            ) from exc
        return self._normalize_history(history, ticker, symbol)

    def resolve_symbol(self, ticker: str) -> str:
        """Append the exchange suffix unless the ticker already carries one."""
        bare = ticker.strip().upper()
        if not self.ticker_suffix or "." in bare:
            return bare
        return f"{bare}{self.ticker_suffix}"

    @staticmethod
    def _normalize_history(history: Any, ticker: str, symbol: str) -> pd.DataFrame:
        if history is None:
            return empty_history()
        frame = pd.DataFrame(history).copy()
        if frame.empty:
            return empty_history()

        close_column = YFinanceHistoryProvider._pick_column(frame, "close")
        if close_column is None:
            close_column = YFinanceHistoryProvider._pick_column(frame, "adj_close")
        if close_column is None:
            raise DataProviderError(f"yfinance payload missing close column for {ticker} ({symbol})")

        normalized = pd.DataFrame({"date": list(frame.index)})
        for field in ("open", "high", "low"):
            column = YFinanceHistoryProvider._pick_column(frame, field)
            normalized[field] = None if column is None else list(frame[column])
        normalized["close"] = list(frame[close_column])
        volume_column = YFinanceHistoryProvider._pick_column(frame, "volume")
        normalized["volume"] = None if volume_column is None else list(frame[volume_column])
        return normalized[HISTORY_COLUMNS]

    @staticmethod
    def _pick_column(frame: pd.DataFrame, field: str) -> Any | None:
        for column in frame.columns:
            key = YFinanceHistoryProvider._column_key(column)
            if key == field or key.startswith(f"{field}_"):
                return column
        return None

    @staticmethod
    def _column_key(value: Any) -> str:
        if isinstance(value, tuple):
            text = "_".join(str(part) for part in value if part is not None)
        else:
            text = str(value)
        return re.sub(r"[^a-zA-Z0-9]+", "_", text).strip("_").lower()

    @staticmethod
    def _normalize_interval(value: str) -> str:
        mapping = {
            "1d": "1d",
            "day": "1d",
            "1day": "1d",
            "daily": "1d",
            "1wk": "1wk",
            "week": "1wk",
            "1week": "1wk",
            "1mo": "1mo",
            "month": "1mo",
            "1month": "1mo",
        }
        return mapping.get(value.strip().lower(), "1d")
