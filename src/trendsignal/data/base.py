"""Price history provider contract."""

from __future__ import annotations

from typing import Protocol

import pandas as pd

HISTORY_COLUMNS = ["date", "open", "high", "low", "close", "volume"]


class HistoryProvider(Protocol):
    """Interface for daily history retrieval."""

    def fetch(self, ticker: str, period: str, interval: str) -> pd.DataFrame:
        """Return OHLCV rows with a ``date`` column; may be empty."""


def empty_history() -> pd.DataFrame:
    """Return an empty frame with the standard history columns."""
    return pd.DataFrame(columns=HISTORY_COLUMNS)
