"""Price history provider implementations."""

from .base import HISTORY_COLUMNS, HistoryProvider, empty_history
from .csv_data import CsvHistoryProvider
from .yfinance_data import YFinanceHistoryProvider

__all__ = [
    "HISTORY_COLUMNS",
    "CsvHistoryProvider",
    "HistoryProvider",
    "YFinanceHistoryProvider",
    "empty_history",
]
