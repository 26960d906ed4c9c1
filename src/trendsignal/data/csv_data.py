"""CSV-backed price history provider."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from trendsignal.data.base import HISTORY_COLUMNS, empty_history
from trendsignal.errors import DataProviderError


class CsvHistoryProvider:
    """Load daily OHLCV history from ``<data_dir>/<TICKER>.csv`` files.

    ``period`` and ``interval`` are accepted for interface parity and ignored;
    the whole file is returned. A missing file yields an empty frame.
    """

    date_column_candidates = ("date", "datetime", "timestamp")

    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)

    def fetch(self, ticker: str, period: str, interval: str) -> pd.DataFrame:
        _ = (period, interval)
        path = self._resolve_path(ticker)
        if path is None:
            return empty_history()
        try:
            frame = pd.read_csv(path)
        except (OSError, ValueError) as exc:
            raise DataProviderError(f"Could not read {path} for {ticker}: {exc}") from exc
        return self._normalize_csv(frame, ticker)

    def _resolve_path(self, ticker: str) -> Path | None:
        bare = ticker.strip()
        candidates = [
            self.data_dir / f"{bare.upper()}.csv",
            self.data_dir / f"{bare.lower()}.csv",
        ]
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return None

    def _normalize_csv(self, frame: pd.DataFrame, ticker: str) -> pd.DataFrame:
        if frame.empty:
            return empty_history()
        lower_to_original = {str(column).strip().lower(): column for column in frame.columns}
        date_column = self._pick_date_column(lower_to_original, ticker)
        if "close" not in lower_to_original:
            raise DataProviderError(f"{ticker}: CSV missing required column 'close'")

        rename_map = {date_column: "date"}
        for name in ("open", "high", "low", "close", "volume"):
            source = lower_to_original.get(name)
            if source is not None:
                rename_map[source] = name
        normalized = frame.rename(columns=rename_map)
        for name in HISTORY_COLUMNS:
            if name not in normalized.columns:
                normalized[name] = None
        return normalized[HISTORY_COLUMNS]

    def _pick_date_column(self, lower_to_original: dict[str, str], ticker: str) -> str:
        for candidate in self.date_column_candidates:
            if candidate in lower_to_original:
                return lower_to_original[candidate]
        candidates = ", ".join(self.date_column_candidates)
        raise DataProviderError(f"{ticker}: CSV missing date column. Expected one of: {candidates}")
