"""Raw price history normalization."""

from __future__ import annotations

import dataclasses
import math
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

import pandas as pd

from trendsignal.domain.models import Bar, PriceSeries

BAR_FIELDS = ("date", "open", "high", "low", "close", "volume")
OPTIONAL_FIELDS = ("open", "high", "low", "volume")


def normalize(raw_bars: pd.DataFrame | Iterable[Any], ticker: str = "") -> PriceSeries:
    """Turn raw history into an oldest-first series with unique dates.

    Every record must carry a date; a missing one raises ``ValueError``.
    Records whose date does not parse, or whose close is missing, non-numeric,
    non-finite or negative, are dropped. When two records share a date the
    later one in the input wins.
    """
    frame = _to_frame(raw_bars)
    if frame.empty:
        return PriceSeries(ticker=ticker)

    date_column = _pick_column(frame, "date", "datetime", "timestamp")
    close_column = _pick_column(frame, "close")
    if close_column is None:
        close_column = _pick_column(frame, "adj_close")
    if date_column is None:
        raise ValueError(f"raw history for {ticker or 'series'} has no date field")
    if close_column is None:
        raise ValueError(f"raw history for {ticker or 'series'} has no close field")
    if frame[date_column].isna().any():
        raise ValueError(f"raw history for {ticker or 'series'} has records without a date")

    normalized = pd.DataFrame(
        {
            "date": frame[date_column].map(_parse_date),
            "close": pd.to_numeric(frame[close_column], errors="coerce"),
        }
    )
    for name in OPTIONAL_FIELDS:
        column = _pick_column(frame, name)
        if column is None:
            normalized[name] = None
        else:
            normalized[name] = pd.to_numeric(frame[column], errors="coerce")

    normalized = normalized.dropna(subset=["date", "close"])
    normalized = normalized[normalized["close"].map(math.isfinite) & (normalized["close"] >= 0)]
    normalized = normalized.drop_duplicates(subset="date", keep="last")
    normalized = normalized.sort_values("date", kind="stable")

    bars = tuple(
        Bar(
            date=row.date,
            close=float(row.close),
            open=_optional_float(row.open),
            high=_optional_float(row.high),
            low=_optional_float(row.low),
            volume=_optional_float(row.volume),
        )
        for row in normalized.itertuples(index=False)
    )
    return PriceSeries(ticker=ticker, bars=bars)


def _to_frame(raw_bars: pd.DataFrame | Iterable[Any]) -> pd.DataFrame:
    if isinstance(raw_bars, pd.DataFrame):
        frame = raw_bars.copy()
        if _pick_column(frame, "date", "datetime", "timestamp") is None and isinstance(
            frame.index, pd.DatetimeIndex
        ):
            return frame.rename_axis("date").reset_index()
        return frame.reset_index(drop=True)
    records = [_record_to_mapping(record) for record in raw_bars]
    if not records:
        return pd.DataFrame(columns=list(BAR_FIELDS))
    return pd.DataFrame.from_records(records)


def _record_to_mapping(record: Any) -> dict[str, Any]:
    if isinstance(record, Mapping):
        return dict(record)
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    return {name: getattr(record, name, None) for name in BAR_FIELDS}


def _pick_column(frame: pd.DataFrame, *fields: str) -> Any | None:
    for field in fields:
        for column in frame.columns:
            if _column_key(column) == field:
                return column
    return None


def _column_key(value: Any) -> str:
    text = str(value)
    return re.sub(r"[^a-zA-Z0-9]+", "_", text).strip("_").lower()


def _parse_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    try:
        timestamp = pd.Timestamp(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(timestamp):
        return None
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_localize(None)
    return timestamp.date()


def _optional_float(value: Any) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)
