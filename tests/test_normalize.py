from __future__ import annotations

import math
from datetime import date, timedelta

import pandas as pd
import pytest

from trendsignal.analysis.normalize import normalize
from trendsignal.domain.models import Bar


def _records() -> list[dict[str, object]]:
    return [
        {"date": "2025-01-02", "open": 10, "high": 11, "low": 9, "close": 10.5, "volume": 100},
        {"date": "2025-01-03", "open": 10.5, "high": 12, "low": 10, "close": 11.5, "volume": 120},
        {"date": "2025-01-06", "open": 11.5, "high": 12, "low": 11, "close": 11.8, "volume": 90},
    ]


def test_normalize_sorts_newest_first_input() -> None:
    series = normalize(list(reversed(_records())), ticker="BBCA")

    assert series.ticker == "BBCA"
    assert [bar.date for bar in series.bars] == [
        date(2025, 1, 2),
        date(2025, 1, 3),
        date(2025, 1, 6),
    ]
    assert series.last_date == date(2025, 1, 6)


def test_normalize_is_idempotent_and_order_independent() -> None:
    forward = normalize(_records(), ticker="TLKM")
    backward = normalize(list(reversed(_records())), ticker="TLKM")
    again = normalize(list(forward.bars), ticker="TLKM")

    assert forward == backward
    assert again == forward


def test_normalize_drops_null_and_non_numeric_closes() -> None:
    records = _records()
    records.append({"date": "2025-01-07", "close": None})
    records.append({"date": "2025-01-08", "close": "n/a"})
    records.append({"date": "not-a-date", "close": 12.0})

    series = normalize(records)

    assert len(series) == 3
    assert all(bar.close is not None for bar in series.bars)


def test_duplicate_dates_keep_later_supplied_record() -> None:
    records = [
        {"date": "2025-01-02", "close": 10.0},
        {"date": "2025-01-03", "close": 11.0},
        {"date": "2025-01-02", "close": 99.0},
    ]

    series = normalize(records)

    assert len(series) == 2
    assert series.bars[0] == Bar(date=date(2025, 1, 2), close=99.0)


def test_optional_fields_may_be_absent() -> None:
    series = normalize([{"date": "2025-01-02", "close": 5}])

    bar = series.bars[0]
    assert bar.close == 5.0
    assert bar.open is None
    assert bar.volume is None


def test_normalize_accepts_dataframe_with_datetime_index() -> None:
    frame = pd.DataFrame(
        {"Open": [10.0, 11.0], "High": [11.0, 12.0], "Low": [9.0, 10.0], "Close": [10.5, 11.5]},
        index=pd.to_datetime(["2025-01-03", "2025-01-02"]),
    )

    series = normalize(frame, ticker="BBRI")

    assert [bar.close for bar in series.bars] == [11.5, 10.5]
    assert series.bars[0].date == date(2025, 1, 2)


def test_normalize_reduces_timestamps_to_local_calendar_day() -> None:
    records = [
        {"date": "2025-01-02T09:30:00+07:00", "close": 1.0},
        {"date": "2025-07-02T09:30:00-04:00", "close": 2.0},
    ]

    series = normalize(records)

    assert [bar.date for bar in series.bars] == [date(2025, 1, 2), date(2025, 7, 2)]


def test_normalize_empty_input_returns_empty_series() -> None:
    series = normalize([], ticker="EMPTY")

    assert len(series) == 0
    assert series.last_date is None


def test_normalize_rejects_records_without_date_field() -> None:
    with pytest.raises(ValueError, match="no date field"):
        normalize(pd.DataFrame({"close": [1.0, 2.0]}))


def test_normalize_rejects_records_missing_a_date_in_mixed_input() -> None:
    records = [{"date": "2025-01-02", "close": 1.0}, {"close": 2.0}]

    with pytest.raises(ValueError, match="records without a date"):
        normalize(records, ticker="BBCA")


def test_normalize_drops_non_finite_closes() -> None:
    records = [
        {"date": (date(2025, 1, 1) + timedelta(days=index)).isoformat(), "close": 100.0 + index}
        for index in range(30)
    ]
    records.append({"date": "2025-01-31", "close": float("inf")})
    records.append({"date": "2025-02-01", "close": float("-inf")})
    records.append({"date": "2025-02-02", "close": float("nan")})

    series = normalize(records, ticker="BBRI")

    assert len(series) == 30
    assert series.last_date == date(2025, 1, 30)
    assert all(math.isfinite(bar.close) for bar in series.bars)


def test_normalize_drops_negative_closes_but_keeps_zero() -> None:
    records = [
        {"date": "2025-01-02", "close": 10.0},
        {"date": "2025-01-03", "close": -1.0},
        {"date": "2025-01-06", "close": 0.0},
    ]

    series = normalize(records)

    assert [(bar.date, bar.close) for bar in series.bars] == [
        (date(2025, 1, 2), 10.0),
        (date(2025, 1, 6), 0.0),
    ]
