from __future__ import annotations

import math
from datetime import date, timedelta

import pandas as pd
import pytest

from trendsignal.analysis.indicators import compute_latest, ema_last, minimum_window, rsi_last
from trendsignal.domain.models import Bar, IndicatorConfig, PriceSeries
from trendsignal.errors import InsufficientData


def _series(closes: list[float], ticker: str = "TEST") -> PriceSeries:
    start = date(2025, 1, 1)
    bars = tuple(
        Bar(date=start + timedelta(days=index), close=float(close))
        for index, close in enumerate(closes)
    )
    return PriceSeries(ticker=ticker, bars=bars)


def test_ema_is_seeded_with_simple_average() -> None:
    closes = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0])

    assert ema_last(closes, 5) == pytest.approx(3.0)


def test_ema_applies_smoothing_after_seed() -> None:
    # alpha = 1/3 for period 5; on a unit-step ramp the EMA lags by exactly two.
    closes = pd.Series([float(value) for value in range(1, 11)])

    assert ema_last(closes, 5) == pytest.approx(8.0)


def test_ema_returns_none_when_too_short() -> None:
    assert ema_last(pd.Series([1.0, 2.0]), 5) is None


def test_ema_of_increasing_series_is_strictly_inside_close_range() -> None:
    closes = [100.0 + index * 0.5 for index in range(40)]

    snapshot = compute_latest(_series(closes))

    assert snapshot.ema_short is not None
    assert min(closes) < snapshot.ema_short < max(closes)


def test_rsi_uses_wilder_smoothing() -> None:
    closes = pd.Series([1.0, 2.0, 1.0, 2.0])

    assert rsi_last(closes, 2) == pytest.approx(75.0)


def test_rsi_is_100_without_losses() -> None:
    rising = pd.Series([float(value) for value in range(1, 30)])

    assert rsi_last(rising, 14) == 100.0


def test_rsi_flat_series_does_not_produce_nan() -> None:
    flat = pd.Series([50.0] * 20)

    value = rsi_last(flat, 14)

    assert value == 100.0
    assert not math.isnan(value)


def test_rsi_is_zero_without_gains() -> None:
    falling = pd.Series([float(value) for value in range(30, 1, -1)])

    assert rsi_last(falling, 14) == pytest.approx(0.0)


def test_rsi_stays_within_bounds() -> None:
    closes = pd.Series([100.0 + 10.0 * math.sin(index / 3.0) + index * 0.1 for index in range(80)])

    value = rsi_last(closes, 14)

    assert value is not None
    assert 0.0 <= value <= 100.0


def test_rsi_returns_none_without_enough_changes() -> None:
    assert rsi_last(pd.Series([1.0] * 14), 14) is None


def test_compute_latest_rejects_short_series() -> None:
    with pytest.raises(InsufficientData) as excinfo:
        compute_latest(_series([1.0] * 19, ticker="BBCA"))

    assert excinfo.value.available == 19
    assert excinfo.value.required == 20
    assert excinfo.value.ticker == "BBCA"


def test_compute_latest_with_twenty_closes_omits_long_ema() -> None:
    snapshot = compute_latest(_series([10.0 + index for index in range(20)]))

    assert snapshot.ema_short is not None
    assert snapshot.rsi is not None
    assert snapshot.ema_long is None
    assert snapshot.as_of_date == date(2025, 1, 20)


def test_compute_latest_with_fifty_closes_has_all_indicators() -> None:
    snapshot = compute_latest(_series([10.0 + index for index in range(50)]))

    assert snapshot.ema_short is not None
    assert snapshot.ema_long is not None
    assert snapshot.rsi is not None
    assert snapshot.ema_short > snapshot.ema_long


def test_compute_latest_honours_custom_periods() -> None:
    config = IndicatorConfig(ema_short_period=3, ema_long_period=5, rsi_period=2)
    snapshot = compute_latest(_series([1.0, 2.0, 3.0, 4.0, 5.0]), config)

    assert minimum_window(config) == 3
    assert snapshot.ema_short == pytest.approx(4.0)
    assert snapshot.ema_long == pytest.approx(3.0)
    assert snapshot.rsi == 100.0


def test_minimum_window_covers_rsi_lookback() -> None:
    assert minimum_window(IndicatorConfig()) == 20
    assert minimum_window(IndicatorConfig(ema_short_period=5, ema_long_period=10)) == 15


def test_indicator_config_rejects_inverted_periods() -> None:
    with pytest.raises(ValueError):
        IndicatorConfig(ema_short_period=50, ema_long_period=20)
