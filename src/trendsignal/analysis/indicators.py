"""EMA and RSI over a closing-price series.

Both indicators are seeded with a simple mean of their first ``period``
values and then follow an exponential recurrence, so they are computed with
``ewm(adjust=False)`` over the seeded tail:

- EMA uses ``alpha = 2 / (period + 1)``.
- RSI uses Wilder smoothing, ``alpha = 1 / period``, on gains and losses.

Only the most recent value of each indicator is surfaced.
"""

from __future__ import annotations

import pandas as pd

from trendsignal.domain.models import IndicatorConfig, IndicatorSnapshot, PriceSeries
from trendsignal.errors import InsufficientData


def minimum_window(config: IndicatorConfig) -> int:
    """Return the number of closes needed for EMA-short and RSI."""
    return max(config.ema_short_period, config.rsi_period + 1)


def compute_latest(
    series: PriceSeries,
    config: IndicatorConfig | None = None,
) -> IndicatorSnapshot:
    """Compute the indicator snapshot for the last bar of ``series``.

    Raises ``InsufficientData`` when the series is shorter than
    ``minimum_window(config)``. EMA-long is ``None`` when the series is
    shorter than its period.
    """
    config = config or IndicatorConfig()
    required = minimum_window(config)
    if not series.is_sufficient(required):
        raise InsufficientData(series.ticker, len(series), required)

    closes = series.closes()
    return IndicatorSnapshot(
        ema_short=ema_last(closes, config.ema_short_period),
        ema_long=ema_last(closes, config.ema_long_period),
        rsi=rsi_last(closes, config.rsi_period),
        as_of_date=series.bars[-1].date,
    )


def ema_last(closes: pd.Series, period: int) -> float | None:
    """Return the final EMA value, or None with fewer than ``period`` closes."""
    if period <= 0:
        raise ValueError("period must be positive")
    if len(closes) < period:
        return None
    return _seeded_ewm_last(closes, period, alpha=2.0 / (period + 1))


def rsi_last(closes: pd.Series, period: int) -> float | None:
    """Return the final Wilder RSI value, or None with ``period`` closes or fewer."""
    if period <= 0:
        raise ValueError("period must be positive")
    if len(closes) < period + 1:
        return None
    changes = closes.diff().iloc[1:]
    gains = changes.clip(lower=0.0)
    losses = (-changes).clip(lower=0.0)
    avg_gain = _seeded_ewm_last(gains, period, alpha=1.0 / period)
    avg_loss = _seeded_ewm_last(losses, period, alpha=1.0 / period)
    if avg_loss == 0:
        return 100.0
    relative_strength = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + relative_strength)


def _seeded_ewm_last(values: pd.Series, period: int, alpha: float) -> float:
    seed = float(values.iloc[:period].mean())
    seeded = pd.concat(
        [pd.Series([seed], dtype="float64"), values.iloc[period:].astype("float64")],
        ignore_index=True,
    )
    return float(seeded.ewm(alpha=alpha, adjust=False).mean().iloc[-1])
