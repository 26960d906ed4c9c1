"""Rule-based signal classification over an indicator snapshot."""

from __future__ import annotations

from trendsignal.domain.models import IndicatorSnapshot, SignalType, SignalVerdict

BUY_RSI_ABOVE = 50
SELL_RSI_BELOW = 40
CONFIRMED_CONFIDENCE = 80
UNCONFIRMED_CONFIDENCE = 60
NO_SIGNAL_CONFIDENCE = 50
NO_SIGNAL_REASON = "No strong signal"


def classify(snapshot: IndicatorSnapshot) -> SignalVerdict:
    """Classify the latest EMA/RSI values into a signal.

    Rules are evaluated in order and the first match wins:

    1. EMA-short above EMA-long and RSI above 50: BUY, confidence 80.
    2. EMA-short below EMA-long and RSI below 40: SELL, confidence 80.
    3. EMA-short above EMA-long otherwise: HOLD, confidence 60 (uptrend).
    4. EMA-short at or below EMA-long otherwise: HOLD, confidence 60 (downtrend).
    5. Any indicator missing: HOLD, confidence 50.
    """
    if not snapshot.is_complete():
        return SignalVerdict(SignalType.HOLD, NO_SIGNAL_CONFIDENCE, NO_SIGNAL_REASON)

    ema_short = snapshot.ema_short
    ema_long = snapshot.ema_long
    rsi = snapshot.rsi

    if ema_short > ema_long and rsi > BUY_RSI_ABOVE:
        return SignalVerdict(
            SignalType.BUY,
            CONFIRMED_CONFIDENCE,
            f"EMA20 ({ema_short:.2f}) > EMA50 ({ema_long:.2f}), RSI {rsi:.1f} > {BUY_RSI_ABOVE}",
        )
    if ema_short < ema_long and rsi < SELL_RSI_BELOW:
        return SignalVerdict(
            SignalType.SELL,
            CONFIRMED_CONFIDENCE,
            f"EMA20 ({ema_short:.2f}) < EMA50 ({ema_long:.2f}), RSI {rsi:.1f} < {SELL_RSI_BELOW}",
        )
    if ema_short > ema_long:
        return SignalVerdict(
            SignalType.HOLD,
            UNCONFIRMED_CONFIDENCE,
            f"Uptrend EMA20>EMA50 but RSI {rsi:.1f} not confirming",
        )
    return SignalVerdict(
        SignalType.HOLD,
        UNCONFIRMED_CONFIDENCE,
        f"Downtrend EMA20<EMA50 but RSI {rsi:.1f} not confirming",
    )
