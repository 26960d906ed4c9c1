"""Per-ticker processing outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .models import IndicatorSnapshot, SignalVerdict


@dataclass(frozen=True)
class Completed:
    """Ticker was analysed and its verdict handed to the sink."""

    ticker: str
    as_of_date: date
    verdict: SignalVerdict
    snapshot: IndicatorSnapshot
    persistence_errors: int = 0

    status = "completed"

    def summary(self) -> str:
        return (
            f"{self.ticker} on {self.as_of_date.isoformat()}: "
            f"{self.verdict.signal_type.value} ({self.verdict.reason})"
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "status": self.status,
            "date": self.as_of_date.isoformat(),
            "signal_type": self.verdict.signal_type.value,
            "confidence": self.verdict.confidence,
            "reason": self.verdict.reason,
            "ema_short": self.snapshot.ema_short,
            "ema_long": self.snapshot.ema_long,
            "rsi": self.snapshot.rsi,
            "persistence_errors": self.persistence_errors,
        }


@dataclass(frozen=True)
class Skipped:
    """Ticker was skipped for an expected reason (no data, short series)."""

    ticker: str
    reason: str
    detail: str = ""

    status = "skipped"

    def summary(self) -> str:
        if self.detail:
            return f"{self.ticker}: {self.reason} ({self.detail})"
        return f"{self.ticker}: {self.reason}"

    def to_payload(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "status": self.status,
            "reason": self.reason,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class Failed:
    """Ticker processing failed; other tickers are unaffected."""

    ticker: str
    error: Exception

    status = "failed"

    def summary(self) -> str:
        return f"{self.ticker}: {type(self.error).__name__}: {self.error}"

    def to_payload(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "status": self.status,
            "error_type": type(self.error).__name__,
            "message": str(self.error),
        }


ProcessingOutcome = Completed | Skipped | Failed
