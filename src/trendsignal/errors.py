"""Custom exceptions for the signal pipeline."""

from __future__ import annotations

from datetime import date


class SignalPipelineError(Exception):
    """Base exception for all pipeline errors."""


class ConfigError(SignalPipelineError):
    """Raised when environment or CLI configuration is invalid."""


class DataProviderError(SignalPipelineError):
    """Raised when price history retrieval fails."""


class MissingUpstreamData(SignalPipelineError):
    """Raised when a provider returns no history for a ticker."""

    def __init__(self, ticker: str) -> None:
        super().__init__(f"No data for {ticker}")
        self.ticker = ticker


class InsufficientData(SignalPipelineError):
    """Raised when a series is shorter than the minimum indicator window."""

    def __init__(self, ticker: str, available: int, required: int) -> None:
        super().__init__(
            f"Insufficient data for {ticker or 'series'}: {available} closes, need >= {required}"
        )
        self.ticker = ticker
        self.available = available
        self.required = required


class JoinKeyNotFound(SignalPipelineError):
    """Raised when a just-written price row cannot be read back."""

    def __init__(self, ticker: str, as_of: date) -> None:
        super().__init__(f"No price row key found for {ticker} on {as_of.isoformat()}")
        self.ticker = ticker
        self.as_of = as_of


class PersistenceError(SignalPipelineError):
    """Raised when a write to the persistence sink fails."""

    def __init__(
        self,
        operation: str,
        ticker: str | None = None,
        as_of: date | None = None,
        detail: str = "",
    ) -> None:
        parts = [operation]
        if ticker:
            parts.append(ticker)
        if as_of is not None:
            parts.append(as_of.isoformat())
        message = " | ".join(parts)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.operation = operation
        self.ticker = ticker
        self.as_of = as_of
