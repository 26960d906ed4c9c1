"""Concise human-readable run logger."""

from __future__ import annotations

import logging
from datetime import date


class HumanLogger:
    """Console logger with fixed line types."""

    def __init__(self, level: str = "INFO") -> None:
        self._logger = logging.getLogger("trendsignal")
        self._logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def run_started(self, run_id: str, symbols: list[str]) -> None:
        self._logger.debug("run | %s | symbols %s", run_id, ",".join(symbols))

    def fetching(self, ticker: str) -> None:
        self._logger.info("fetch | %s", ticker)

    def signal(
        self,
        ticker: str,
        as_of: date,
        signal_type: str,
        confidence: int,
        reason: str,
    ) -> None:
        self._logger.info(
            "signal | %s | %s | %s %s | %s",
            ticker,
            as_of.isoformat(),
            signal_type,
            confidence,
            reason,
        )

    def skipped(self, ticker: str, reason: str, detail: str = "") -> None:
        if detail:
            self._logger.warning("skip | %s | %s | %s", ticker, reason, detail)
        else:
            self._logger.warning("skip | %s | %s", ticker, reason)

    def failed(self, ticker: str, message: str) -> None:
        self._logger.error("fail | %s | %s", ticker, message)

    def persistence_error(
        self,
        operation: str,
        ticker: str,
        as_of: date | None,
        message: str,
    ) -> None:
        day = as_of.isoformat() if as_of is not None else "-"
        self._logger.error("persist | %s | %s | %s | %s", operation, ticker, day, message)

    def batch_summary(self, completed: int, skipped: int, failed: int) -> None:
        self._logger.info(
            "done | completed %s | skipped %s | failed %s",
            completed,
            skipped,
            failed,
        )

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)
