"""Per-ticker signal pipeline: fetch, normalize, analyse, classify, persist."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date

from trendsignal.analysis.classifier import classify
from trendsignal.analysis.indicators import compute_latest
from trendsignal.analysis.normalize import normalize
from trendsignal.config import Settings
from trendsignal.data.base import HistoryProvider
from trendsignal.domain.models import IndicatorSnapshot, PriceSeries, SignalVerdict
from trendsignal.domain.outcomes import Completed, Failed, ProcessingOutcome, Skipped
from trendsignal.errors import (
    InsufficientData,
    JoinKeyNotFound,
    MissingUpstreamData,
    PersistenceError,
)
from trendsignal.logging.event_sink import RunEventLog
from trendsignal.logging.logger import HumanLogger
from trendsignal.storage.sink import PersistenceSink


class SignalPipeline:
    """Process tickers one at a time and hand each verdict to the sink.

    A failure for one ticker is reported as that ticker's outcome and never
    stops the batch. Cancelling mid-ticker can leave price rows written
    without their analysis and signal rows.
    """

    def __init__(
        self,
        settings: Settings,
        provider: HistoryProvider,
        sink: PersistenceSink,
        human_logger: HumanLogger,
        event_log: RunEventLog | None = None,
    ) -> None:
        self.settings = settings
        self.provider = provider
        self.sink = sink
        self.human_logger = human_logger
        self.event_log = event_log
        self.indicator_config = settings.indicator_config()

    def process_all(self, tickers: Iterable[str]) -> list[ProcessingOutcome]:
        """Process every ticker sequentially, one outcome per ticker."""
        return [self.process(ticker) for ticker in tickers]

    def process(self, ticker: str) -> ProcessingOutcome:
        try:
            outcome = self._process(ticker)
        except Exception as exc:
            self.human_logger.failed(ticker, f"{type(exc).__name__}: {exc}")
            outcome = Failed(ticker=ticker, error=exc)
        self._emit("ticker_outcome", outcome.to_payload())
        return outcome

    def _process(self, ticker: str) -> ProcessingOutcome:
        self.human_logger.fetching(ticker)
        try:
            raw = self.provider.fetch(
                ticker,
                self.settings.history_period,
                self.settings.history_interval,
            )
            if raw is None or len(raw) == 0:
                raise MissingUpstreamData(ticker)
            series = normalize(raw, ticker=ticker)
            snapshot = compute_latest(series, self.indicator_config)
        except (MissingUpstreamData, InsufficientData) as exc:
            reason = type(exc).__name__
            self.human_logger.skipped(ticker, reason, str(exc))
            return Skipped(ticker=ticker, reason=reason, detail=str(exc))

        verdict = classify(snapshot)
        return self._persist(series, snapshot, verdict)

    def _persist(
        self,
        series: PriceSeries,
        snapshot: IndicatorSnapshot,
        verdict: SignalVerdict,
    ) -> ProcessingOutcome:
        ticker = series.ticker
        as_of = snapshot.as_of_date
        errors = 0
        for bar in series.bars:
            if not self._attempt(
                "upsert_price", ticker, bar.date, lambda bar=bar: self.sink.upsert_price(ticker, bar)
            ):
                errors += 1

        price_row_key = self._lookup_price_row_key(ticker, as_of)
        if price_row_key is None:
            error = JoinKeyNotFound(ticker, as_of)
            self.human_logger.failed(ticker, str(error))
            return Failed(ticker=ticker, error=error)

        # macd and sma are not computed; the columns stay null.
        if not self._attempt(
            "insert_analysis_row",
            ticker,
            as_of,
            lambda: self.sink.insert_analysis_row(
                price_row_key, snapshot.rsi, None, None, snapshot.ema_short
            ),
        ):
            errors += 1
        if not self._attempt(
            "insert_signal_row",
            ticker,
            as_of,
            lambda: self.sink.insert_signal_row(
                price_row_key, verdict.signal_type.value, verdict.confidence, verdict.reason
            ),
        ):
            errors += 1

        self.human_logger.signal(
            ticker, as_of, verdict.signal_type.value, verdict.confidence, verdict.reason
        )
        return Completed(
            ticker=ticker,
            as_of_date=as_of,
            verdict=verdict,
            snapshot=snapshot,
            persistence_errors=errors,
        )

    def _lookup_price_row_key(self, ticker: str, as_of: date) -> int | None:
        try:
            return self.sink.get_price_row_key(ticker, as_of)
        except PersistenceError as exc:
            self.human_logger.persistence_error("get_price_row_key", ticker, as_of, str(exc))
            return None

    def _attempt(
        self,
        operation: str,
        ticker: str,
        as_of: date,
        write: Callable[[], None],
    ) -> bool:
        try:
            write()
        except PersistenceError as exc:
            self.human_logger.persistence_error(operation, ticker, as_of, str(exc))
            self._emit(
                "persistence_error",
                {
                    "operation": operation,
                    "ticker": ticker,
                    "date": as_of.isoformat(),
                    "message": str(exc),
                },
            )
            return False
        return True

    def _emit(self, event_type: str, payload: dict[str, object]) -> None:
        if self.event_log is None:
            return
        self.event_log.emit(event_type, payload)
