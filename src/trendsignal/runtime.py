"""Runtime wiring for a batch signal run."""

from __future__ import annotations

from uuid import uuid4

from trendsignal.config import Settings
from trendsignal.data.base import HistoryProvider
from trendsignal.data.csv_data import CsvHistoryProvider
from trendsignal.data.yfinance_data import YFinanceHistoryProvider
from trendsignal.domain.outcomes import Completed, Failed, ProcessingOutcome, Skipped
from trendsignal.logging.event_sink import RunEventLog
from trendsignal.logging.logger import HumanLogger
from trendsignal.pipeline import SignalPipeline
from trendsignal.storage.sink import PersistenceSink
from trendsignal.storage.sqlite_store import SqlitePersistenceSink


def build_history_provider(settings: Settings) -> HistoryProvider:
    """Create the history provider selected by settings."""
    if settings.data_source == "csv":
        return CsvHistoryProvider(data_dir=settings.historical_data_dir)
    return YFinanceHistoryProvider(ticker_suffix=settings.ticker_suffix)


def build_sink(settings: Settings) -> PersistenceSink:
    return SqlitePersistenceSink(settings.state_db_path)


def run(
    settings: Settings,
    provider: HistoryProvider | None = None,
    sink: PersistenceSink | None = None,
) -> int:
    """Process all configured tickers and return a process exit code."""
    provider = provider or build_history_provider(settings)
    sink = sink or build_sink(settings)
    human_logger = HumanLogger(level=settings.log_level)

    run_id = uuid4().hex
    event_log = RunEventLog(settings.events_dir, run_id)

    human_logger.run_started(run_id, settings.symbols)
    event_log.emit(
        "run_started",
        {
            "symbols": settings.symbols,
            "data_source": settings.data_source,
            "period": settings.history_period,
            "interval": settings.history_interval,
        },
    )

    pipeline = SignalPipeline(
        settings=settings,
        provider=provider,
        sink=sink,
        human_logger=human_logger,
        event_log=event_log,
    )
    outcomes: list[ProcessingOutcome] = []
    exit_code = 0
    try:
        for ticker in settings.symbols:
            outcomes.append(pipeline.process(ticker))
    except KeyboardInterrupt:
        human_logger.error("interrupted; remaining tickers were not processed")
        exit_code = 130
    finally:
        sink.close()

    counts = summarize_outcomes(outcomes)
    human_logger.batch_summary(**counts)
    event_log.emit("run_finished", counts)
    return exit_code


def summarize_outcomes(outcomes: list[ProcessingOutcome]) -> dict[str, int]:
    """Count outcomes by status."""
    return {
        "completed": sum(1 for outcome in outcomes if isinstance(outcome, Completed)),
        "skipped": sum(1 for outcome in outcomes if isinstance(outcome, Skipped)),
        "failed": sum(1 for outcome in outcomes if isinstance(outcome, Failed)),
    }
