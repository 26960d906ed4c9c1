"""Command-line interface for the trendsignal batch run."""

from __future__ import annotations

import argparse
import sys

from trendsignal.config import Settings, parse_symbols
from trendsignal.errors import ConfigError
from trendsignal.runtime import run


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Daily EMA/RSI trend signals for stock tickers")
    parser.add_argument("--symbols", type=str, help="Comma-separated ticker symbols")
    parser.add_argument("--suffix", type=str, help="Exchange suffix appended for yfinance, e.g. .JK")
    parser.add_argument("--period", type=str, help="History period to fetch, e.g. 6mo")
    parser.add_argument("--interval", type=str, help="Bar interval, e.g. 1d")
    parser.add_argument("--data-source", choices=["yfinance", "csv"], help="History source")
    parser.add_argument("--historical-dir", type=str, help="CSV historical data directory")
    parser.add_argument("--state-db", type=str, help="SQLite database path")
    parser.add_argument("--events-dir", type=str, help="Run event output directory")
    parser.add_argument("--log-level", type=str, help="Logging level")
    parser.add_argument("--ema-short", type=int, help="Short EMA period")
    parser.add_argument("--ema-long", type=int, help="Long EMA period")
    parser.add_argument("--rsi-period", type=int, help="RSI period")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    for name in ("ema_short", "ema_long", "rsi_period"):
        value = getattr(args, name)
        if value is not None and value <= 0:
            raise ConfigError(f"--{name.replace('_', '-')} must be positive")

    overrides: dict[str, object] = {
        "ticker_suffix": args.suffix,
        "history_period": args.period,
        "history_interval": args.interval,
        "data_source": args.data_source,
        "historical_data_dir": args.historical_dir,
        "state_db_path": args.state_db,
        "events_dir": args.events_dir,
        "log_level": args.log_level.upper() if args.log_level else None,
        "ema_short_period": args.ema_short,
        "ema_long_period": args.ema_long,
        "rsi_period": args.rsi_period,
    }
    if args.symbols:
        overrides["symbols"] = parse_symbols(args.symbols, settings.symbols)
    return settings.with_overrides(**overrides)


def main() -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args()
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
    except (ConfigError, ValueError) as exc:
        print(f"Configuration error: {exc}")
        return 2
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
