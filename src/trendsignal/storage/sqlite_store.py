"""SQLite persistence sink for prices, analysis and signals."""

from __future__ import annotations

import sqlite3
from datetime import UTC, date, datetime
from pathlib import Path

from trendsignal.domain.models import Bar
from trendsignal.errors import PersistenceError


class SqlitePersistenceSink:
    """SQLite-backed implementation of the pipeline persistence sink."""

    def __init__(self, db_path: str) -> None:
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.connection = sqlite3.connect(db_path)
        self.connection.row_factory = sqlite3.Row
        self._initialize_schema()

    def upsert_price(self, ticker: str, bar: Bar) -> None:
        try:
            self.connection.execute(
                """
                INSERT INTO prices(symbol, date, open, high, low, close, volume)
                VALUES(?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(symbol, date) DO UPDATE SET
                    open = excluded.open,
                    high = excluded.high,
                    low = excluded.low,
                    close = excluded.close,
                    volume = excluded.volume
                """,
                (
                    ticker.upper(),
                    bar.date.isoformat(),
                    bar.open,
                    bar.high,
                    bar.low,
                    bar.close,
                    bar.volume,
                ),
            )
            self.connection.commit()
        except sqlite3.Error as exc:
            raise PersistenceError("upsert_price", ticker, bar.date, str(exc)) from exc

    def get_price_row_key(self, ticker: str, as_of: date) -> int | None:
        try:
            row = self.connection.execute(
                """
                SELECT id
                FROM prices
                WHERE symbol = ? AND date = ?
                LIMIT 1
                """,
                (ticker.upper(), as_of.isoformat()),
            ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError("get_price_row_key", ticker, as_of, str(exc)) from exc
        if row is None:
            return None
        return int(row["id"])

    def insert_analysis_row(
        self,
        price_row_key: int,
        rsi: float | None,
        macd: float | None,
        sma: float | None,
        ema: float | None,
    ) -> None:
        try:
            self.connection.execute(
                """
                INSERT INTO analysis(price_id, rsi, macd, sma, ema, created_ts)
                VALUES(?, ?, ?, ?, ?, ?)
                """,
                (price_row_key, rsi, macd, sma, ema, self._utc_now()),
            )
            self.connection.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(
                "insert_analysis_row", detail=f"price_id {price_row_key}: {exc}"
            ) from exc

    def insert_signal_row(
        self,
        price_row_key: int,
        signal_type: str,
        confidence: int,
        reason: str,
    ) -> None:
        try:
            self.connection.execute(
                """
                INSERT INTO signals(price_id, signal_type, confidence, reason, created_ts)
                VALUES(?, ?, ?, ?, ?)
                """,
                (price_row_key, signal_type, confidence, reason, self._utc_now()),
            )
            self.connection.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(
                "insert_signal_row", detail=f"price_id {price_row_key}: {exc}"
            ) from exc

    def close(self) -> None:
        self.connection.close()

    def _initialize_schema(self) -> None:
        self.connection.execute("PRAGMA foreign_keys = ON")
        self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS prices(
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                symbol TEXT NOT NULL,
                date TEXT NOT NULL,
                open REAL,
                high REAL,
                low REAL,
                close REAL NOT NULL,
                volume REAL,
                UNIQUE(symbol, date)
            )
            """
        )
        self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS analysis(
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                price_id INTEGER NOT NULL REFERENCES prices(id),
                rsi REAL,
                macd REAL,
                sma REAL,
                ema REAL,
                created_ts TEXT NOT NULL
            )
            """
        )
        self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS signals(
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                price_id INTEGER NOT NULL REFERENCES prices(id),
                signal_type TEXT NOT NULL,
                confidence INTEGER NOT NULL,
                reason TEXT NOT NULL,
                created_ts TEXT NOT NULL
            )
            """
        )
        self.connection.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_signals_price_id
            ON signals(price_id)
            """
        )
        self.connection.commit()

    @staticmethod
    def _utc_now() -> str:
        return datetime.now(tz=UTC).isoformat()
