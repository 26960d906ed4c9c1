"""Tests for local CSV history provider."""

from __future__ import annotations

from pathlib import Path

import pytest

from trendsignal.data.csv_data import CsvHistoryProvider
from trendsignal.errors import DataProviderError


def test_csv_provider_reads_ticker_file(tmp_path: Path) -> None:
    (tmp_path / "BBCA.csv").write_text(
        "\n".join(
            [
                "Date,Open,High,Low,Close,Volume",
                "2026-01-03,9050,9150,9000,9100,1100000",
                "2026-01-02,9000,9100,8950,9050,1000000",
            ]
        )
    )

    frame = CsvHistoryProvider(data_dir=str(tmp_path)).fetch("bbca", "6mo", "1d")

    assert list(frame.columns) == ["date", "open", "high", "low", "close", "volume"]
    assert len(frame) == 2
    assert float(frame["close"].iloc[0]) == 9100.0


def test_csv_provider_fills_missing_optional_columns(tmp_path: Path) -> None:
    (tmp_path / "TLKM.csv").write_text("date,close\n2026-01-02,3500\n")

    frame = CsvHistoryProvider(data_dir=str(tmp_path)).fetch("TLKM", "6mo", "1d")

    assert frame["volume"].isna().all()
    assert float(frame["close"].iloc[0]) == 3500.0


def test_csv_provider_returns_empty_frame_for_missing_file(tmp_path: Path) -> None:
    frame = CsvHistoryProvider(data_dir=str(tmp_path)).fetch("GOTO", "6mo", "1d")

    assert frame.empty


def test_csv_provider_requires_date_column(tmp_path: Path) -> None:
    (tmp_path / "BBRI.csv").write_text("close\n4500\n")

    with pytest.raises(DataProviderError, match="missing date column"):
        CsvHistoryProvider(data_dir=str(tmp_path)).fetch("BBRI", "6mo", "1d")
