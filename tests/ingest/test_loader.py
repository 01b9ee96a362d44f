import logging
import sqlite3
from pathlib import Path
from typing import Any

import pytest

from baseball_analytics.domain.errors import IngestError
from baseball_analytics.domain.result import Err, Ok
from baseball_analytics.ingest.column_maps import GAME_KEY_COLUMNS, game_mapper
from baseball_analytics.ingest.csv_source import CsvSource
from baseball_analytics.ingest.loader import Loader
from baseball_analytics.repos.game_repo import SqliteGameRepo


class FakeDataSource:
    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows

    @property
    def source_type(self) -> str:
        return "fake"

    @property
    def source_detail(self) -> str:
        return "test"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        return self._rows


class ErrorDataSource(FakeDataSource):
    def __init__(self) -> None:
        super().__init__([])

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        raise OSError("disk unavailable")


def _game_row(game_id: str, **overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {"gid": game_id, "visteam": "NYA", "hometeam": game_id[:3], "vruns": "3", "hruns": "5"}
    row.update(overrides)
    return row


class TestLoader:
    def test_loads_and_commits(self, conn: sqlite3.Connection) -> None:
        source = FakeDataSource([_game_row("BOS201904010"), _game_row("TBA201904020")])
        result = Loader(source, SqliteGameRepo(conn), game_mapper, "game", conn=conn).load()
        assert isinstance(result, Ok)
        assert (result.value.target_table, result.value.rows_loaded, result.value.rows_skipped) == ("game", 2, 0)
        assert not conn.in_transaction
        assert SqliteGameRepo(conn).get("TBA201904020") is not None

    def test_skips_unmappable_rows(self, conn: sqlite3.Connection, caplog: pytest.LogCaptureFixture) -> None:
        source = FakeDataSource([_game_row("BOS201904010"), {"gid": "BOS201904020"}])
        with caplog.at_level(logging.INFO, logger="baseball_analytics.ingest.loader"):
            result = Loader(source, SqliteGameRepo(conn), game_mapper, "game", conn=conn).load()
        assert isinstance(result, Ok)
        assert (result.value.rows_loaded, result.value.rows_skipped) == (1, 1)
        assert "Skipped 1 unusable rows" in caplog.text

    def test_fetch_error_returns_err(self, conn: sqlite3.Connection) -> None:
        result = Loader(ErrorDataSource(), SqliteGameRepo(conn), game_mapper, "game", conn=conn).load()
        assert isinstance(result, Err)
        assert result.error == IngestError(
            message="disk unavailable", source_type="fake", source_detail="test", target_table="game"
        )

    def test_bad_row_rolls_back_everything(self, conn: sqlite3.Connection) -> None:
        source = FakeDataSource([_game_row("BOS201904010"), _game_row("BOS201904020", hruns="lots")])
        result = Loader(source, SqliteGameRepo(conn), game_mapper, "game", conn=conn).load()
        assert isinstance(result, Err)
        assert result.error.target_table == "game"
        assert result.error.message.startswith("line 3:")
        assert SqliteGameRepo(conn).get("BOS201904010") is None

    def test_missing_csv_returns_err(self, conn: sqlite3.Connection, tmp_path: Path) -> None:
        source = CsvSource(tmp_path / "missing.csv")
        result = Loader(source, SqliteGameRepo(conn), game_mapper, "game", conn=conn).load()
        assert isinstance(result, Err)
        assert result.error.source_type == "csv"

    def test_reload_is_idempotent(self, conn: sqlite3.Connection) -> None:
        source = FakeDataSource([_game_row("BOS201904010")])
        loader = Loader(source, SqliteGameRepo(conn), game_mapper, "game", conn=conn)
        loader.load()
        loader.load()
        assert conn.execute("SELECT COUNT(*) FROM game").fetchone()[0] == 1

    def test_malformed_csv_header_returns_err(self, conn: sqlite3.Connection, tmp_path: Path) -> None:
        path = tmp_path / "gameinfo.csv"
        path.write_text("gid,visteam\nBOS201904010,NYA\n")
        source = CsvSource(path, required_columns=GAME_KEY_COLUMNS)
        result = Loader(source, SqliteGameRepo(conn), game_mapper, "game", conn=conn).load()
        assert isinstance(result, Err)
        assert "hometeam" in result.error.message
