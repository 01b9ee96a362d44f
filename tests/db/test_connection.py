import sqlite3
from pathlib import Path

import pytest

from baseball_analytics.db.connection import (
    apply_migrations,
    create_connection,
    discover_migrations,
    get_schema_version,
)


def _tables(conn: sqlite3.Connection) -> set[str]:
    return {
        row[0]
        for row in conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
        ).fetchall()
    }


def _write_migrations(directory: Path, files: dict[str, str]) -> Path:
    directory.mkdir()
    for name, sql in files.items():
        (directory / name).write_text(sql)
    return directory


class TestCreateConnection:
    def test_enables_wal_mode(self, tmp_path: Path) -> None:
        conn = create_connection(tmp_path / "test.db")
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
        conn.close()

    def test_sets_busy_timeout(self, tmp_path: Path) -> None:
        conn = create_connection(tmp_path / "test.db", busy_timeout_ms=1234)
        assert conn.execute("PRAGMA busy_timeout").fetchone()[0] == 1234
        conn.close()

    def test_row_factory(self) -> None:
        conn = create_connection(":memory:")
        assert conn.execute("SELECT 1 AS one").fetchone()["one"] == 1
        conn.close()

    def test_creates_all_tables(self) -> None:
        conn = create_connection(":memory:")
        assert {"schema_version", "game", "play", "win_expectancy_historical"}.issubset(_tables(conn))
        assert get_schema_version(conn) == 3
        names = [row["name"] for row in conn.execute("SELECT name FROM schema_version ORDER BY version")]
        assert names == ["game", "play", "win_expectancy"]
        conn.close()

    def test_idempotent_reopen(self, tmp_path: Path) -> None:
        db_path = tmp_path / "test.db"
        create_connection(db_path).close()
        conn = create_connection(db_path)
        assert conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0] == 3
        conn.close()

    def test_migrate_false_leaves_schema_alone(self) -> None:
        conn = create_connection(":memory:", migrate=False)
        assert get_schema_version(conn) == 0
        assert "play" not in _tables(conn)
        conn.close()

    def test_win_expectancy_check_constraints(self) -> None:
        conn = create_connection(":memory:")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                """INSERT INTO win_expectancy_historical
                       (inning, is_bottom, outs, runners_state, score_diff, win_probability, sample_size)
                   VALUES (10, 0, 0, '___', 0, 0.5, 1)"""
            )
        conn.close()


class TestMigrations:
    def test_discover_orders_by_version(self, tmp_path: Path) -> None:
        directory = _write_migrations(
            tmp_path / "migrations",
            {"010_late.sql": "CREATE TABLE late (id INTEGER)", "002_early.sql": "CREATE TABLE a (id INTEGER);\n"},
        )
        migrations = discover_migrations(directory)
        assert [(m.version, m.name) for m in migrations] == [(2, "early"), (10, "late")]
        assert migrations[0].statements == ("CREATE TABLE a (id INTEGER)",)

    def test_duplicate_versions_rejected(self, tmp_path: Path) -> None:
        directory = _write_migrations(
            tmp_path / "migrations",
            {"001_a.sql": "CREATE TABLE a (id INTEGER)", "001_b.sql": "CREATE TABLE b (id INTEGER)"},
        )
        with pytest.raises(ValueError, match="Duplicate migration version 1"):
            discover_migrations(directory)

    def test_unnumbered_file_rejected(self, tmp_path: Path) -> None:
        directory = _write_migrations(tmp_path / "migrations", {"widget.sql": "CREATE TABLE w (id INTEGER)"})
        with pytest.raises(ValueError, match="version number"):
            discover_migrations(directory)

    def test_apply_returns_new_versions_only(self, tmp_path: Path) -> None:
        directory = _write_migrations(tmp_path / "migrations", {"001_widget.sql": "CREATE TABLE widget (id INTEGER)"})
        conn = sqlite3.connect(":memory:")
        assert apply_migrations(conn, discover_migrations(directory)) == [1]
        assert apply_migrations(conn, discover_migrations(directory)) == []
        conn.close()

    def test_custom_migrations_dir(self, tmp_path: Path) -> None:
        directory = _write_migrations(tmp_path / "migrations", {"001_widget.sql": "CREATE TABLE widget (id INTEGER)"})
        conn = create_connection(":memory:", migrations_dir=directory)
        assert "widget" in _tables(conn)
        assert get_schema_version(conn) == 1
        conn.close()

    def test_failed_migration_rolls_back(self, tmp_path: Path) -> None:
        directory = _write_migrations(
            tmp_path / "migrations",
            {
                "001_ok.sql": "CREATE TABLE ok (id INTEGER)",
                "002_broken.sql": "CREATE TABLE half (id INTEGER);\nCREATE TABLE ok (id INTEGER)",
            },
        )
        db_path = tmp_path / "broken.db"
        with pytest.raises(sqlite3.OperationalError):
            create_connection(db_path, migrations_dir=directory)
        conn = sqlite3.connect(db_path)
        assert get_schema_version(conn) == 1
        assert "half" not in _tables(conn)
        conn.close()

    def test_schema_version_without_table(self) -> None:
        conn = sqlite3.connect(":memory:")
        assert get_schema_version(conn) == 0
        conn.close()
