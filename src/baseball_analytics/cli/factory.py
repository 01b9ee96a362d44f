import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from baseball_analytics.config import AnalyticsConfig
from baseball_analytics.db.connection import create_connection
from baseball_analytics.db.pool import ConnectionPool
from baseball_analytics.repos.game_log_repo import SqliteGameLogRepo
from baseball_analytics.repos.game_repo import SqliteGameRepo
from baseball_analytics.repos.play_repo import SqlitePlayRepo
from baseball_analytics.repos.win_expectancy_repo import SqliteWinExpectancyRepo
from baseball_analytics.services.analytics import AnalyticsService
from baseball_analytics.services.leverage import LeverageEstimator
from baseball_analytics.services.pitches import PitchService
from baseball_analytics.services.win_expectancy import WinExpectancyResolver


def resolve_db_path(config: AnalyticsConfig) -> Path:
    path = Path(config.db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


@dataclass(frozen=True)
class AnalyticsContext:
    conn: sqlite3.Connection
    play_repo: SqlitePlayRepo
    game_repo: SqliteGameRepo
    game_log_repo: SqliteGameLogRepo
    resolver: WinExpectancyResolver
    leverage: LeverageEstimator
    pitches: PitchService


@contextmanager
def build_analytics_context(config: AnalyticsConfig) -> Iterator[AnalyticsContext]:
    """Composition-root context manager: opens DB, wires repos + services, yields context, closes DB."""
    conn = create_connection(resolve_db_path(config))
    try:
        play_repo = SqlitePlayRepo(conn)
        resolver = WinExpectancyResolver(SqliteWinExpectancyRepo(conn))
        yield AnalyticsContext(
            conn=conn,
            play_repo=play_repo,
            game_repo=SqliteGameRepo(conn),
            game_log_repo=SqliteGameLogRepo(conn),
            resolver=resolver,
            leverage=LeverageEstimator(resolver),
            pitches=PitchService(play_repo),
        )
    finally:
        conn.close()


@contextmanager
def build_analytics_service(config: AnalyticsConfig) -> Iterator[AnalyticsService]:
    """Composition-root context manager for multi-game commands backed by a connection pool."""
    with ConnectionPool(resolve_db_path(config), size=config.pool_size) as pool:
        yield AnalyticsService(pool, max_workers=config.max_workers)
