import logging
import sqlite3
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from baseball_analytics.db.pool import ConnectionPool
from baseball_analytics.domain.errors import PlayNotFound
from baseball_analytics.domain.leverage import GameWinProbabilitySummary, PlateAppearanceLeverage
from baseball_analytics.domain.result import Result
from baseball_analytics.domain.win_probability import WinProbabilityCurve
from baseball_analytics.repos.play_repo import SqlitePlayRepo
from baseball_analytics.repos.win_expectancy_repo import SqliteWinExpectancyRepo
from baseball_analytics.services.leverage import LeverageEstimator
from baseball_analytics.services.win_expectancy import WinExpectancyResolver
from baseball_analytics.services.win_probability_curve import build_curve

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalyticsService:
    """Runs per-game analytics in parallel, one pooled connection per task.

    Results are returned in the order of the requested game ids.
    """

    def __init__(self, pool: ConnectionPool, *, max_workers: int = 4) -> None:
        self._pool = pool
        self._max_workers = max_workers

    def win_probability_curves(self, game_ids: list[str]) -> list[WinProbabilityCurve]:
        return self._fan_out(game_ids, self._curve)

    def game_leverages(self, game_ids: list[str], min_li: float | None = None) -> list[list[PlateAppearanceLeverage]]:
        return self._fan_out(game_ids, lambda conn, game_id: self._leverages(conn, game_id, min_li))

    def game_summaries(self, game_ids: list[str]) -> list[Result[GameWinProbabilitySummary, PlayNotFound]]:
        return self._fan_out(game_ids, self._summary)

    def _fan_out(self, game_ids: list[str], task: Callable[[sqlite3.Connection, str], T]) -> list[T]:
        logger.debug("Fanning out %d games over %d workers", len(game_ids), self._max_workers)
        results: dict[int, T] = {}
        with ThreadPoolExecutor(max_workers=self._max_workers) as ex:
            futs = {ex.submit(self._with_connection, task, game_id): i for i, game_id in enumerate(game_ids)}
            for f in as_completed(futs):
                results[futs[f]] = f.result()
        return [results[i] for i in range(len(game_ids))]

    def _with_connection(self, task: Callable[[sqlite3.Connection, str], T], game_id: str) -> T:
        with self._pool.connection() as conn:
            return task(conn, game_id)

    @staticmethod
    def _curve(conn: sqlite3.Connection, game_id: str) -> WinProbabilityCurve:
        return build_curve(game_id, SqlitePlayRepo(conn).get_by_game(game_id))

    @staticmethod
    def _leverages(conn: sqlite3.Connection, game_id: str, min_li: float | None) -> list[PlateAppearanceLeverage]:
        estimator = LeverageEstimator(WinExpectancyResolver(SqliteWinExpectancyRepo(conn)))
        return estimator.game_plate_leverages(SqlitePlayRepo(conn).get_by_game(game_id), min_li=min_li)

    @staticmethod
    def _summary(conn: sqlite3.Connection, game_id: str) -> Result[GameWinProbabilitySummary, PlayNotFound]:
        estimator = LeverageEstimator(WinExpectancyResolver(SqliteWinExpectancyRepo(conn)))
        return estimator.game_win_probability_summary(game_id, SqlitePlayRepo(conn).get_by_game(game_id))
