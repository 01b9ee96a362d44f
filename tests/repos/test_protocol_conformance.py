from baseball_analytics.repos.game_log_repo import SqliteGameLogRepo
from baseball_analytics.repos.game_repo import SqliteGameRepo
from baseball_analytics.repos.play_repo import SqlitePlayRepo
from baseball_analytics.repos.protocols import GameLogRepo, GameRepo, PlayRepo, WinExpectancyRepo
from baseball_analytics.repos.win_expectancy_repo import SqliteWinExpectancyRepo
from tests.fakes.repos import FakeGameLogRepo, FakeGameRepo, FakePlayRepo, FakeWinExpectancyRepo


class TestProtocolConformance:
    def test_sqlite_repos(self) -> None:
        assert issubclass(SqlitePlayRepo, PlayRepo)
        assert issubclass(SqliteGameRepo, GameRepo)
        assert issubclass(SqliteWinExpectancyRepo, WinExpectancyRepo)
        assert issubclass(SqliteGameLogRepo, GameLogRepo)

    def test_fakes(self) -> None:
        assert issubclass(FakePlayRepo, PlayRepo)
        assert issubclass(FakeGameRepo, GameRepo)
        assert issubclass(FakeWinExpectancyRepo, WinExpectancyRepo)
        assert issubclass(FakeGameLogRepo, GameLogRepo)
