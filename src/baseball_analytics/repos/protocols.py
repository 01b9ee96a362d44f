from typing import Protocol, runtime_checkable

from baseball_analytics.domain.game_state import GameState
from baseball_analytics.domain.leverage import LeverageRole
from baseball_analytics.domain.play import Game, Play
from baseball_analytics.domain.run_differential import TeamGame
from baseball_analytics.domain.streak import BattingGame, PitchingGame
from baseball_analytics.domain.win_expectancy import Era, WinExpectancy, WinExpectancyEra


@runtime_checkable
class PlayRepo(Protocol):
    def upsert(self, play: Play) -> None: ...

    def get_by_game(self, game_id: str) -> list[Play]: ...

    def get_by_game_play(self, game_id: str, play_num: int) -> Play | None: ...

    def get_by_player_season(self, player_id: str, season: int, role: LeverageRole) -> list[Play]: ...


@runtime_checkable
class GameRepo(Protocol):
    def upsert(self, game: Game) -> None: ...

    def get(self, game_id: str) -> Game | None: ...

    def get_by_team_season(self, team_id: str, season: int) -> list[Game]: ...


@runtime_checkable
class WinExpectancyRepo(Protocol):
    def get(self, state: GameState, era: Era | None = None) -> WinExpectancy | None: ...

    def get_batch(self, states: list[GameState], era: Era | None = None) -> list[WinExpectancy | None]: ...

    def list_eras(self) -> list[WinExpectancyEra]: ...

    def upsert(self, record: WinExpectancy) -> int: ...

    def build_from_plays(self, min_sample: int, era: Era | None = None) -> int: ...


@runtime_checkable
class GameLogRepo(Protocol):
    def batting_games(self, player_id: str, season: int) -> list[BattingGame]: ...

    def pitching_games(self, player_id: str, season: int) -> list[PitchingGame]: ...

    def team_games(self, team_id: str, season: int) -> list[TeamGame]: ...
