from dataclasses import dataclass, field


@dataclass(frozen=True)
class TeamGame:
    """One game's runs scored and allowed from a team's point of view."""

    game_id: str
    date: str
    opponent_id: str
    home: bool
    runs_scored: int
    runs_allowed: int

    @property
    def differential(self) -> int:
        return self.runs_scored - self.runs_allowed


@dataclass(frozen=True)
class RunDifferentialGamePoint:
    game_id: str
    date: str
    opponent_id: str
    home: bool
    runs_scored: int
    runs_allowed: int
    differential: int
    cumulative_diff: int


@dataclass(frozen=True)
class RunDifferentialWindowPoint:
    end_game_id: str
    end_date: str
    games_in_window: int
    runs_scored: int
    runs_allowed: int
    run_differential: int


@dataclass(frozen=True)
class RunDifferentialWindow:
    window_size: int
    label: str
    points: list[RunDifferentialWindowPoint] = field(default_factory=list)


@dataclass(frozen=True)
class RunDifferentialSeries:
    entity_id: str
    season: int
    games_played: int
    runs_scored: int
    runs_allowed: int
    run_differential: int
    games: list[RunDifferentialGamePoint] = field(default_factory=list)
    rolling: list[RunDifferentialWindow] = field(default_factory=list)
    entity_type: str = "team"
