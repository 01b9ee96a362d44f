from dataclasses import dataclass, field
from enum import StrEnum


class StreakKind(StrEnum):
    HITTING = "hitting"
    SCORELESS_INNINGS = "scoreless_innings"


class StreakEntityType(StrEnum):
    PLAYER = "player"
    TEAM = "team"


@dataclass(frozen=True)
class BattingGame:
    """One game's batting line for a single player."""

    game_id: str
    date: str
    at_bats: int
    hits: int


@dataclass(frozen=True)
class PitchingGame:
    """One game's pitching line for a single player."""

    game_id: str
    date: str
    outs_recorded: int
    earned_runs: int

    @property
    def innings_pitched(self) -> float:
        return round(self.outs_recorded / 3.0, 1)


@dataclass(frozen=True)
class StreakPoint:
    game_id: str
    date: str
    index: int
    at_bats: int = 0
    hits: int = 0
    innings_pitched: float = 0.0
    earned_runs: int = 0


@dataclass(frozen=True)
class Streak:
    id: str
    kind: StreakKind
    entity_type: StreakEntityType
    entity_id: str
    season: int
    start_game_id: str
    end_game_id: str
    start_date: str
    end_date: str
    length: float
    games: int
    label: str
    timeline: list[StreakPoint] = field(default_factory=list)
