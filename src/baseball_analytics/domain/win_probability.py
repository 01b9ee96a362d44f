from dataclasses import dataclass, field


@dataclass(frozen=True)
class WinProbabilityPoint:
    """Game state and modeled win probabilities after a single event."""

    event_index: int
    inning: int
    is_bottom: bool
    home_score: int
    away_score: int
    outs: int
    bases: str
    home_win_prob: float
    away_win_prob: float
    description: str = ""


@dataclass(frozen=True)
class WinProbabilityCurve:
    game_id: str
    home_team: str = ""
    away_team: str = ""
    season: int | None = None
    points: list[WinProbabilityPoint] = field(default_factory=list)
