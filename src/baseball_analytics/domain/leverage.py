from dataclasses import dataclass
from enum import StrEnum

LOW_LEVERAGE_THRESHOLD = 0.85
HIGH_LEVERAGE_THRESHOLD = 2.0


class LeverageRole(StrEnum):
    BATTER = "batter"
    PITCHER = "pitcher"
    ANY = "any"


@dataclass(frozen=True)
class PlateAppearanceLeverage:
    """Leverage and home-team win expectancy around one plate appearance."""

    game_id: str
    event_id: int
    batter_id: str
    pitcher_id: str
    inning: int
    is_bottom: bool
    home_score_before: int
    away_score_before: int
    outs_before: int
    bases_before: str
    leverage_index: float
    win_expectancy_before: float
    win_expectancy_after: float
    description: str = ""

    @property
    def wpa(self) -> float:
        return self.win_expectancy_after - self.win_expectancy_before


@dataclass(frozen=True)
class PlayerLeverageSummary:
    player_id: str
    season: int
    role: LeverageRole
    plate_appearances: int
    avg_leverage_index: float
    low_leverage_pa: int
    medium_leverage_pa: int
    high_leverage_pa: int
    win_probability_added: float


@dataclass(frozen=True)
class GameWinProbabilitySummary:
    game_id: str
    season: int
    home_team: str
    away_team: str
    home_win_prob_start: float
    home_win_prob_end: float
    biggest_positive_swing: PlateAppearanceLeverage | None = None
    biggest_negative_swing: PlateAppearanceLeverage | None = None
