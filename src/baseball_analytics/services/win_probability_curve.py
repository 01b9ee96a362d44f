"""Per-game win probability curves from a simple score-and-inning model.

This model is deliberately independent of the historical win-expectancy
table: it needs no stored data and is used to draw a quick curve for any game.
"""

from baseball_analytics.domain.play import Play
from baseball_analytics.domain.win_probability import WinProbabilityCurve, WinProbabilityPoint
from baseball_analytics.services.game_state_codec import bases_code, display_bases

RUN_VALUE = 0.15
LATE_RUN_VALUE = 0.25
REGULATION_INNINGS = 9


def scoring_model_win_probability(
    inning: int,
    is_bottom: bool,
    outs: int,
    home_score: int,
    away_score: int,
) -> tuple[float, float]:
    """Return ``(home, away)`` win probabilities; they always sum to 1.0."""
    diff = home_score - away_score
    remaining = REGULATION_INNINGS - inning + (0.5 if not is_bottom else 0.0)
    run_value = LATE_RUN_VALUE if remaining <= 1 else RUN_VALUE
    home = 0.5 + diff * run_value

    if inning >= REGULATION_INNINGS and is_bottom and diff > 0:
        home = 1.0
    elif inning >= REGULATION_INNINGS and not is_bottom and outs == 3 and diff < 0:
        home = 0.0

    home = max(0.0, min(1.0, home))
    return home, 1.0 - home


def home_team_from_game_id(game_id: str) -> str:
    """Retrosheet game ids start with the home team code, e.g. ``BOS201904010``."""
    return game_id[:3]


def build_curve(game_id: str, plays: list[Play]) -> WinProbabilityCurve:
    points = []
    for play in plays:
        outs = 3 if play.ends_half_inning else play.outs_post
        home, away = scoring_model_win_probability(
            play.inning, play.is_bottom, outs, play.home_score_post, play.away_score_post
        )
        points.append(
            WinProbabilityPoint(
                event_index=play.play_num,
                inning=play.inning,
                is_bottom=play.is_bottom,
                home_score=play.home_score_post,
                away_score=play.away_score_post,
                outs=outs,
                bases=display_bases(bases_code(play.bases_post)),
                home_win_prob=home,
                away_win_prob=away,
                description=play.event,
            )
        )

    return WinProbabilityCurve(
        game_id=game_id,
        home_team=home_team_from_game_id(game_id),
        away_team=next((p.bat_team for p in plays if not p.is_bottom), ""),
        season=plays[0].season if plays else None,
        points=points,
    )
