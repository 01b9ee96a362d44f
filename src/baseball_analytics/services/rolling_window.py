from collections.abc import Sequence
from itertools import accumulate

from baseball_analytics.domain.run_differential import (
    RunDifferentialGamePoint,
    RunDifferentialSeries,
    RunDifferentialWindow,
    RunDifferentialWindowPoint,
    TeamGame,
)

DEFAULT_WINDOWS = (5, 10, 20)


def rolling_window(games: Sequence[TeamGame], window_size: int) -> RunDifferentialWindow:
    """Trailing run-differential totals over every full window of ``window_size`` games.

    The first point ends on game ``window_size``; fewer games than that produce
    no points.
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")

    points = []
    for end in range(window_size - 1, len(games)):
        window = games[end - window_size + 1 : end + 1]
        scored = sum(g.runs_scored for g in window)
        allowed = sum(g.runs_allowed for g in window)
        points.append(
            RunDifferentialWindowPoint(
                end_game_id=games[end].game_id,
                end_date=games[end].date,
                games_in_window=window_size,
                runs_scored=scored,
                runs_allowed=allowed,
                run_differential=scored - allowed,
            )
        )
    return RunDifferentialWindow(window_size=window_size, label=f"last_{window_size}", points=points)


def run_differential_series(
    team_id: str,
    season: int,
    games: Sequence[TeamGame],
    windows: Sequence[int] = DEFAULT_WINDOWS,
) -> RunDifferentialSeries:
    cumulative = list(accumulate(g.differential for g in games))
    points = [
        RunDifferentialGamePoint(
            game_id=g.game_id,
            date=g.date,
            opponent_id=g.opponent_id,
            home=g.home,
            runs_scored=g.runs_scored,
            runs_allowed=g.runs_allowed,
            differential=g.differential,
            cumulative_diff=running,
        )
        for g, running in zip(games, cumulative, strict=True)
    ]
    scored = sum(g.runs_scored for g in games)
    allowed = sum(g.runs_allowed for g in games)
    return RunDifferentialSeries(
        entity_id=team_id,
        season=season,
        games_played=len(games),
        runs_scored=scored,
        runs_allowed=allowed,
        run_differential=scored - allowed,
        games=points,
        rolling=[rolling_window(games, size) for size in windows],
    )
