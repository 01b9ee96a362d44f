"""Maximal streak detection over a player's chronological game log.

Streaks are found with a single run-length pass: every game that fails the
streak condition starts a new group, and each group of qualifying games is a
candidate streak.
"""

from collections.abc import Callable, Sequence
from typing import TypeVar

from baseball_analytics.domain.streak import (
    BattingGame,
    PitchingGame,
    Streak,
    StreakEntityType,
    StreakKind,
    StreakPoint,
)

MIN_SCORELESS_OUTS = 3

T = TypeVar("T")


def group_runs(games: Sequence[T], qualifies: Callable[[T], bool]) -> list[list[T]]:
    """Split games into maximal runs of consecutive qualifying games."""
    group_id = 0
    groups: dict[int, list[T]] = {}
    for game in games:
        if qualifies(game):
            groups.setdefault(group_id, []).append(game)
        else:
            group_id += 1
    return list(groups.values())


def _season_of(date: str) -> int:
    return int(date[:4])


def _hitting_streaks(games: Sequence[BattingGame], season: int) -> list[tuple[list[BattingGame], float]]:
    eligible = [g for g in games if g.at_bats >= 1 and _season_of(g.date) == season]
    return [(run, float(len(run))) for run in group_runs(eligible, lambda g: g.hits > 0)]


def _scoreless_streaks(games: Sequence[PitchingGame], season: int) -> list[tuple[list[PitchingGame], float]]:
    eligible = [g for g in games if g.outs_recorded >= MIN_SCORELESS_OUTS and _season_of(g.date) == season]
    return [
        (run, round(sum(g.innings_pitched for g in run), 1))
        for run in group_runs(eligible, lambda g: g.earned_runs == 0)
    ]


def _timeline(run: Sequence[BattingGame] | Sequence[PitchingGame]) -> list[StreakPoint]:
    points = []
    for i, game in enumerate(run):
        if isinstance(game, BattingGame):
            points.append(StreakPoint(game.game_id, game.date, i, at_bats=game.at_bats, hits=game.hits))
        else:
            points.append(
                StreakPoint(
                    game.game_id,
                    game.date,
                    i,
                    innings_pitched=game.innings_pitched,
                    earned_runs=game.earned_runs,
                )
            )
    return points


def _label(kind: StreakKind, length: float) -> str:
    if kind == StreakKind.HITTING:
        return f"{int(length)}-game {kind} streak"
    return f"{length:g}-inning {kind} streak"


def find_streaks(
    kind: StreakKind,
    games: Sequence[BattingGame] | Sequence[PitchingGame],
    min_length: float,
    *,
    entity_id: str,
    season: int,
    entity_type: StreakEntityType = StreakEntityType.PLAYER,
) -> list[Streak]:
    """Every maximal streak of at least ``min_length``, longest first.

    Hitting streaks are measured in games and skip games without an at-bat.
    Scoreless-innings streaks are measured in innings pitched and skip outings
    shorter than one inning. ``games`` must be in chronological order.
    """
    if min_length < 1:
        raise ValueError(f"min_length must be at least 1, got {min_length}")

    if kind == StreakKind.HITTING:
        runs = _hitting_streaks([g for g in games if isinstance(g, BattingGame)], season)
    else:
        runs = _scoreless_streaks([g for g in games if isinstance(g, PitchingGame)], season)

    streaks = []
    for run, length in runs:
        if length < min_length:
            continue
        first, last = run[0], run[-1]
        streaks.append(
            Streak(
                id=f"{entity_id}-{kind}-{first.date}-{last.date}",
                kind=kind,
                entity_type=entity_type,
                entity_id=entity_id,
                season=season,
                start_game_id=first.game_id,
                end_game_id=last.game_id,
                start_date=first.date,
                end_date=last.date,
                length=length,
                games=len(run),
                label=_label(kind, length),
                timeline=_timeline(run),
            )
        )
    streaks.sort(key=lambda s: (-s.length, s.start_date))
    return streaks
