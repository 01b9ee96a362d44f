"""Normalization of raw game situations into win-expectancy lookup keys."""

from baseball_analytics.domain.game_state import EMPTY_BASES, MAX_LOOKUP_INNING, MAX_SCORE_DIFF, GameState
from baseball_analytics.domain.play import Bases

_OCCUPIED = frozenset("123")


def runners_code(first: bool, second: bool, third: bool) -> str:
    """Positional runners code: ``runners_code(True, False, True) == "1_3"``."""
    return f"{'1' if first else '_'}{'2' if second else '_'}{'3' if third else '_'}"


def bases_code(bases: Bases) -> str:
    return runners_code(bases.first, bases.second, bases.third)


def normalize_runners(runners: Bases | str) -> str:
    """Accept a ``Bases`` or a code in either ``"1_3"`` or ``"101"`` form."""
    if isinstance(runners, Bases):
        return bases_code(runners)
    if len(runners) != 3:
        raise ValueError(f"Runners code must have 3 positions, got {runners!r}")
    return runners_code(*(ch in _OCCUPIED for ch in runners))


def display_bases(code: str) -> str:
    """Convert a runners code to the ``"101"`` display form."""
    return "".join("1" if ch in _OCCUPIED else "0" for ch in code)


def runners_on(code: str) -> int:
    """Number of occupied bases; works with either code form."""
    return sum(1 for ch in code if ch in _OCCUPIED)


def clamp_score_diff(score_diff: int) -> int:
    return max(-MAX_SCORE_DIFF, min(MAX_SCORE_DIFF, score_diff))


def canonicalize(
    inning: int,
    is_bottom: bool,
    outs: int,
    runners: Bases | str = EMPTY_BASES,
    score_diff: int = 0,
) -> GameState:
    return GameState(
        inning=min(inning, MAX_LOOKUP_INNING),
        is_bottom=is_bottom,
        outs=outs,
        runners_code=normalize_runners(runners),
        score_diff=clamp_score_diff(score_diff),
    )
