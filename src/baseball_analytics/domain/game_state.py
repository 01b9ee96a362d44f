from dataclasses import dataclass

MAX_LOOKUP_INNING = 9
MAX_SCORE_DIFF = 11
EMPTY_BASES = "___"


@dataclass(frozen=True, order=True)
class GameState:
    """Canonical game situation used as a win-expectancy lookup key.

    ``score_diff`` is from the batting team's perspective. ``runners_code`` is
    positional: ``"1_3"`` means runners on first and third.
    """

    inning: int
    is_bottom: bool
    outs: int
    runners_code: str
    score_diff: int
