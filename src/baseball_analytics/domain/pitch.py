from dataclasses import dataclass
from enum import StrEnum


class PitchKind(StrEnum):
    BALL = "ball"
    CALLED_STRIKE = "called_strike"
    FOUL = "foul"
    SWINGING_STRIKE = "swinging_strike"
    IN_PLAY = "in_play"
    FOUL_BUNT = "foul_bunt"
    MISSED_BUNT = "missed_bunt"
    FOUL_ON_BUNT = "foul_on_bunt"
    PITCHOUT = "pitchout"
    FOUL_TIP = "foul_tip"
    CALLED_STRIKE_ON_APPEAL = "called_strike_on_appeal"
    HIT_BY_PITCH = "hit_by_pitch"
    INTENTIONAL_BALL = "intentional_ball"
    NO_PITCH = "no_pitch"
    AUTOMATIC_BALL = "automatic_ball"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PitchEvent:
    """A single pitch decoded from a play's pitch sequence.

    ``balls`` and ``strikes`` are the count after this pitch. ``outcome`` is
    only set on the final pitch of the plate appearance.
    """

    game_id: str
    play_num: int
    seq_num: int
    pitch_type: str
    kind: PitchKind
    balls: int
    strikes: int
    is_ball: bool
    is_strike: bool
    is_in_play: bool
    description: str
    inning: int = 0
    is_bottom: bool = False
    batter: str = ""
    pitcher: str = ""
    outcome: str | None = None


@dataclass(frozen=True)
class PitchFilter:
    game_id: str | None = None
    batter: str | None = None
    pitcher: str | None = None
    pitch_type: str | None = None
    balls: int | None = None
    strikes: int | None = None
    is_ball: bool | None = None
    is_strike: bool | None = None
    is_in_play: bool | None = None
