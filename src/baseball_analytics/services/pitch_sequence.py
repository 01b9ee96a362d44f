"""Decoding of Retrosheet pitch-sequence strings into individual pitches.

Each character of a play's ``pitches`` field is either a pitch (``B``, ``C``,
``X``, ...) or an annotation that is not a pitch (``.`` play not involving the
batter, ``>`` runner going, ``*`` blocked pitch, ``+`` pickoff throw by the
catcher, ``1``/``2``/``3`` pickoff throws). Annotations are dropped. The ball
and strike count is threaded through the sequence as an immutable ``Count``.
"""

import logging
from dataclasses import dataclass

from baseball_analytics.domain.pitch import PitchEvent, PitchKind
from baseball_analytics.domain.play import Play

logger = logging.getLogger(__name__)

SKIP_MARKERS = frozenset(".>*+123")


@dataclass(frozen=True)
class PitchCode:
    kind: PitchKind
    description: str
    is_ball: bool = False
    is_strike: bool = False
    is_in_play: bool = False
    adds_ball: bool = False
    adds_strike: bool = False
    capped_at_two_strikes: bool = False


PITCH_CODES: dict[str, PitchCode] = {
    "B": PitchCode(PitchKind.BALL, "Ball", is_ball=True, adds_ball=True),
    "C": PitchCode(PitchKind.CALLED_STRIKE, "Called strike", is_strike=True, adds_strike=True),
    "F": PitchCode(PitchKind.FOUL, "Foul ball", is_strike=True, adds_strike=True, capped_at_two_strikes=True),
    "S": PitchCode(PitchKind.SWINGING_STRIKE, "Swinging strike", is_strike=True, adds_strike=True),
    "X": PitchCode(PitchKind.IN_PLAY, "Ball in play", is_in_play=True),
    "L": PitchCode(PitchKind.FOUL_BUNT, "Foul bunt", is_strike=True, adds_strike=True, capped_at_two_strikes=True),
    "M": PitchCode(PitchKind.MISSED_BUNT, "Missed bunt attempt", is_strike=True, adds_strike=True),
    "O": PitchCode(
        PitchKind.FOUL_ON_BUNT, "Foul ball on bunt", is_strike=True, adds_strike=True, capped_at_two_strikes=True
    ),
    "P": PitchCode(PitchKind.PITCHOUT, "Pitchout", is_ball=True, adds_ball=True),
    "T": PitchCode(PitchKind.FOUL_TIP, "Foul tip", is_strike=True, adds_strike=True),
    "V": PitchCode(PitchKind.CALLED_STRIKE_ON_APPEAL, "Called strike (on appeal)", is_strike=True, adds_strike=True),
    "H": PitchCode(PitchKind.HIT_BY_PITCH, "Hit by pitch", is_ball=True),
    "I": PitchCode(PitchKind.INTENTIONAL_BALL, "Intentional ball", is_ball=True, adds_ball=True),
    "N": PitchCode(PitchKind.NO_PITCH, "No pitch (balk, interference, etc.)"),
    "A": PitchCode(PitchKind.AUTOMATIC_BALL, "Automatic ball", is_ball=True, adds_ball=True),
}


@dataclass(frozen=True)
class Count:
    balls: int = 0
    strikes: int = 0

    def after(self, code: PitchCode) -> "Count":
        """The count after a pitch. Foul-type strikes never take strikes past two."""
        balls = self.balls + 1 if code.adds_ball else self.balls
        strikes = self.strikes
        if code.adds_strike and not (code.capped_at_two_strikes and strikes >= 2):
            strikes += 1
        return Count(balls=balls, strikes=strikes)


def classify(char: str) -> PitchCode:
    code = PITCH_CODES.get(char)
    if code is None:
        return PitchCode(PitchKind.UNKNOWN, f"Unknown pitch type: {char}")
    return code


def decode_sequence(sequence: str) -> list[tuple[str, PitchCode, Count]]:
    """Fold over a pitch string, yielding (char, code, count-after) for every pitch."""
    decoded: list[tuple[str, PitchCode, Count]] = []
    count = Count()
    for char in sequence:
        if char in SKIP_MARKERS:
            continue
        code = classify(char)
        if code.kind is PitchKind.NO_PITCH:
            continue
        if code.kind is PitchKind.UNKNOWN:
            logger.warning("Unrecognized pitch code %r in sequence %r", char, sequence)
        count = count.after(code)
        decoded.append((char, code, count))
    return decoded


def decode_pitches(play: Play) -> list[PitchEvent]:
    if not play.pitches:
        return []

    decoded = decode_sequence(play.pitches)
    last = len(decoded) - 1
    return [
        PitchEvent(
            game_id=play.game_id,
            play_num=play.play_num,
            seq_num=i + 1,
            pitch_type=char,
            kind=code.kind,
            balls=count.balls,
            strikes=count.strikes,
            is_ball=code.is_ball,
            is_strike=code.is_strike,
            is_in_play=code.is_in_play,
            description=code.description,
            inning=play.inning,
            is_bottom=play.is_bottom,
            batter=play.batter,
            pitcher=play.pitcher,
            outcome=play.event if i == last else None,
        )
        for i, (char, code, count) in enumerate(decoded)
    ]
