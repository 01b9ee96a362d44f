from dataclasses import dataclass


@dataclass(frozen=True)
class Bases:
    """Occupancy of first, second and third base."""

    first: bool = False
    second: bool = False
    third: bool = False

    @property
    def runners_on(self) -> int:
        return int(self.first) + int(self.second) + int(self.third)


@dataclass(frozen=True)
class Play:
    """One plate appearance (or constituent action) from Retrosheet play-by-play.

    Scores and outs are recorded before the play; ``runs`` is the number of
    runs that scored on it. ``date`` is ISO formatted (YYYY-MM-DD).
    """

    game_id: str
    play_num: int
    inning: int
    is_bottom: bool
    bat_team: str
    pit_team: str
    date: str
    batter: str
    pitcher: str
    home_score: int = 0
    away_score: int = 0
    outs_pre: int = 0
    outs_post: int = 0
    bases_pre: Bases = Bases()
    bases_post: Bases = Bases()
    bat_hand: str | None = None
    pit_hand: str | None = None
    pitches: str | None = None
    event: str = ""
    pa: int = 1
    ab: int = 0
    single: int = 0
    double: int = 0
    triple: int = 0
    hr: int = 0
    walk: int = 0
    k: int = 0
    hbp: int = 0
    runs: int = 0
    rbi: int = 0
    er: int = 0

    @property
    def season(self) -> int:
        return int(self.date[:4])

    @property
    def hits(self) -> int:
        return self.single + self.double + self.triple + self.hr

    @property
    def home_score_post(self) -> int:
        return self.home_score + (self.runs if self.is_bottom else 0)

    @property
    def away_score_post(self) -> int:
        return self.away_score + (0 if self.is_bottom else self.runs)

    @property
    def ends_half_inning(self) -> bool:
        # Retrosheet resets outs_post to 0 when the third out is recorded.
        return self.outs_post >= 3 or (self.outs_pre == 2 and self.outs_post == 0)

    @property
    def outs_recorded(self) -> int:
        if self.ends_half_inning:
            return 3 - self.outs_pre
        return self.outs_post - self.outs_pre


@dataclass(frozen=True)
class Game:
    game_id: str
    date: str
    home_team: str
    visiting_team: str
    home_score: int | None = None
    visiting_score: int | None = None
    game_number: int = 0
    game_type: str = "regular"

    @property
    def season(self) -> int:
        return int(self.date[:4])

    @property
    def home_won(self) -> bool | None:
        if self.home_score is None or self.visiting_score is None or self.home_score == self.visiting_score:
            return None
        return self.home_score > self.visiting_score
