from dataclasses import dataclass

NEUTRAL_WIN_PROBABILITY = 0.5


@dataclass(frozen=True)
class Era:
    """Inclusive season bounds. ``None`` on either side is unbounded."""

    start_year: int | None = None
    end_year: int | None = None

    @classmethod
    def for_season(cls, season: int) -> "Era":
        return cls(start_year=season, end_year=season)

    @property
    def label(self) -> str:
        if self.start_year is None and self.end_year is None:
            return "All Time"
        if self.start_year == self.end_year:
            return f"{self.start_year} Season"
        start = self.start_year if self.start_year is not None else ""
        end = self.end_year if self.end_year is not None else ""
        return f"{start}-{end} Era"


@dataclass(frozen=True)
class WinExpectancy:
    """Historical probability that the home team wins from a game state."""

    inning: int
    is_bottom: bool
    outs: int
    runners_code: str
    score_diff: int
    win_probability: float
    sample_size: int
    start_year: int | None = None
    end_year: int | None = None
    id: int | None = None
    updated_at: str | None = None

    @property
    def era(self) -> Era:
        return Era(start_year=self.start_year, end_year=self.end_year)

    def covers(self, era: Era) -> bool:
        """True when this record's year bounds contain ``era``."""
        if self.start_year is not None and (era.start_year is None or era.start_year < self.start_year):
            return False
        if self.end_year is not None and (era.end_year is None or era.end_year > self.end_year):
            return False
        return True


@dataclass(frozen=True)
class WinExpectancyEra:
    start_year: int | None
    end_year: int | None
    label: str
    state_count: int
    total_sample: int


def rank_key(record: WinExpectancy) -> tuple[bool, int, bool, int, int]:
    """Sort key placing the preferred record first.

    Latest end year wins with unbounded end years last, then latest start year,
    then lowest id.
    """
    return (
        record.end_year is None,
        -(record.end_year or 0),
        record.start_year is None,
        -(record.start_year or 0),
        record.id if record.id is not None else 0,
    )


def best_match(candidates: list[WinExpectancy], era: Era | None = None) -> WinExpectancy | None:
    eligible = [c for c in candidates if era is None or c.covers(era)]
    if not eligible:
        return None
    return min(eligible, key=rank_key)
