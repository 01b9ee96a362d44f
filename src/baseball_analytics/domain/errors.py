from dataclasses import dataclass


@dataclass(frozen=True)
class AnalyticsError:
    message: str


@dataclass(frozen=True)
class WinExpectancyNotFound(AnalyticsError):
    inning: int
    is_bottom: bool
    outs: int
    runners_code: str
    score_diff: int


@dataclass(frozen=True)
class PlayNotFound(AnalyticsError):
    game_id: str
    play_num: int | None = None


@dataclass(frozen=True)
class IngestError(AnalyticsError):
    source_type: str
    source_detail: str
    target_table: str
