import logging

from baseball_analytics.domain.errors import WinExpectancyNotFound
from baseball_analytics.domain.game_state import GameState
from baseball_analytics.domain.result import Err, Ok, Result
from baseball_analytics.domain.win_expectancy import NEUTRAL_WIN_PROBABILITY, Era, WinExpectancy, WinExpectancyEra
from baseball_analytics.repos.protocols import WinExpectancyRepo

logger = logging.getLogger(__name__)


def neutral_win_expectancy(state: GameState, era: Era | None = None) -> WinExpectancy:
    return WinExpectancy(
        inning=state.inning,
        is_bottom=state.is_bottom,
        outs=state.outs,
        runners_code=state.runners_code,
        score_diff=state.score_diff,
        win_probability=NEUTRAL_WIN_PROBABILITY,
        sample_size=0,
        start_year=era.start_year if era is not None else None,
        end_year=era.end_year if era is not None else None,
    )


class WinExpectancyResolver:
    """Historical win-expectancy lookups over canonical game states.

    When an era is given, a record only matches if its year bounds contain the
    era. Among matches the record with the latest end year is used.
    """

    def __init__(self, repo: WinExpectancyRepo) -> None:
        self._repo = repo

    def resolve(self, state: GameState, era: Era | None = None) -> Result[WinExpectancy, WinExpectancyNotFound]:
        record = self._repo.get(state, era)
        if record is None:
            return Err(
                WinExpectancyNotFound(
                    message=f"No win expectancy for {_describe(state)}" + (f" in {era.label}" if era else ""),
                    inning=state.inning,
                    is_bottom=state.is_bottom,
                    outs=state.outs,
                    runners_code=state.runners_code,
                    score_diff=state.score_diff,
                )
            )
        return Ok(record)

    def resolve_or_default(self, state: GameState, era: Era | None = None) -> WinExpectancy:
        return self.resolve(state, era).unwrap_or(neutral_win_expectancy(state, era))

    def resolve_batch(self, states: list[GameState], era: Era | None = None) -> list[WinExpectancy | None]:
        return self._repo.get_batch(states, era)

    def resolve_batch_or_default(self, states: list[GameState], era: Era | None = None) -> list[WinExpectancy]:
        results = self.resolve_batch(states, era)
        return [
            record if record is not None else neutral_win_expectancy(state, era)
            for state, record in zip(states, results, strict=True)
        ]

    def list_eras(self) -> list[WinExpectancyEra]:
        return self._repo.list_eras()

    def upsert(self, record: WinExpectancy) -> int:
        return self._repo.upsert(record)

    def build_table(self, min_sample: int, era: Era | None = None) -> int:
        if min_sample < 1:
            raise ValueError(f"min_sample must be at least 1, got {min_sample}")
        logger.info("Building win expectancy table (min_sample=%d, era=%s)", min_sample, era.label if era else None)
        return self._repo.build_from_plays(min_sample, era)


def _describe(state: GameState) -> str:
    half = "bottom" if state.is_bottom else "top"
    return (
        f"{half} {state.inning}, {state.outs} out, runners {state.runners_code}, "
        f"score diff {state.score_diff:+d}"
    )
