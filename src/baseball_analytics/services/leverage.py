import logging
from collections import defaultdict

from baseball_analytics.domain.errors import PlayNotFound
from baseball_analytics.domain.game_state import EMPTY_BASES, GameState
from baseball_analytics.domain.leverage import (
    HIGH_LEVERAGE_THRESHOLD,
    LOW_LEVERAGE_THRESHOLD,
    GameWinProbabilitySummary,
    LeverageRole,
    PlateAppearanceLeverage,
    PlayerLeverageSummary,
)
from baseball_analytics.domain.play import Play
from baseball_analytics.domain.result import Err, Ok, Result
from baseball_analytics.domain.win_expectancy import Era
from baseball_analytics.services.game_state_codec import bases_code, canonicalize, display_bases, runners_on
from baseball_analytics.services.win_expectancy import WinExpectancyResolver

logger = logging.getLogger(__name__)

LATE_INNING = 7
FINAL_INNING = 9
LATE_INNING_MULTIPLIER = 1.5
FINAL_INNING_MULTIPLIER = 2.0
ONE_RUN_MULTIPLIER = 1.5
TWO_RUN_MULTIPLIER = 1.2
BLOWOUT_MARGIN = 5
BLOWOUT_MULTIPLIER = 0.3
PER_RUNNER_BONUS = 0.2
TWO_OUT_MULTIPLIER = 1.3


def leverage_index(inning: int, outs: int, score_diff: int, runners_code: str) -> float:
    """Heuristic Leverage Index for a game situation.

    Late innings, close scores, runners on base and two outs all raise the
    index; blowouts suppress it. There is no upper bound.
    """
    li = 1.0
    if inning >= LATE_INNING:
        li *= LATE_INNING_MULTIPLIER
    if inning >= FINAL_INNING:
        li *= FINAL_INNING_MULTIPLIER

    margin = abs(score_diff)
    if margin <= 1:
        li *= ONE_RUN_MULTIPLIER
    elif margin <= 2:
        li *= TWO_RUN_MULTIPLIER
    elif margin >= BLOWOUT_MARGIN:
        li *= BLOWOUT_MULTIPLIER

    li *= 1.0 + PER_RUNNER_BONUS * runners_on(runners_code)
    if outs == 2:
        li *= TWO_OUT_MULTIPLIER
    return li


def batting_score_diff(home_score: int, away_score: int, is_bottom: bool) -> int:
    return home_score - away_score if is_bottom else away_score - home_score


def state_before(play: Play) -> GameState:
    return canonicalize(
        play.inning,
        play.is_bottom,
        play.outs_pre,
        play.bases_pre,
        batting_score_diff(play.home_score, play.away_score, play.is_bottom),
    )


def state_after(play: Play) -> GameState:
    """The situation facing the next batter once the play is over.

    A play that ends the half-inning hands the bat to the other team with the
    bases empty and nobody out; after the bottom half the inning advances.
    """
    home, away = play.home_score_post, play.away_score_post
    if play.ends_half_inning:
        inning = play.inning + 1 if play.is_bottom else play.inning
        is_bottom = not play.is_bottom
        return canonicalize(inning, is_bottom, 0, EMPTY_BASES, batting_score_diff(home, away, is_bottom))
    return canonicalize(
        play.inning,
        play.is_bottom,
        play.outs_post,
        play.bases_post,
        batting_score_diff(home, away, play.is_bottom),
    )


def _play_era(play: Play, era: Era | None) -> Era | None:
    if era is not None:
        return era
    if play.date:
        return Era.for_season(play.season)
    return None


def _involves(play: Play, player_id: str, role: LeverageRole) -> bool:
    if role == LeverageRole.BATTER:
        return play.batter == player_id
    if role == LeverageRole.PITCHER:
        return play.pitcher == player_id
    return player_id in (play.batter, play.pitcher)


def _credited_wpa(record: PlateAppearanceLeverage, player_id: str) -> float:
    # wpa is from the home side; a batter plays for the home team in the bottom half, a pitcher in the top
    for_home = record.is_bottom if record.batter_id == player_id else not record.is_bottom
    return record.wpa if for_home else -record.wpa


class LeverageEstimator:
    def __init__(self, resolver: WinExpectancyResolver) -> None:
        self._resolver = resolver

    def plate_appearance_leverage(self, play: Play, era: Era | None = None) -> PlateAppearanceLeverage:
        lookup_era = _play_era(play, era)
        before = self._resolver.resolve_or_default(state_before(play), lookup_era)
        after = self._resolver.resolve_or_default(state_after(play), lookup_era)
        return self._build_record(play, before.win_probability, after.win_probability)

    def game_plate_leverages(
        self,
        plays: list[Play],
        min_li: float | None = None,
        era: Era | None = None,
    ) -> list[PlateAppearanceLeverage]:
        """Leverage for every plate appearance, with one batch lookup per era."""
        pas = [p for p in plays if p.pa > 0]
        by_era: dict[Era | None, list[int]] = defaultdict(list)
        for i, play in enumerate(pas):
            by_era[_play_era(play, era)].append(i)

        records: list[PlateAppearanceLeverage | None] = [None] * len(pas)
        for lookup_era, indices in by_era.items():
            states = [state_before(pas[i]) for i in indices] + [state_after(pas[i]) for i in indices]
            resolved = self._resolver.resolve_batch_or_default(states, lookup_era)
            for offset, i in enumerate(indices):
                records[i] = self._build_record(
                    pas[i],
                    resolved[offset].win_probability,
                    resolved[len(indices) + offset].win_probability,
                )

        result = [r for r in records if r is not None]
        if min_li is not None:
            result = [r for r in result if r.leverage_index >= min_li]
        logger.debug("Computed leverage for %d plate appearances", len(result))
        return result

    def player_leverage_summary(
        self,
        player_id: str,
        season: int,
        plays: list[Play],
        role: LeverageRole = LeverageRole.ANY,
    ) -> PlayerLeverageSummary:
        selected = [p for p in plays if _involves(p, player_id, role) and p.season == season]
        records = self.game_plate_leverages(selected)
        if not records:
            return PlayerLeverageSummary(
                player_id=player_id,
                season=season,
                role=role,
                plate_appearances=0,
                avg_leverage_index=0.0,
                low_leverage_pa=0,
                medium_leverage_pa=0,
                high_leverage_pa=0,
                win_probability_added=0.0,
            )

        low = sum(1 for r in records if r.leverage_index < LOW_LEVERAGE_THRESHOLD)
        high = sum(1 for r in records if r.leverage_index > HIGH_LEVERAGE_THRESHOLD)
        return PlayerLeverageSummary(
            player_id=player_id,
            season=season,
            role=role,
            plate_appearances=len(records),
            avg_leverage_index=sum(r.leverage_index for r in records) / len(records),
            low_leverage_pa=low,
            medium_leverage_pa=len(records) - low - high,
            high_leverage_pa=high,
            win_probability_added=sum(_credited_wpa(r, player_id) for r in records),
        )

    def high_leverage_pas(
        self,
        player_id: str,
        season: int,
        plays: list[Play],
        min_li: float = HIGH_LEVERAGE_THRESHOLD,
        role: LeverageRole = LeverageRole.ANY,
    ) -> list[PlateAppearanceLeverage]:
        selected = [p for p in plays if _involves(p, player_id, role) and p.season == season]
        records = self.game_plate_leverages(selected, min_li=min_li)
        return sorted(records, key=lambda r: (-r.leverage_index, r.game_id, r.event_id))

    def game_win_probability_summary(
        self, game_id: str, plays: list[Play]
    ) -> Result[GameWinProbabilitySummary, PlayNotFound]:
        game_plays = sorted((p for p in plays if p.game_id == game_id), key=lambda p: p.play_num)
        records = self.game_plate_leverages(game_plays)
        if not records:
            return Err(PlayNotFound(message=f"No plays found for game {game_id}", game_id=game_id))

        positive = max(records, key=lambda r: r.wpa)
        negative = min(records, key=lambda r: r.wpa)
        away_team = next((p.bat_team for p in game_plays if not p.is_bottom), game_plays[0].pit_team)
        return Ok(
            GameWinProbabilitySummary(
                game_id=game_id,
                season=game_plays[0].season,
                home_team=game_id[:3],
                away_team=away_team,
                home_win_prob_start=records[0].win_expectancy_before,
                home_win_prob_end=records[-1].win_expectancy_after,
                biggest_positive_swing=positive if positive.wpa > 0 else None,
                biggest_negative_swing=negative if negative.wpa < 0 else None,
            )
        )

    @staticmethod
    def _build_record(play: Play, we_before: float, we_after: float) -> PlateAppearanceLeverage:
        code = bases_code(play.bases_pre)
        return PlateAppearanceLeverage(
            game_id=play.game_id,
            event_id=play.play_num,
            batter_id=play.batter,
            pitcher_id=play.pitcher,
            inning=play.inning,
            is_bottom=play.is_bottom,
            home_score_before=play.home_score,
            away_score_before=play.away_score,
            outs_before=play.outs_pre,
            bases_before=display_bases(code),
            leverage_index=leverage_index(play.inning, play.outs_pre, play.home_score - play.away_score, code),
            win_expectancy_before=we_before,
            win_expectancy_after=we_after,
            description=play.event,
        )
