from baseball_analytics.domain.errors import PlayNotFound
from baseball_analytics.domain.leverage import LeverageRole
from baseball_analytics.domain.pitch import PitchEvent, PitchFilter
from baseball_analytics.domain.play import Play
from baseball_analytics.domain.result import Err, Ok, Result
from baseball_analytics.repos.protocols import PlayRepo
from baseball_analytics.services.pitch_sequence import decode_pitches


def matches(pitch: PitchEvent, pitch_filter: PitchFilter) -> bool:
    checks = (
        (pitch_filter.game_id, pitch.game_id),
        (pitch_filter.batter, pitch.batter),
        (pitch_filter.pitcher, pitch.pitcher),
        (pitch_filter.pitch_type, pitch.pitch_type),
        (pitch_filter.balls, pitch.balls),
        (pitch_filter.strikes, pitch.strikes),
        (pitch_filter.is_ball, pitch.is_ball),
        (pitch_filter.is_strike, pitch.is_strike),
        (pitch_filter.is_in_play, pitch.is_in_play),
    )
    return all(wanted is None or wanted == actual for wanted, actual in checks)


def decode_plays(plays: list[Play]) -> list[PitchEvent]:
    return [pitch for play in plays for pitch in decode_pitches(play)]


class PitchService:
    def __init__(self, play_repo: PlayRepo) -> None:
        self._play_repo = play_repo

    def for_play(self, game_id: str, play_num: int) -> Result[list[PitchEvent], PlayNotFound]:
        play = self._play_repo.get_by_game_play(game_id, play_num)
        if play is None:
            return Err(
                PlayNotFound(message=f"Play {play_num} not found in game {game_id}", game_id=game_id, play_num=play_num)
            )
        return Ok(decode_pitches(play))

    def for_game(self, game_id: str) -> Result[list[PitchEvent], PlayNotFound]:
        plays = self._play_repo.get_by_game(game_id)
        if not plays:
            return Err(PlayNotFound(message=f"No plays found for game {game_id}", game_id=game_id))
        return Ok(decode_plays(plays))

    def search(self, pitch_filter: PitchFilter, season: int | None = None) -> list[PitchEvent]:
        """Decode the plays selected by game or player and keep the pitches matching the filter."""
        if pitch_filter.game_id is not None:
            plays = self._play_repo.get_by_game(pitch_filter.game_id)
        elif season is not None and pitch_filter.batter is not None:
            plays = self._play_repo.get_by_player_season(pitch_filter.batter, season, LeverageRole.BATTER)
        elif season is not None and pitch_filter.pitcher is not None:
            plays = self._play_repo.get_by_player_season(pitch_filter.pitcher, season, LeverageRole.PITCHER)
        else:
            raise ValueError("A pitch search needs a game id, or a batter or pitcher with a season")
        return [p for p in decode_plays(plays) if matches(p, pitch_filter)]
