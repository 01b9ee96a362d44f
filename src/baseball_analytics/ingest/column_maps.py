"""Mappers from Retrosheet CSV rows to domain objects.

Play rows follow the column names of Retrosheet's ``plays.csv`` (``gid``,
``pn``, ``top_bot``, ``score_v``, ``br1_pre``, ...); game rows follow
``gameinfo.csv`` (``gid``, ``visteam``, ``hometeam``, ``vruns``, ``hruns``,
...). A mapper returns ``None`` for rows that cannot be used.
"""

import logging
from typing import Any

from baseball_analytics.domain.play import Bases, Game, Play

logger = logging.getLogger(__name__)

PLAY_KEY_COLUMNS = ("gid", "pn", "inning")
GAME_KEY_COLUMNS = ("gid", "hometeam", "visteam")


def _to_optional_int(value: Any) -> int | None:
    if value is None:
        return None
    s = str(value).strip()
    if s == "" or s == "?":
        return None
    return int(float(s))


def _to_int(value: Any, default: int = 0) -> int:
    result = _to_optional_int(value)
    return default if result is None else result


def _to_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    if s == "":
        return None
    return s


def _occupied(value: Any) -> bool:
    """Runner columns hold the runner's id, or are blank when the base is empty."""
    s = _to_optional_str(value)
    return s is not None and s != "0"


def format_date(raw: str) -> str:
    """Convert Retrosheet ``YYYYMMDD`` dates to ISO ``YYYY-MM-DD``; other forms pass through."""
    if len(raw) == 8 and raw.isdigit():
        return f"{raw[:4]}-{raw[4:6]}-{raw[6:]}"
    return raw


def _date_from_game_id(game_id: str) -> str | None:
    # BOS201904010 -> 2019-04-01
    digits = game_id[3:11]
    if len(digits) == 8 and digits.isdigit():
        return format_date(digits)
    return None


def play_mapper(row: dict[str, Any]) -> Play | None:
    game_id = _to_optional_str(row.get("gid"))
    play_num = _to_optional_int(row.get("pn"))
    inning = _to_optional_int(row.get("inning"))
    if game_id is None or play_num is None or inning is None:
        logger.debug("Skipping play row without gid/pn/inning: %s", row)
        return None

    raw_date = _to_optional_str(row.get("date"))
    date = format_date(raw_date) if raw_date is not None else _date_from_game_id(game_id)
    if date is None:
        logger.debug("Skipping play row without a usable date: %s/%s", game_id, play_num)
        return None

    return Play(
        game_id=game_id,
        play_num=play_num,
        inning=inning,
        is_bottom=_to_int(row.get("top_bot")) == 1,
        bat_team=_to_optional_str(row.get("batteam")) or "",
        pit_team=_to_optional_str(row.get("pitteam")) or "",
        date=date,
        batter=_to_optional_str(row.get("batter")) or "",
        pitcher=_to_optional_str(row.get("pitcher")) or "",
        home_score=_to_int(row.get("score_h")),
        away_score=_to_int(row.get("score_v")),
        outs_pre=_to_int(row.get("outs_pre")),
        outs_post=_to_int(row.get("outs_post")),
        bases_pre=Bases(_occupied(row.get("br1_pre")), _occupied(row.get("br2_pre")), _occupied(row.get("br3_pre"))),
        bases_post=Bases(
            _occupied(row.get("br1_post")), _occupied(row.get("br2_post")), _occupied(row.get("br3_post"))
        ),
        bat_hand=_to_optional_str(row.get("bathand")),
        pit_hand=_to_optional_str(row.get("pithand")),
        pitches=_to_optional_str(row.get("pitches")),
        event=_to_optional_str(row.get("event")) or "",
        pa=_to_int(row.get("pa")),
        ab=_to_int(row.get("ab")),
        single=_to_int(row.get("single")),
        double=_to_int(row.get("double")),
        triple=_to_int(row.get("triple")),
        hr=_to_int(row.get("hr")),
        walk=_to_int(row.get("walk")),
        k=_to_int(row.get("k")),
        hbp=_to_int(row.get("hbp")),
        runs=_to_int(row.get("runs")),
        rbi=_to_int(row.get("rbi")),
        er=_to_int(row.get("er")),
    )


def game_mapper(row: dict[str, Any]) -> Game | None:
    game_id = _to_optional_str(row.get("gid"))
    home_team = _to_optional_str(row.get("hometeam"))
    visiting_team = _to_optional_str(row.get("visteam"))
    if game_id is None or home_team is None or visiting_team is None:
        logger.debug("Skipping game row without gid/teams: %s", row)
        return None

    raw_date = _to_optional_str(row.get("date"))
    date = format_date(raw_date) if raw_date is not None else _date_from_game_id(game_id)
    if date is None:
        return None

    return Game(
        game_id=game_id,
        date=date,
        home_team=home_team,
        visiting_team=visiting_team,
        home_score=_to_optional_int(row.get("hruns")),
        visiting_score=_to_optional_int(row.get("vruns")),
        game_number=_to_int(row.get("number")),
        game_type=_to_optional_str(row.get("gametype")) or "regular",
    )
