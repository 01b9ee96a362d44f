import sqlite3

from baseball_analytics.domain.play import Bases, Game, Play
from baseball_analytics.repos.game_repo import SqliteGameRepo
from baseball_analytics.repos.play_repo import SqlitePlayRepo


def make_play(**overrides: object) -> Play:
    defaults: dict[str, object] = {
        "game_id": "BOS201904010",
        "play_num": 1,
        "inning": 1,
        "is_bottom": False,
        "bat_team": "NYA",
        "pit_team": "BOS",
        "date": "2019-04-01",
        "batter": "judga001",
        "pitcher": "salec001",
        "home_score": 0,
        "away_score": 0,
        "outs_pre": 0,
        "outs_post": 1,
        "bases_pre": Bases(),
        "bases_post": Bases(),
        "pitches": "BCX",
        "event": "63",
        "pa": 1,
        "ab": 1,
    }
    defaults.update(overrides)
    return Play(**defaults)  # type: ignore[arg-type]


def make_game(**overrides: object) -> Game:
    defaults: dict[str, object] = {
        "game_id": "BOS201904010",
        "date": "2019-04-01",
        "home_team": "BOS",
        "visiting_team": "NYA",
        "home_score": 5,
        "visiting_score": 3,
    }
    defaults.update(overrides)
    return Game(**defaults)  # type: ignore[arg-type]


def seed_play(conn: sqlite3.Connection, **overrides: object) -> Play:
    play = make_play(**overrides)
    SqlitePlayRepo(conn).upsert(play)
    conn.commit()
    return play


def seed_game(conn: sqlite3.Connection, **overrides: object) -> Game:
    game = make_game(**overrides)
    SqliteGameRepo(conn).upsert(game)
    conn.commit()
    return game
