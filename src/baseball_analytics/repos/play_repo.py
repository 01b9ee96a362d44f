import sqlite3

from baseball_analytics.domain.leverage import LeverageRole
from baseball_analytics.domain.play import Bases, Play

_COUNT_COLUMNS = ("pa", "ab", "single", "double", "triple", "hr", "walk", "k", "hbp", "runs", "rbi", "er")


class SqlitePlayRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, play: Play) -> None:
        self._conn.execute(
            """INSERT INTO play
                   (game_id, play_num, inning, is_bottom, bat_team, pit_team, date,
                    batter, pitcher, bat_hand, pit_hand, home_score, away_score,
                    outs_pre, outs_post, br1_pre, br2_pre, br3_pre, br1_post, br2_post, br3_post,
                    pitches, event, pa, ab, single, double, triple, hr, walk, k, hbp, runs, rbi, er)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?,
                       ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(game_id, play_num) DO UPDATE SET
                   inning=excluded.inning, is_bottom=excluded.is_bottom,
                   bat_team=excluded.bat_team, pit_team=excluded.pit_team, date=excluded.date,
                   batter=excluded.batter, pitcher=excluded.pitcher,
                   bat_hand=excluded.bat_hand, pit_hand=excluded.pit_hand,
                   home_score=excluded.home_score, away_score=excluded.away_score,
                   outs_pre=excluded.outs_pre, outs_post=excluded.outs_post,
                   br1_pre=excluded.br1_pre, br2_pre=excluded.br2_pre, br3_pre=excluded.br3_pre,
                   br1_post=excluded.br1_post, br2_post=excluded.br2_post, br3_post=excluded.br3_post,
                   pitches=excluded.pitches, event=excluded.event,
                   pa=excluded.pa, ab=excluded.ab, single=excluded.single, double=excluded.double,
                   triple=excluded.triple, hr=excluded.hr, walk=excluded.walk, k=excluded.k,
                   hbp=excluded.hbp, runs=excluded.runs, rbi=excluded.rbi, er=excluded.er""",
            (
                play.game_id,
                play.play_num,
                play.inning,
                int(play.is_bottom),
                play.bat_team,
                play.pit_team,
                play.date,
                play.batter,
                play.pitcher,
                play.bat_hand,
                play.pit_hand,
                play.home_score,
                play.away_score,
                play.outs_pre,
                play.outs_post,
                int(play.bases_pre.first),
                int(play.bases_pre.second),
                int(play.bases_pre.third),
                int(play.bases_post.first),
                int(play.bases_post.second),
                int(play.bases_post.third),
                play.pitches,
                play.event,
                *(getattr(play, col) for col in _COUNT_COLUMNS),
            ),
        )

    def get_by_game(self, game_id: str) -> list[Play]:
        rows = self._conn.execute(
            "SELECT * FROM play WHERE game_id = ? ORDER BY play_num",
            (game_id,),
        ).fetchall()
        return [self._row_to_play(row) for row in rows]

    def get_by_game_play(self, game_id: str, play_num: int) -> Play | None:
        row = self._conn.execute(
            "SELECT * FROM play WHERE game_id = ? AND play_num = ?",
            (game_id, play_num),
        ).fetchone()
        return self._row_to_play(row) if row else None

    def get_by_player_season(self, player_id: str, season: int, role: LeverageRole) -> list[Play]:
        if role == LeverageRole.BATTER:
            where = "batter = ?"
            params: tuple[str, ...] = (player_id,)
        elif role == LeverageRole.PITCHER:
            where = "pitcher = ?"
            params = (player_id,)
        else:
            where = "(batter = ? OR pitcher = ?)"
            params = (player_id, player_id)
        rows = self._conn.execute(
            f"""SELECT * FROM play
                WHERE {where} AND substr(date, 1, 4) = ?
                ORDER BY date, game_id, play_num""",
            (*params, str(season)),
        ).fetchall()
        return [self._row_to_play(row) for row in rows]

    def count(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) FROM play").fetchone()
        return row[0]

    @staticmethod
    def _row_to_play(row: sqlite3.Row) -> Play:
        return Play(
            game_id=row["game_id"],
            play_num=row["play_num"],
            inning=row["inning"],
            is_bottom=bool(row["is_bottom"]),
            bat_team=row["bat_team"],
            pit_team=row["pit_team"],
            date=row["date"],
            batter=row["batter"],
            pitcher=row["pitcher"],
            bat_hand=row["bat_hand"],
            pit_hand=row["pit_hand"],
            home_score=row["home_score"],
            away_score=row["away_score"],
            outs_pre=row["outs_pre"],
            outs_post=row["outs_post"],
            bases_pre=Bases(bool(row["br1_pre"]), bool(row["br2_pre"]), bool(row["br3_pre"])),
            bases_post=Bases(bool(row["br1_post"]), bool(row["br2_post"]), bool(row["br3_post"])),
            pitches=row["pitches"],
            event=row["event"],
            **{col: row[col] for col in _COUNT_COLUMNS},
        )
