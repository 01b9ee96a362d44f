import sqlite3

from baseball_analytics.domain.run_differential import TeamGame
from baseball_analytics.domain.streak import BattingGame, PitchingGame

# Retrosheet records outs_post as 0 on the play that ends a half-inning
_OUTS_RECORDED = """CASE WHEN outs_post >= 3 OR (outs_pre = 2 AND outs_post = 0)
                         THEN 3 - outs_pre
                         ELSE outs_post - outs_pre END"""


class SqliteGameLogRepo:
    """Per-game aggregates derived from the play and game tables."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def batting_games(self, player_id: str, season: int) -> list[BattingGame]:
        rows = self._conn.execute(
            """SELECT game_id, MIN(date) AS date,
                      SUM(ab) AS at_bats,
                      SUM(single + double + triple + hr) AS hits
               FROM play
               WHERE batter = ? AND substr(date, 1, 4) = ?
               GROUP BY game_id
               ORDER BY date, game_id""",
            (player_id, str(season)),
        ).fetchall()
        return [
            BattingGame(game_id=row["game_id"], date=row["date"], at_bats=row["at_bats"], hits=row["hits"])
            for row in rows
        ]

    def pitching_games(self, player_id: str, season: int) -> list[PitchingGame]:
        rows = self._conn.execute(
            f"""SELECT game_id, MIN(date) AS date,
                       SUM({_OUTS_RECORDED}) AS outs_recorded,
                       SUM(er) AS earned_runs
                FROM play
                WHERE pitcher = ? AND substr(date, 1, 4) = ?
                GROUP BY game_id
                ORDER BY date, game_id""",
            (player_id, str(season)),
        ).fetchall()
        return [
            PitchingGame(
                game_id=row["game_id"],
                date=row["date"],
                outs_recorded=row["outs_recorded"],
                earned_runs=row["earned_runs"],
            )
            for row in rows
        ]

    def team_games(self, team_id: str, season: int) -> list[TeamGame]:
        rows = self._conn.execute(
            """SELECT * FROM game
               WHERE (home_team = ? OR visiting_team = ?)
                 AND substr(date, 1, 4) = ?
                 AND game_type = 'regular'
                 AND home_score IS NOT NULL AND visiting_score IS NOT NULL
               ORDER BY date, game_number, game_id""",
            (team_id, team_id, str(season)),
        ).fetchall()
        return [self._row_to_team_game(row, team_id) for row in rows]

    @staticmethod
    def _row_to_team_game(row: sqlite3.Row, team_id: str) -> TeamGame:
        home = row["home_team"] == team_id
        return TeamGame(
            game_id=row["game_id"],
            date=row["date"],
            opponent_id=row["visiting_team"] if home else row["home_team"],
            home=home,
            runs_scored=row["home_score"] if home else row["visiting_score"],
            runs_allowed=row["visiting_score"] if home else row["home_score"],
        )
