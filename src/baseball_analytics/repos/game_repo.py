import sqlite3

from baseball_analytics.domain.play import Game


class SqliteGameRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, game: Game) -> None:
        self._conn.execute(
            """INSERT INTO game
                   (game_id, date, game_number, home_team, visiting_team,
                    home_score, visiting_score, game_type)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(game_id) DO UPDATE SET
                   date=excluded.date,
                   game_number=excluded.game_number,
                   home_team=excluded.home_team,
                   visiting_team=excluded.visiting_team,
                   home_score=excluded.home_score,
                   visiting_score=excluded.visiting_score,
                   game_type=excluded.game_type""",
            (
                game.game_id,
                game.date,
                game.game_number,
                game.home_team,
                game.visiting_team,
                game.home_score,
                game.visiting_score,
                game.game_type,
            ),
        )

    def get(self, game_id: str) -> Game | None:
        row = self._conn.execute("SELECT * FROM game WHERE game_id = ?", (game_id,)).fetchone()
        return self._row_to_game(row) if row else None

    def get_by_team_season(self, team_id: str, season: int) -> list[Game]:
        rows = self._conn.execute(
            """SELECT * FROM game
               WHERE (home_team = ? OR visiting_team = ?) AND substr(date, 1, 4) = ?
               ORDER BY date, game_number, game_id""",
            (team_id, team_id, str(season)),
        ).fetchall()
        return [self._row_to_game(row) for row in rows]

    @staticmethod
    def _row_to_game(row: sqlite3.Row) -> Game:
        return Game(
            game_id=row["game_id"],
            date=row["date"],
            game_number=row["game_number"],
            home_team=row["home_team"],
            visiting_team=row["visiting_team"],
            home_score=row["home_score"],
            visiting_score=row["visiting_score"],
            game_type=row["game_type"],
        )
