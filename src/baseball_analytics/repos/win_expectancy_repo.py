import logging
import sqlite3
from collections import defaultdict

from baseball_analytics.domain.game_state import MAX_LOOKUP_INNING, MAX_SCORE_DIFF, GameState
from baseball_analytics.domain.win_expectancy import Era, WinExpectancy, WinExpectancyEra, best_match

logger = logging.getLogger(__name__)

# 5 bound parameters per state keeps each batch well under SQLite's variable limit
_BATCH_CHUNK = 150

_STATE_COLUMNS = "inning, is_bottom, outs, runners_state, score_diff"


class SqliteWinExpectancyRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, state: GameState, era: Era | None = None) -> WinExpectancy | None:
        rows = self._conn.execute(
            """SELECT * FROM win_expectancy_historical
               WHERE inning = ? AND is_bottom = ? AND outs = ? AND runners_state = ? AND score_diff = ?""",
            self._state_params(state),
        ).fetchall()
        match = best_match([self._row_to_record(row) for row in rows], era)
        logger.debug("Win expectancy lookup %s era=%s: %s", state, era, "hit" if match else "miss")
        return match

    def get_batch(self, states: list[GameState], era: Era | None = None) -> list[WinExpectancy | None]:
        if not states:
            return []
        unique = list(dict.fromkeys(states))
        candidates: dict[GameState, list[WinExpectancy]] = defaultdict(list)
        for start in range(0, len(unique), _BATCH_CHUNK):
            chunk = unique[start : start + _BATCH_CHUNK]
            placeholders = ", ".join("(?, ?, ?, ?, ?)" for _ in chunk)
            params = [p for state in chunk for p in self._state_params(state)]
            rows = self._conn.execute(
                f"""SELECT * FROM win_expectancy_historical
                    WHERE ({_STATE_COLUMNS}) IN (VALUES {placeholders})""",
                params,
            ).fetchall()
            for row in rows:
                record = self._row_to_record(row)
                candidates[self._record_state(record)].append(record)
        logger.debug("Batch win expectancy lookup: %d states (%d distinct)", len(states), len(unique))
        best = {state: best_match(candidates.get(state, []), era) for state in unique}
        return [best[state] for state in states]

    def list_eras(self) -> list[WinExpectancyEra]:
        rows = self._conn.execute(
            """SELECT start_year, end_year, COUNT(*) AS state_count, SUM(sample_size) AS total_sample
               FROM win_expectancy_historical
               GROUP BY start_year, end_year
               ORDER BY start_year DESC NULLS LAST, end_year DESC NULLS LAST"""
        ).fetchall()
        return [
            WinExpectancyEra(
                start_year=row["start_year"],
                end_year=row["end_year"],
                label=Era(row["start_year"], row["end_year"]).label,
                state_count=row["state_count"],
                total_sample=row["total_sample"] or 0,
            )
            for row in rows
        ]

    def upsert(self, record: WinExpectancy) -> int:
        # NULL era bounds are distinct under UNIQUE, so match them with IS
        existing = self._conn.execute(
            """SELECT id FROM win_expectancy_historical
               WHERE inning = ? AND is_bottom = ? AND outs = ? AND runners_state = ? AND score_diff = ?
                 AND start_year IS ? AND end_year IS ?""",
            (*self._state_params(self._record_state(record)), record.start_year, record.end_year),
        ).fetchone()

        if existing:
            self._conn.execute(
                """UPDATE win_expectancy_historical SET
                       win_probability=?, sample_size=?, updated_at=datetime('now')
                   WHERE id=?""",
                (record.win_probability, record.sample_size, existing["id"]),
            )
            return existing["id"]

        cursor = self._conn.execute(
            f"""INSERT INTO win_expectancy_historical
                   ({_STATE_COLUMNS}, win_probability, sample_size, start_year, end_year)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                *self._state_params(self._record_state(record)),
                record.win_probability,
                record.sample_size,
                record.start_year,
                record.end_year,
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def build_from_plays(self, min_sample: int, era: Era | None = None) -> int:
        """Aggregate plays of decided games into win-expectancy rows.

        Each pre-play state is counted once per play; the probability is the
        share of those plays whose game the home team went on to win. Score
        differences are from the batting team's perspective. Returns the number
        of states written.
        """
        clauses = [
            "g.home_score IS NOT NULL",
            "g.visiting_score IS NOT NULL",
            "g.home_score != g.visiting_score",
            "p.outs_pre BETWEEN 0 AND 2",
        ]
        params: list[int] = [MAX_LOOKUP_INNING, MAX_SCORE_DIFF, MAX_SCORE_DIFF]
        if era is not None and era.start_year is not None:
            clauses.append("CAST(substr(p.date, 1, 4) AS INTEGER) >= ?")
            params.append(era.start_year)
        if era is not None and era.end_year is not None:
            clauses.append("CAST(substr(p.date, 1, 4) AS INTEGER) <= ?")
            params.append(era.end_year)
        params.append(min_sample)

        rows = self._conn.execute(
            f"""SELECT MIN(p.inning, ?) AS lookup_inning,
                       p.is_bottom AS is_bottom,
                       p.outs_pre AS outs,
                       (CASE WHEN p.br1_pre THEN '1' ELSE '_' END
                        || CASE WHEN p.br2_pre THEN '2' ELSE '_' END
                        || CASE WHEN p.br3_pre THEN '3' ELSE '_' END) AS runners_state,
                       MAX(-?, MIN(?, CASE WHEN p.is_bottom THEN p.home_score - p.away_score
                                          ELSE p.away_score - p.home_score END)) AS diff,
                       COUNT(*) AS sample_size,
                       SUM(CASE WHEN g.home_score > g.visiting_score THEN 1 ELSE 0 END) AS home_wins
                FROM play p
                JOIN game g ON g.game_id = p.game_id
                WHERE {" AND ".join(clauses)}
                GROUP BY lookup_inning, is_bottom, outs, runners_state, diff
                HAVING COUNT(*) >= ?""",
            params,
        ).fetchall()

        start_year = era.start_year if era is not None else None
        end_year = era.end_year if era is not None else None
        for row in rows:
            self.upsert(
                WinExpectancy(
                    inning=row["lookup_inning"],
                    is_bottom=bool(row["is_bottom"]),
                    outs=row["outs"],
                    runners_code=row["runners_state"],
                    score_diff=row["diff"],
                    win_probability=row["home_wins"] / row["sample_size"],
                    sample_size=row["sample_size"],
                    start_year=start_year,
                    end_year=end_year,
                )
            )
        logger.info("Built %d win expectancy states (min_sample=%d, era=%s)", len(rows), min_sample, era)
        return len(rows)

    @staticmethod
    def _state_params(state: GameState) -> tuple[int, int, int, str, int]:
        return (state.inning, int(state.is_bottom), state.outs, state.runners_code, state.score_diff)

    @staticmethod
    def _record_state(record: WinExpectancy) -> GameState:
        return GameState(
            inning=record.inning,
            is_bottom=record.is_bottom,
            outs=record.outs,
            runners_code=record.runners_code,
            score_diff=record.score_diff,
        )

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> WinExpectancy:
        return WinExpectancy(
            id=row["id"],
            inning=row["inning"],
            is_bottom=bool(row["is_bottom"]),
            outs=row["outs"],
            runners_code=row["runners_state"],
            score_diff=row["score_diff"],
            win_probability=row["win_probability"],
            sample_size=row["sample_size"],
            start_year=row["start_year"],
            end_year=row["end_year"],
            updated_at=row["updated_at"],
        )
