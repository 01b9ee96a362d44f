import csv
import logging
import sqlite3
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from baseball_analytics.domain.errors import IngestError
from baseball_analytics.domain.result import Err, Ok, Result
from baseball_analytics.ingest.protocols import DataSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadSummary:
    target_table: str
    rows_loaded: int
    rows_skipped: int
    seconds: float


class Loader:
    """Maps every row of a source through ``row_mapper`` and upserts the results.

    The whole load is one transaction: a row that fails to convert or to store
    rolls back everything loaded before it. Rows the mapper returns ``None``
    for are counted as skipped.
    """

    def __init__(
        self,
        source: DataSource,
        repo: Any,
        row_mapper: Callable[[dict[str, Any]], Any | None],
        target_table: str,
        *,
        conn: sqlite3.Connection,
    ) -> None:
        self._source = source
        self._repo = repo
        self._row_mapper = row_mapper
        self._target_table = target_table
        self._conn = conn

    def load(self, **fetch_params: Any) -> Result[LoadSummary, IngestError]:
        started = time.perf_counter()
        detail = self._source.source_detail
        logger.info("Importing %s rows from %s", self._target_table, detail)

        try:
            rows = self._source.fetch(**fetch_params)
        except (OSError, ValueError, csv.Error) as exc:
            logger.error("Could not read %s: %s", detail, exc)
            return Err(self._error(str(exc)))

        loaded = skipped = 0
        try:
            # line 1 is the header
            for line, row in enumerate(rows, start=2):
                try:
                    mapped = self._row_mapper(row)
                except ValueError as exc:
                    raise ValueError(f"line {line}: {exc}") from exc
                if mapped is None:
                    skipped += 1
                    continue
                self._repo.upsert(mapped)
                loaded += 1
            self._conn.commit()
        except (sqlite3.Error, ValueError) as exc:
            self._conn.rollback()
            logger.error("Import into %s rolled back after %d rows: %s", self._target_table, loaded, exc)
            return Err(self._error(str(exc)))

        summary = LoadSummary(
            target_table=self._target_table,
            rows_loaded=loaded,
            rows_skipped=skipped,
            seconds=time.perf_counter() - started,
        )
        if skipped:
            logger.info("Skipped %d unusable rows from %s", skipped, detail)
        logger.info("Imported %d rows into %s in %.1fs", loaded, self._target_table, summary.seconds)
        return Ok(summary)

    def _error(self, message: str) -> IngestError:
        return IngestError(
            message=message,
            source_type=self._source.source_type,
            source_detail=self._source.source_detail,
            target_table=self._target_table,
        )
