import csv
import gzip
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import IO, Any

logger = logging.getLogger(__name__)


class CsvSource:
    """Rows of a Retrosheet CSV export (``plays.csv``, ``gameinfo.csv``).

    Plain and gzip-compressed (``.csv.gz``) files are read. Header names are
    stripped, blank cells become ``None``, and a header missing any of
    ``required_columns`` raises ``ValueError`` before any row is returned.
    """

    def __init__(self, path: str | Path, *, required_columns: Iterable[str] = ()) -> None:
        self._path = Path(path)
        self._required = tuple(required_columns)

    @property
    def source_type(self) -> str:
        return "csv"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        encoding = params.pop("encoding", "utf-8-sig")
        delimiter = params.pop("delimiter", ",")
        logger.debug("Reading %s (encoding=%s)", self._path, encoding)
        with self._open(encoding) as f:
            reader = csv.DictReader(f, delimiter=delimiter)
            header = [name.strip() for name in reader.fieldnames or []]
            missing = [name for name in self._required if name not in header]
            if missing:
                raise ValueError(f"{self._path.name} is missing required columns: {', '.join(missing)}")
            rows = [_clean(row) for row in reader]
        logger.debug("Read %d rows from %s", len(rows), self._path)
        return rows

    def _open(self, encoding: str) -> IO[str]:
        if self._path.suffix == ".gz":
            return gzip.open(self._path, "rt", encoding=encoding, newline="")
        return open(self._path, encoding=encoding, newline="")


def _clean(row: dict[str | None, Any]) -> dict[str, Any]:
    # extra cells beyond the header land under the None key
    return {key.strip(): (None if value == "" else value) for key, value in row.items() if key is not None}
