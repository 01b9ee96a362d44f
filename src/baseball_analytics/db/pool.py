import logging
import queue
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import Self

from baseball_analytics.db.connection import create_connection, is_memory

logger = logging.getLogger(__name__)


class ConnectionPool:
    """A fixed set of connections to one database file, shared by worker threads.

    The first connection brings the schema up to date; the others open
    against it without re-running migrations. Connections are handed out
    most-recently-used first and any open transaction is rolled back when a
    connection comes back.
    """

    def __init__(self, path: str | Path, *, size: int = 4, checkout_timeout: float | None = None) -> None:
        if is_memory(path):
            raise ValueError("ConnectionPool requires a database file; in-memory databases are per-connection")
        if size < 1:
            raise ValueError(f"Pool size must be at least 1, got {size}")
        self._path = Path(path)
        self._checkout_timeout = checkout_timeout
        self._closed = False
        self._opened = [create_connection(self._path, check_same_thread=False)]
        self._opened.extend(
            create_connection(self._path, check_same_thread=False, migrate=False) for _ in range(size - 1)
        )
        self._idle: queue.LifoQueue[sqlite3.Connection] = queue.LifoQueue(maxsize=size)
        for conn in self._opened:
            self._idle.put(conn)
        logger.debug("Opened %d pooled connections to %s", size, self._path)

    @property
    def size(self) -> int:
        return len(self._opened)

    @property
    def available(self) -> int:
        return self._idle.qsize()

    def acquire(self, *, timeout: float | None = None) -> sqlite3.Connection:
        """Check out an idle connection, waiting up to ``timeout`` seconds.

        Raises RuntimeError once the pool is closed and TimeoutError when every
        connection stays checked out.
        """
        if self._closed:
            raise RuntimeError(f"Connection pool for {self._path} is closed")
        wait = timeout if timeout is not None else self._checkout_timeout
        try:
            return self._idle.get(timeout=wait)
        except queue.Empty as exc:
            logger.warning("All %d connections to %s are checked out", self.size, self._path)
            raise TimeoutError(f"No idle connection to {self._path} within {wait}s") from exc

    def release(self, conn: sqlite3.Connection) -> None:
        if self._closed:
            conn.close()
            return
        if conn.in_transaction:
            conn.rollback()
        self._idle.put(conn)

    @contextmanager
    def connection(self, *, timeout: float | None = None) -> Generator[sqlite3.Connection]:
        conn = self.acquire(timeout=timeout)
        try:
            yield conn
        finally:
            self.release(conn)

    def close(self) -> None:
        """Close every connection, including ones still checked out."""
        if self._closed:
            return
        self._closed = True
        while True:
            try:
                self._idle.get_nowait()
            except queue.Empty:
                break
        for conn in self._opened:
            conn.close()
        logger.debug("Closed %d pooled connections to %s", len(self._opened), self._path)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
