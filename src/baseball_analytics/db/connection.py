import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MEMORY = ":memory:"
DEFAULT_BUSY_TIMEOUT_MS = 5000

_MIGRATIONS_DIR = Path(__file__).parent / "migrations"


@dataclass(frozen=True)
class Migration:
    """One numbered schema file, e.g. ``003_win_expectancy.sql``."""

    version: int
    name: str
    statements: tuple[str, ...]


def is_memory(path: str | Path) -> bool:
    return str(path) == MEMORY


def create_connection(
    path: str | Path,
    *,
    check_same_thread: bool = True,
    migrations_dir: Path | None = None,
    migrate: bool = True,
    busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
) -> sqlite3.Connection:
    """Open the Retrosheet store at ``path`` with ``sqlite3.Row`` rows.

    File databases use WAL so pooled readers do not block each other, and wait
    up to ``busy_timeout_ms`` for a writer's lock. Pending migrations are
    applied unless ``migrate`` is false.
    """
    conn = sqlite3.connect(str(path), check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
    if not is_memory(path):
        conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    if migrate:
        applied = apply_migrations(conn, discover_migrations(migrations_dir or _MIGRATIONS_DIR))
        if applied:
            logger.info("Migrated %s to schema version %d", path, applied[-1])
    return conn


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Highest applied migration version; 0 for a database that has never been migrated."""
    try:
        row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    except sqlite3.OperationalError:
        return 0
    return row[0] or 0


def discover_migrations(directory: Path) -> list[Migration]:
    migrations: dict[int, Migration] = {}
    for path in sorted(directory.glob("*.sql")):
        prefix, _, name = path.stem.partition("_")
        if not prefix.isdigit():
            raise ValueError(f"Migration file {path.name} must start with a version number")
        version = int(prefix)
        if version in migrations:
            raise ValueError(f"Duplicate migration version {version}: {migrations[version].name} and {name}")
        statements = tuple(s.strip() for s in path.read_text().split(";") if s.strip())
        migrations[version] = Migration(version=version, name=name, statements=statements)
    return [migrations[v] for v in sorted(migrations)]


def apply_migrations(conn: sqlite3.Connection, migrations: list[Migration]) -> list[int]:
    """Run each migration newer than the current schema in its own transaction.

    Returns the versions applied. A failing migration is rolled back entirely
    and re-raised; earlier migrations stay applied.
    """
    conn.execute(
        """CREATE TABLE IF NOT EXISTS schema_version (
               version    INTEGER PRIMARY KEY,
               name       TEXT NOT NULL DEFAULT '',
               applied_at TEXT NOT NULL DEFAULT (datetime('now'))
           )"""
    )
    current = get_schema_version(conn)
    pending = [m for m in migrations if m.version > current]

    applied: list[int] = []
    # DDL must share the transaction, so take manual control of BEGIN/COMMIT
    saved_isolation = conn.isolation_level
    conn.isolation_level = None
    try:
        for migration in pending:
            logger.debug("Applying migration %03d_%s", migration.version, migration.name)
            conn.execute("BEGIN")
            try:
                for statement in migration.statements:
                    conn.execute(statement)
                conn.execute(
                    "INSERT INTO schema_version (version, name) VALUES (?, ?)",
                    (migration.version, migration.name),
                )
            except sqlite3.Error:
                conn.execute("ROLLBACK")
                logger.error("Migration %03d_%s failed", migration.version, migration.name)
                raise
            conn.execute("COMMIT")
            applied.append(migration.version)
    finally:
        conn.isolation_level = saved_isolation
    return applied
