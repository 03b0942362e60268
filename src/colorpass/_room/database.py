# Area: Room
"""
colorpass._room.database — Database Initialization
==================================================

Handles SQLite database initialization and connection management
for room persistence.

Connections run in autocommit mode; multi-statement units of work
open their own transaction (see ``store.RoomStore``). Repositories
either own a short-lived connection per call or borrow the
connection of an enclosing transaction.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger("colorpass.room.database")

# Path to schema file
SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_DB_PATH = "colorpass.db"
DEFAULT_TIMEOUT_SECONDS = 5.0


def get_connection(
    db_path: str = DEFAULT_DB_PATH, timeout: float = DEFAULT_TIMEOUT_SECONDS
) -> sqlite3.Connection:
    """
    Get a database connection.

    Args:
        db_path: Path to the SQLite database file
        timeout: Seconds to wait for a competing writer before failing

    Returns:
        SQLite connection with row factory set, in autocommit mode
    """
    conn = sqlite3.connect(db_path, timeout=timeout, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_database(db_path: str = DEFAULT_DB_PATH) -> None:
    """
    Initialize the database with schema.

    Switches the file to WAL journaling so state reads never block
    writers.

    Args:
        db_path: Path to the SQLite database file
    """
    conn = get_connection(db_path)
    try:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            schema = f.read()
        conn.execute("PRAGMA journal_mode = WAL")
        conn.executescript(schema)
        logger.info(f"Database initialized at {db_path}")
    finally:
        conn.close()


class BaseRepository:
    """
    Base class for database repositories.

    Provides common database operations and connection management.
    """

    def __init__(
        self,
        db_path: str = DEFAULT_DB_PATH,
        conn: Optional[sqlite3.Connection] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize repository.

        Args:
            db_path: Path to the SQLite database file
            conn: Connection of an enclosing transaction. When given,
                the repository neither opens nor closes connections.
            timeout: Busy timeout for connections the repository opens
        """
        self.db_path = db_path
        self.timeout = timeout
        self._conn = conn

    def _get_conn(self) -> sqlite3.Connection:
        """Get a database connection."""
        if self._conn is not None:
            return self._conn
        return get_connection(self.db_path, self.timeout)

    def _release(self, conn: sqlite3.Connection) -> None:
        if conn is not self._conn:
            conn.close()

    def _execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list]:
        """
        Execute a query.

        Args:
            query: SQL query string
            params: Query parameters
            fetch: If True, fetch and return results

        Returns:
            Query results if fetch=True, else None
        """
        conn = self._get_conn()
        try:
            cursor = conn.execute(query, params)
            if fetch:
                return [dict(row) for row in cursor.fetchall()]
            return None
        finally:
            self._release(conn)

    def _execute_many(self, query: str, rows: list) -> None:
        """Execute one statement for each parameter tuple."""
        conn = self._get_conn()
        try:
            conn.executemany(query, rows)
        finally:
            self._release(conn)

    def _execute_one(self, query: str, params: tuple = ()) -> Optional[dict]:
        """Execute query and return single result."""
        results = self._execute(query, params, fetch=True)
        return results[0] if results else None
