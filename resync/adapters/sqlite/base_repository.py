"""Base class for SQLite adapters.

Provides consistent connection management and the context manager protocol
for the store and index adapters.
"""

import sqlite3
import threading
from pathlib import Path
from typing import Self


class SQLiteBaseRepository:
    """Base class providing SQLite connection management.

    Subclasses get:
    - Lazy connection initialization (double-checked locking)
    - Rows as sqlite3.Row, addressable by column name
    - Optional read-only mode for stores a sweep must never write to
    - Context manager protocol (__enter__/__exit__)

    Example:
        class MyRepository(SQLiteBaseRepository):
            def __init__(self, db_path: Path) -> None:
                super().__init__(db_path, read_only=True)

            def my_query(self) -> list:
                conn = self._get_connection()
                return conn.execute("SELECT * FROM my_table").fetchall()
    """

    def __init__(self, db_path: Path, *, read_only: bool = False) -> None:
        """Initialize the repository.

        Args:
            db_path: Path to SQLite database file.
            read_only: Open the database with mode=ro. The file must exist.
        """
        self.db_path = db_path
        self._read_only = read_only
        self._conn: sqlite3.Connection | None = None
        self._conn_lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection, creating one if needed.

        Returns:
            SQLite connection object.

        Raises:
            sqlite3.OperationalError: If a read-only database does not exist.
        """
        if self._conn is None:
            with self._conn_lock:
                # Double-check pattern: re-check after acquiring lock
                if self._conn is None:
                    if self._read_only:
                        uri = f"{Path(self.db_path).resolve().as_uri()}?mode=ro"
                        conn = sqlite3.connect(uri, uri=True)
                    else:
                        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
                        conn = sqlite3.connect(self.db_path)
                    conn.row_factory = sqlite3.Row
                    self._conn = conn
        return self._conn

    def _table_exists(self, table: str) -> bool:
        row = self._get_connection().execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table,),
        ).fetchone()
        return row is not None

    def close(self) -> None:
        """Close the database connection if open.

        Safe to call multiple times.
        """
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> bool:
        """Exit context manager, closing the database connection."""
        self.close()
        return False
