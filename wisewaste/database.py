"""SQLite connection holder that keeps the waste pickup schema in place."""

from __future__ import annotations

import sqlite3
from types import TracebackType

DB_FILE = "wisewaste.db"

_CREATE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS waste_pickups ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT,"
    "waste_type TEXT NOT NULL,"
    "pickup_location TEXT NOT NULL,"
    "pickup_datetime TEXT NOT NULL,"
    "status TEXT NOT NULL,"
    "user_name TEXT NOT NULL"
    ");"
)


class DatabaseError(Exception):
    """Raised when the database cannot be opened or a statement fails."""


class Database:
    """Owns one SQLite connection and creates the pickup table on connect."""

    def __init__(self, path: str = DB_FILE) -> None:
        self.path = path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """The open connection; raises DatabaseError when not connected."""
        if self._connection is None:
            raise DatabaseError("database is not connected")
        return self._connection

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> sqlite3.Connection:
        """Open the database file and make sure the schema exists."""
        if self._connection is not None:
            return self._connection
        try:
            connection = sqlite3.connect(
                self.path, check_same_thread=False, isolation_level=None
            )
        except sqlite3.Error as exc:
            raise DatabaseError(f"Can't open database: {exc}") from exc
        try:
            connection.execute(_CREATE_TABLE_SQL)
        except sqlite3.Error as exc:
            connection.close()
            raise DatabaseError(f"SQL error: {exc}") from exc
        self._connection = connection
        return connection

    def close(self) -> None:
        """Close the connection if it is open."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def execute(self, query: str) -> None:
        """Run one or more SQL statements that return no rows."""
        try:
            self.connection.executescript(query)
        except sqlite3.Error as exc:
            raise DatabaseError(f"SQL error: {exc}") from exc

    def query(self, query: str) -> list[dict[str, object]]:
        """Run a statement and return its rows as column-name dictionaries."""
        try:
            cursor = self.connection.execute(query)
            columns = [column[0] for column in cursor.description or ()]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except sqlite3.Error as exc:
            raise DatabaseError(f"SQL error: {exc}") from exc

    def __enter__(self) -> Database:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()