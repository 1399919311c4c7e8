"""Key-value persistence media for PlantLog.

A medium holds named entries of text (JSON documents in practice). The
RecordStore only needs `get` and `set`; everything else here is about
owning the underlying connection.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

from ..exceptions import StorageFailure

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "20240101"

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS _schema_metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class KeyValueStore(Protocol):
    """Synchronous get/set by string key."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryKeyValueStore:
    """Dict-backed medium; contents are lost with the instance."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteKeyValueStore:
    """SQLite-backed medium storing each entry as one row of table `kv`.

    CONNECTION LIFECYCLE:
    - Connection is opened lazily on first access and kept until close()
    - Schema is created on first connection if missing
    - Every set() commits immediately, so a crash never loses an
      acknowledged write
    - May be used as a context manager; the connection closes on exit

    Any sqlite3.Error surfaces as StorageFailure with the original
    exception chained.
    """

    def __init__(self, db_path: str | Path = "plantlog.db"):
        """Initialize the medium.

        Args:
            db_path: Path to SQLite database file (parent dirs are created)
        """
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def _get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(str(self.db_path))
                conn.executescript(_SCHEMA_SQL)
                conn.execute(
                    "INSERT OR IGNORE INTO _schema_metadata (key, value) VALUES ('version', ?)",
                    (SCHEMA_VERSION,)
                )
                conn.commit()
            except (OSError, sqlite3.Error) as e:
                raise StorageFailure(
                    f"Cannot open database {self.db_path}: {e}",
                    details={"db_path": str(self.db_path)},
                ) from e
            logger.debug("Opened key-value database %s", self.db_path)
            self._conn = conn
        return self._conn

    def get_schema_version(self) -> str | None:
        """Get current schema version."""
        row = self._get_connection().execute(
            "SELECT value FROM _schema_metadata WHERE key = 'version'"
        ).fetchone()
        return row[0] if row else None

    def get(self, key: str) -> str | None:
        """Read an entry.

        Returns:
            Stored text, or None if the entry was never written
        """
        conn = self._get_connection()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to read '{key}': {e}", key=key) from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Write (insert or replace) an entry and commit."""
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO kv (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value)
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageFailure(f"Failed to write '{key}': {e}", key=key) from e

    def close(self):
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> SqliteKeyValueStore:
        self._get_connection()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
