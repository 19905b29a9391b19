"""
Database connection management for the local note store
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from pinlayout.config.settings import get_db_path
from pinlayout.exceptions import HostConnectionError

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS documents (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        content TEXT NOT NULL DEFAULT '',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tags (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        usage_count INTEGER DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS document_tags (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        document_id INTEGER NOT NULL,
        tag_id INTEGER NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (document_id) REFERENCES documents (id) ON DELETE CASCADE,
        FOREIGN KEY (tag_id) REFERENCES tags (id) ON DELETE CASCADE,
        UNIQUE (document_id, tag_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_tags_name ON tags(name)",
    "CREATE INDEX IF NOT EXISTS idx_document_tags_document_id ON document_tags(document_id)",
    "CREATE INDEX IF NOT EXISTS idx_document_tags_tag_id ON document_tags(tag_id)",
)


class DatabaseConnection:
    """SQLite connection manager for the note store.

    ":memory:" keeps one shared connection open for the lifetime of the
    manager, since every new in-memory connection would start empty.
    """

    def __init__(self, db_path: Optional[Union[Path, str]] = None):
        self.db_path = db_path if db_path is not None else get_db_path()
        self._memory_conn: Optional[sqlite3.Connection] = None
        if str(self.db_path) == ":memory:":
            self._memory_conn = self._connect()

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.OperationalError as e:
            raise HostConnectionError(
                f"Could not open note store: {e}", host=str(self.db_path)
            ) from e
        conn.row_factory = sqlite3.Row  # Enable column access by name
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def get_connection(self):
        """Get a database connection with context manager"""
        if self._memory_conn is not None:
            yield self._memory_conn
            return

        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()

    def ensure_schema(self) -> None:
        """Ensure all tables and indexes exist"""
        with self.get_connection() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
            conn.commit()

    def close(self) -> None:
        if self._memory_conn is not None:
            self._memory_conn.close()
            self._memory_conn = None
