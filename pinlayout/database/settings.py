"""Key/value settings storage. Values are stored as JSON."""

import json
import sqlite3
from typing import Any, Optional


def get_setting_with_conn(conn: sqlite3.Connection, key: str) -> Optional[Any]:
    """Return the decoded value of a setting, or None if unset."""
    cursor = conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
    row = cursor.fetchone()
    return json.loads(row[0]) if row else None


def set_setting_with_conn(conn: sqlite3.Connection, key: str, value: Any) -> None:
    conn.execute(
        """
        INSERT INTO settings (key, value) VALUES (?, ?)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value,
            updated_at = CURRENT_TIMESTAMP
        """,
        (key, json.dumps(value)),
    )

