"""Document operations for the local note store."""

import sqlite3
from typing import Optional


def save_document_with_conn(conn: sqlite3.Connection, title: str, content: str = "") -> int:
    """Insert a document and return its id."""
    cursor = conn.execute(
        "INSERT INTO documents (title, content) VALUES (?, ?)", (title, content)
    )
    return cursor.lastrowid


def get_document_with_conn(conn: sqlite3.Connection, doc_id: int) -> Optional[dict]:
    cursor = conn.execute(
        "SELECT id, title, content, created_at FROM documents WHERE id = ?", (doc_id,)
    )
    row = cursor.fetchone()
    return dict(row) if row else None


def list_documents_with_conn(
    conn: sqlite3.Connection, limit: int, offset: int = 0
) -> list[dict]:
    """List documents, newest first."""
    cursor = conn.execute(
        """
        SELECT id, title, created_at FROM documents
        ORDER BY id DESC
        LIMIT ? OFFSET ?
        """,
        (limit, offset),
    )
    return [dict(row) for row in cursor.fetchall()]
