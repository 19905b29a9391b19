"""Database operations for tags - core SQL only.

These functions work with any open connection and leave committing to the
caller. Tag names are stored lower-cased and stripped.
"""

import sqlite3
from typing import Optional


def normalize_tag_name(tag_name: str) -> str:
    return tag_name.lower().strip()


def find_tag_with_conn(conn: sqlite3.Connection, tag_name: str) -> Optional[int]:
    """Return the id of a tag by name, or None."""
    cursor = conn.execute(
        "SELECT id FROM tags WHERE name = ?", (normalize_tag_name(tag_name),)
    )
    result = cursor.fetchone()
    return result[0] if result else None


def get_or_create_tag_with_conn(conn: sqlite3.Connection, tag_name: str) -> int:
    """Get existing tag ID or create new tag using provided connection.

    Args:
        conn: SQLite database connection
        tag_name: Name of the tag (will be lowercased and stripped)

    Returns:
        The tag's ID
    """
    tag_id = find_tag_with_conn(conn, tag_name)
    if tag_id is not None:
        return tag_id

    cursor = conn.execute(
        "INSERT INTO tags (name, usage_count) VALUES (?, 0)",
        (normalize_tag_name(tag_name),),
    )
    return cursor.lastrowid


def attach_tag_with_conn(conn: sqlite3.Connection, doc_id: int, tag_id: int) -> bool:
    """Attach a tag by id. Returns False if it was already attached."""
    try:
        conn.execute(
            "INSERT INTO document_tags (document_id, tag_id) VALUES (?, ?)",
            (doc_id, tag_id),
        )
    except sqlite3.IntegrityError:
        return False  # Already tagged

    conn.execute(
        "UPDATE tags SET usage_count = usage_count + 1 WHERE id = ?",
        (tag_id,),
    )
    return True


def detach_tag_with_conn(conn: sqlite3.Connection, doc_id: int, tag_id: int) -> bool:
    """Detach a tag by id. Returns False if it was not attached."""
    cursor = conn.execute(
        "DELETE FROM document_tags WHERE document_id = ? AND tag_id = ?",
        (doc_id, tag_id),
    )
    if cursor.rowcount == 0:
        return False

    conn.execute(
        "UPDATE tags SET usage_count = MAX(0, usage_count - 1) WHERE id = ?",
        (tag_id,),
    )
    return True


def add_tags_with_conn(
    conn: sqlite3.Connection, doc_id: int, tag_names: list[str]
) -> list[str]:
    """Add tags to a document by name, creating missing tags.

    Returns:
        List of tags that were successfully added (excludes duplicates)
    """
    added_tags = []
    for tag_name in tag_names:
        tag_name = normalize_tag_name(tag_name)
        if not tag_name:
            continue

        tag_id = get_or_create_tag_with_conn(conn, tag_name)
        if attach_tag_with_conn(conn, doc_id, tag_id):
            added_tags.append(tag_name)

    return added_tags


def get_document_tags_page_with_conn(
    conn: sqlite3.Connection, doc_id: int, limit: int, offset: int
) -> list[dict]:
    """Get one page of tags for a document, ordered by name.

    Returns:
        List of dicts with 'id' and 'name' keys
    """
    cursor = conn.execute(
        """
        SELECT t.id, t.name FROM tags t
        JOIN document_tags dt ON t.id = dt.tag_id
        WHERE dt.document_id = ?
        ORDER BY t.name
        LIMIT ? OFFSET ?
        """,
        (doc_id, limit, offset),
    )
    return [{"id": row[0], "name": row[1]} for row in cursor.fetchall()]


def get_all_tags_page_with_conn(
    conn: sqlite3.Connection, limit: int, offset: int
) -> list[dict]:
    """Get one page of all tags ordered by name.

    Returns:
        List of dicts with 'id', 'name', 'usage_count' keys
    """
    cursor = conn.execute(
        """
        SELECT id, name, usage_count FROM tags
        ORDER BY name ASC
        LIMIT ? OFFSET ?
        """,
        (limit, offset),
    )
    return [
        {"id": row[0], "name": row[1], "usage_count": row[2]}
        for row in cursor.fetchall()
    ]
