"""SQLite-backed note host.

Implements the NoteHost protocol on top of the local note store so the
layout engine can run without a GUI application. The editor UI state
(source view flag and visible panes) lives in the settings table, and the
two toggle commands mutate it the way a real editor would.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from pinlayout.config.constants import (
    CMD_TOGGLE_EDITORS,
    CMD_TOGGLE_VISIBLE_PANES,
    DEFAULT_PAGE_SIZE,
    GLOBAL_SOURCE_VIEW,
    GLOBAL_VISIBLE_PANES,
    PANE_CYCLE,
)
from pinlayout.config.settings import default_settings
from pinlayout.database.connection import DatabaseConnection
from pinlayout.database.documents import (
    get_document_with_conn,
    list_documents_with_conn,
    save_document_with_conn,
)
from pinlayout.database.settings import (
    get_setting_with_conn,
    set_setting_with_conn,
)
from pinlayout.database.tags import (
    add_tags_with_conn,
    attach_tag_with_conn,
    detach_tag_with_conn,
    find_tag_with_conn,
    get_all_tags_page_with_conn,
    get_document_tags_page_with_conn,
    get_or_create_tag_with_conn,
)
from pinlayout.exceptions import DatabaseQueryError, DocumentNotFoundError, HostCommandError

from .protocols import Document, Page, SelectionHandler, SettingsHandler, Tag

logger = logging.getLogger(__name__)

SELECTED_DOCUMENT_KEY = "workspace.selectedNoteIds"

# Editor state of a fresh store: markdown editor in split view
DEFAULT_UI_STATE = {
    GLOBAL_SOURCE_VIEW: True,
    GLOBAL_VISIBLE_PANES: list(PANE_CYCLE[0]),
}


def _to_int_id(value: Union[str, int], kind: str = "document") -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        if kind == "document":
            raise DocumentNotFoundError(document_id=str(value)) from None
        raise DatabaseQueryError(f"Invalid {kind} id", id=value) from None


class SQLiteHost:
    """NoteHost implementation backed by the local SQLite store.

    Handlers registered for selection and settings changes are invoked
    synchronously, one after another, before the triggering call returns.
    """

    def __init__(
        self,
        db_path: Optional[Union[Path, str]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        pane_cycle: Sequence[Sequence[str]] = PANE_CYCLE,
    ):
        self.db = DatabaseConnection(db_path)
        self.page_size = page_size
        self.pane_cycle = [sorted(panes) for panes in pane_cycle]
        self._selection_handlers: list[SelectionHandler] = []
        self._settings_handlers: list[SettingsHandler] = []

    def ensure_schema(self) -> None:
        """Create tables and seed settings that are still unset."""
        self._run(self.db.ensure_schema)
        seed = {**default_settings(), **DEFAULT_UI_STATE}
        with self.db.get_connection() as conn:
            try:
                for key, value in seed.items():
                    if get_setting_with_conn(conn, key) is None:
                        set_setting_with_conn(conn, key, value)
                conn.commit()
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to seed settings", error=str(e)) from e

    def close(self) -> None:
        self.db.close()

    def _run(self, func, *args):
        try:
            return func(*args)
        except sqlite3.Error as e:
            raise DatabaseQueryError(f"{func.__name__} failed", error=str(e)) from e

    def _page(self, rows: list) -> Page:
        # one extra row was fetched to detect a following page
        return {"items": rows[: self.page_size], "has_more": len(rows) > self.page_size}

    def _offset(self, page: int) -> int:
        return (max(page, 1) - 1) * self.page_size

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def add_document(self, title: str, content: str = "", tags: Sequence[str] = ()) -> str:
        """Create a document with optional tags and return its id."""
        with self.db.get_connection() as conn:
            try:
                doc_id = save_document_with_conn(conn, title, content)
                if tags:
                    add_tags_with_conn(conn, doc_id, list(tags))
                conn.commit()
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to save document", title=title) from e
        logger.info(f"Saved document #{doc_id}: {title}")
        return str(doc_id)

    def get_document(self, document_id: str) -> Optional[Document]:
        with self.db.get_connection() as conn:
            try:
                row = get_document_with_conn(conn, _to_int_id(document_id))
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to read document", document_id=document_id) from e
        if row is None:
            return None
        return {"id": str(row["id"]), "title": row["title"]}

    def list_documents(self, limit: int = 50) -> list[Document]:
        with self.db.get_connection() as conn:
            try:
                rows = list_documents_with_conn(conn, limit)
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to list documents") from e
        return [{"id": str(row["id"]), "title": row["title"]} for row in rows]

    def _require_document(self, conn: sqlite3.Connection, document_id: str) -> int:
        doc_id = _to_int_id(document_id)
        if get_document_with_conn(conn, doc_id) is None:
            raise DocumentNotFoundError(document_id=str(document_id))
        return doc_id

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def get_selected_document_ids(self) -> list[str]:
        return list(self.get_global_setting(SELECTED_DOCUMENT_KEY) or [])

    def get_selected_document(self) -> Optional[Document]:
        selected = self.get_selected_document_ids()
        if not selected:
            return None
        return self.get_document(selected[0])

    def select_document(self, *document_ids: str) -> None:
        """Select one or more documents and notify selection handlers."""
        with self.db.get_connection() as conn:
            for document_id in document_ids:
                self._require_document(conn, document_id)
        self._write_setting(SELECTED_DOCUMENT_KEY, [str(d) for d in document_ids])
        for handler in list(self._selection_handlers):
            handler()

    def on_document_selection_changed(self, handler: SelectionHandler) -> None:
        self._selection_handlers.append(handler)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def get_tags_of(self, document_id: str, *, page: int = 1) -> Page:
        with self.db.get_connection() as conn:
            try:
                rows = get_document_tags_page_with_conn(
                    conn, _to_int_id(document_id), self.page_size + 1, self._offset(page)
                )
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to read tags", document_id=document_id) from e
        return self._page([{"id": str(r["id"]), "title": r["name"]} for r in rows])

    def get_all_tags(self, fields: Sequence[str] = ("id", "title"), *, page: int = 1) -> Page:
        with self.db.get_connection() as conn:
            try:
                rows = get_all_tags_page_with_conn(conn, self.page_size + 1, self._offset(page))
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to list tags") from e
        items = []
        for row in rows:
            record = {"id": str(row["id"]), "title": row["name"], "usage_count": row["usage_count"]}
            items.append({k: v for k, v in record.items() if k in fields})
        return self._page(items)

    def create_tag(self, title: str) -> Tag:
        with self.db.get_connection() as conn:
            try:
                tag_id = get_or_create_tag_with_conn(conn, title)
                conn.commit()
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to create tag", title=title) from e
        logger.debug(f"Created tag {title!r} (#{tag_id})")
        return {"id": str(tag_id), "title": title.lower().strip()}

    def find_tag(self, title: str) -> Optional[Tag]:
        with self.db.get_connection() as conn:
            tag_id = self._run(find_tag_with_conn, conn, title)
        if tag_id is None:
            return None
        return {"id": str(tag_id), "title": title.lower().strip()}

    def attach_tag(self, tag_id: str, document_id: str) -> None:
        with self.db.get_connection() as conn:
            try:
                doc_id = self._require_document(conn, document_id)
                attach_tag_with_conn(conn, doc_id, _to_int_id(tag_id, "tag"))
                conn.commit()
            except sqlite3.Error as e:
                raise DatabaseQueryError(
                    "Failed to attach tag", tag_id=tag_id, document_id=document_id
                ) from e

    def detach_tag(self, tag_id: str, document_id: str) -> None:
        with self.db.get_connection() as conn:
            try:
                doc_id = self._require_document(conn, document_id)
                detach_tag_with_conn(conn, doc_id, _to_int_id(tag_id, "tag"))
                conn.commit()
            except sqlite3.Error as e:
                raise DatabaseQueryError(
                    "Failed to detach tag", tag_id=tag_id, document_id=document_id
                ) from e

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _read_setting(self, key: str) -> Any:
        with self.db.get_connection() as conn:
            try:
                return get_setting_with_conn(conn, key)
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to read setting", key=key) from e

    def _write_setting(self, key: str, value: Any) -> None:
        with self.db.get_connection() as conn:
            try:
                set_setting_with_conn(conn, key, value)
                conn.commit()
            except sqlite3.Error as e:
                raise DatabaseQueryError("Failed to write setting", key=key) from e

    def get_global_setting(self, key: str) -> Any:
        value = self._read_setting(key)
        if value is None:
            return DEFAULT_UI_STATE.get(key)
        return value

    def get_setting(self, key: str) -> Any:
        return self._read_setting(key)

    def set_setting(self, key: str, value: Any) -> None:
        """Persist a plugin setting and notify settings handlers."""
        self._write_setting(key, value)
        for handler in list(self._settings_handlers):
            handler([key])

    def on_settings_changed(self, handler: SettingsHandler) -> None:
        self._settings_handlers.append(handler)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def execute_command(self, name: str) -> None:
        if name == CMD_TOGGLE_EDITORS:
            enabled = bool(self.get_global_setting(GLOBAL_SOURCE_VIEW))
            self._write_setting(GLOBAL_SOURCE_VIEW, not enabled)
        elif name == CMD_TOGGLE_VISIBLE_PANES:
            self._write_setting(GLOBAL_VISIBLE_PANES, self._next_panes())
        else:
            raise HostCommandError("Unknown command", command=name)
        logger.debug(f"Executed command {name}")

    def _next_panes(self) -> list[str]:
        current = sorted(p for p in self.get_global_setting(GLOBAL_VISIBLE_PANES) or [] if p)
        try:
            index = self.pane_cycle.index(current)
        except ValueError:
            # Unknown state: the toggle restores the first layout of the cycle
            return list(self.pane_cycle[0])
        return list(self.pane_cycle[(index + 1) % len(self.pane_cycle)])
