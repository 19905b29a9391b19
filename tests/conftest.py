"""Shared pytest fixtures for pinlayout tests."""

import logging

import pytest

from pinlayout.config.constants import (
    CMD_TOGGLE_EDITORS,
    CMD_TOGGLE_VISIBLE_PANES,
    GLOBAL_SOURCE_VIEW,
    GLOBAL_VISIBLE_PANES,
)
from pinlayout.config.settings import default_settings
from pinlayout.exceptions import HostCommandError
from pinlayout.host.sqlite_host import SQLiteHost


class FakeHost:
    """In-memory NoteHost with a scripted pane cycle.

    Every executed command is recorded in ``commands``. Paginated calls
    return ``page_size`` items per page.
    """

    def __init__(self, pane_cycle=None, page_size=2, source_view=True, panes=None):
        self.pane_cycle = [sorted(p) for p in (pane_cycle or [["editor", "viewer"], ["editor"], ["viewer"]])]
        self.page_size = page_size
        self.global_settings = {
            GLOBAL_SOURCE_VIEW: source_view,
            GLOBAL_VISIBLE_PANES: list(panes if panes is not None else self.pane_cycle[0]),
        }
        self.settings = default_settings()
        self.documents = {}
        self.tags = {}  # tag id -> title
        self.links = set()  # (tag id, document id)
        self.selected = []
        self.commands = []
        self.setting_reads = []
        self.fail_on = set()
        self._selection_handlers = []
        self._settings_handlers = []
        self._next_tag_id = 1

    # helpers for tests -------------------------------------------------

    def add_document(self, document_id, tags=()):
        self.documents[document_id] = {"id": document_id, "title": f"Note {document_id}"}
        for title in tags:
            tag_id = self._tag_id(title) or self.create_tag(title)["id"]
            self.links.add((tag_id, document_id))
        return document_id

    def select(self, *document_ids):
        self.selected = list(document_ids)
        for handler in list(self._selection_handlers):
            handler()

    def change_setting(self, key, value):
        self.settings[key] = value
        for handler in list(self._settings_handlers):
            handler([key])

    def tag_titles(self, document_id):
        return sorted(self.tags[t] for t, d in self.links if d == document_id)

    @property
    def panes(self):
        return sorted(self.global_settings[GLOBAL_VISIBLE_PANES])

    def _tag_id(self, title):
        for tag_id, existing in self.tags.items():
            if existing == title:
                return tag_id
        return None

    def _check(self, operation):
        if operation in self.fail_on:
            raise ConnectionError(f"{operation} unavailable")

    def _page(self, items, page):
        start = (page - 1) * self.page_size
        chunk = items[start:start + self.page_size]
        return {"items": chunk, "has_more": start + self.page_size < len(items)}

    # NoteHost ----------------------------------------------------------

    def get_selected_document(self):
        self._check("get_selected_document")
        if not self.selected:
            return None
        return self.documents.get(self.selected[0])

    def get_selected_document_ids(self):
        return list(self.selected)

    def get_tags_of(self, document_id, *, page=1):
        self._check("get_tags_of")
        items = [
            {"id": tag_id, "title": self.tags[tag_id]}
            for tag_id, doc_id in sorted(self.links)
            if doc_id == document_id
        ]
        return self._page(items, page)

    def get_all_tags(self, fields=("id", "title"), *, page=1):
        items = [{"id": tag_id, "title": title} for tag_id, title in sorted(self.tags.items())]
        return self._page(items, page)

    def create_tag(self, title):
        tag_id = f"t{self._next_tag_id}"
        self._next_tag_id += 1
        self.tags[tag_id] = title
        return {"id": tag_id, "title": title}

    def attach_tag(self, tag_id, document_id):
        self.links.add((tag_id, document_id))

    def detach_tag(self, tag_id, document_id):
        self.links.discard((tag_id, document_id))

    def get_global_setting(self, key):
        self._check("get_global_setting")
        return self.global_settings.get(key)

    def get_setting(self, key):
        self._check("get_setting")
        self.setting_reads.append(key)
        return self.settings.get(key)

    def execute_command(self, name):
        self._check("execute_command")
        self.commands.append(name)
        if name == CMD_TOGGLE_EDITORS:
            self.global_settings[GLOBAL_SOURCE_VIEW] = not self.global_settings[GLOBAL_SOURCE_VIEW]
        elif name == CMD_TOGGLE_VISIBLE_PANES:
            current = sorted(self.global_settings[GLOBAL_VISIBLE_PANES])
            if current in self.pane_cycle:
                index = (self.pane_cycle.index(current) + 1) % len(self.pane_cycle)
            else:
                index = 0
            self.global_settings[GLOBAL_VISIBLE_PANES] = list(self.pane_cycle[index])
        else:
            raise HostCommandError("Unknown command", command=name)

    def on_document_selection_changed(self, handler):
        self._selection_handlers.append(handler)

    def on_settings_changed(self, handler):
        self._settings_handlers.append(handler)


@pytest.fixture
def fake_host():
    """In-memory host starting in split view with the standard pane cycle."""
    return FakeHost()


@pytest.fixture
def make_host():
    """Factory fixture for FakeHost with custom cycle or starting state."""
    return FakeHost


@pytest.fixture
def sqlite_host(tmp_path):
    """SQLite host on a temporary database file."""
    host = SQLiteHost(tmp_path / "notes.db")
    host.ensure_schema()
    yield host
    host.close()


@pytest.fixture
def memory_host():
    """SQLite host on an in-memory database with a small page size."""
    host = SQLiteHost(":memory:", page_size=2)
    host.ensure_schema()
    yield host
    host.close()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers the CLI attaches so caplog keeps seeing records."""
    yield
    logger = logging.getLogger("pinlayout")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
