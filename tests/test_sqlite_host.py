"""Tests for the SQLite-backed note host."""

import pytest

from pinlayout.exceptions import (
    DatabaseQueryError,
    DocumentNotFoundError,
    HostCommandError,
    HostConnectionError,
)
from pinlayout.host.pagination import fetch_all
from pinlayout.host.protocols import NoteHost
from pinlayout.host.sqlite_host import SQLiteHost
from pinlayout.services.layout_service import LayoutAutomation


class TestSchemaAndSettings:
    def test_implements_protocol(self, memory_host):
        assert isinstance(memory_host, NoteHost)

    def test_seeds_defaults(self, memory_host):
        assert memory_host.get_setting("defaultLayout") == 0
        assert memory_host.get_setting("splitTags") == "layout:split"
        assert memory_host.get_global_setting("editor.sourceViewEnabled") is True
        assert memory_host.get_global_setting("editor.visiblePanes") == ["editor", "viewer"]

    def test_ensure_schema_keeps_existing_values(self, sqlite_host):
        sqlite_host.set_setting("defaultLayout", 3)
        sqlite_host.ensure_schema()
        assert sqlite_host.get_setting("defaultLayout") == 3

    def test_values_survive_reopen(self, tmp_path):
        host = SQLiteHost(tmp_path / "notes.db")
        host.ensure_schema()
        doc_id = host.add_document("Note", tags=["layout:viewer"])
        host.set_setting("viewerTags", "layout:viewer, ref")

        reopened = SQLiteHost(tmp_path / "notes.db")
        assert reopened.get_setting("viewerTags") == "layout:viewer, ref"
        assert [t["title"] for t in fetch_all(reopened.get_tags_of, doc_id)] == ["layout:viewer"]

    def test_unreachable_store(self, tmp_path):
        host = SQLiteHost(tmp_path / "missing" / "notes.db")
        with pytest.raises(HostConnectionError) as exc_info:
            host.ensure_schema()
        assert exc_info.value.retryable
        assert exc_info.value.context["host"].endswith("notes.db")

    def test_set_setting_notifies_with_key(self, memory_host):
        seen = []
        memory_host.on_settings_changed(seen.append)
        memory_host.set_setting("splitTags", "meeting")
        assert seen == [["splitTags"]]


class TestDocumentsAndTags:
    def test_add_and_get_document(self, memory_host):
        doc_id = memory_host.add_document("Meeting notes", "body")
        assert memory_host.get_document(doc_id) == {"id": doc_id, "title": "Meeting notes"}
        assert memory_host.get_document("999") is None

    def test_list_documents_newest_first(self, memory_host):
        first = memory_host.add_document("one")
        second = memory_host.add_document("two")
        assert [d["id"] for d in memory_host.list_documents()] == [second, first]

    def test_tags_are_normalized(self, memory_host):
        doc_id = memory_host.add_document("Note", tags=["  Layout:Split "])
        assert fetch_all(memory_host.get_tags_of, doc_id)[0]["title"] == "layout:split"

    def test_pagination_of_document_tags(self, memory_host):
        doc_id = memory_host.add_document("Note", tags=["a", "b", "c", "d", "e"])

        first = memory_host.get_tags_of(doc_id, page=1)
        assert [t["title"] for t in first["items"]] == ["a", "b"]
        assert first["has_more"] is True

        last = memory_host.get_tags_of(doc_id, page=3)
        assert [t["title"] for t in last["items"]] == ["e"]
        assert last["has_more"] is False

        assert [t["title"] for t in fetch_all(memory_host.get_tags_of, doc_id)] == [
            "a", "b", "c", "d", "e",
        ]

    def test_all_tags_respects_fields(self, memory_host):
        memory_host.create_tag("x")
        page = memory_host.get_all_tags(["title"])
        assert page["items"] == [{"title": "x"}]

    def test_create_tag_is_idempotent(self, memory_host):
        first = memory_host.create_tag("layout:editor")
        second = memory_host.create_tag("Layout:Editor")
        assert first["id"] == second["id"]

    def test_attach_twice_is_noop(self, memory_host):
        doc_id = memory_host.add_document("Note")
        tag = memory_host.create_tag("layout:viewer")
        memory_host.attach_tag(tag["id"], doc_id)
        memory_host.attach_tag(tag["id"], doc_id)
        assert len(fetch_all(memory_host.get_tags_of, doc_id)) == 1

    def test_detach(self, memory_host):
        doc_id = memory_host.add_document("Note", tags=["layout:viewer", "misc"])
        tag = memory_host.find_tag("layout:viewer")
        memory_host.detach_tag(tag["id"], doc_id)
        assert [t["title"] for t in fetch_all(memory_host.get_tags_of, doc_id)] == ["misc"]

    def test_attach_to_missing_document(self, memory_host):
        tag = memory_host.create_tag("x")
        with pytest.raises(DocumentNotFoundError):
            memory_host.attach_tag(tag["id"], "42")

    def test_invalid_tag_id(self, memory_host):
        doc_id = memory_host.add_document("Note")
        with pytest.raises(DatabaseQueryError):
            memory_host.attach_tag("not-a-number", doc_id)


class TestSelectionAndCommands:
    def test_select_notifies_handlers(self, memory_host):
        doc_id = memory_host.add_document("Note")
        calls = []
        memory_host.on_document_selection_changed(lambda: calls.append(memory_host.get_selected_document()))

        memory_host.select_document(doc_id)

        assert calls == [{"id": doc_id, "title": "Note"}]
        assert memory_host.get_selected_document_ids() == [doc_id]

    def test_select_missing_document(self, memory_host):
        with pytest.raises(DocumentNotFoundError):
            memory_host.select_document("7")

    def test_nothing_selected(self, memory_host):
        assert memory_host.get_selected_document() is None

    def test_toggle_editors(self, memory_host):
        memory_host.execute_command("toggleEditors")
        assert memory_host.get_global_setting("editor.sourceViewEnabled") is False
        memory_host.execute_command("toggleEditors")
        assert memory_host.get_global_setting("editor.sourceViewEnabled") is True

    def test_toggle_panes_cycles(self, memory_host):
        seen = []
        for _ in range(3):
            memory_host.execute_command("toggleVisiblePanes")
            seen.append(memory_host.get_global_setting("editor.visiblePanes"))
        assert seen == [["editor"], ["viewer"], ["editor", "viewer"]]

    def test_unknown_command(self, memory_host):
        with pytest.raises(HostCommandError):
            memory_host.execute_command("deleteEverything")


class TestAutomationOnSQLiteHost:
    def test_select_and_persist(self, sqlite_host):
        automation = LayoutAutomation(sqlite_host)
        automation.start()
        pinned = sqlite_host.add_document("Pinned", tags=["layout:viewer"])
        loose = sqlite_host.add_document("Loose")

        sqlite_host.select_document(pinned)
        assert sqlite_host.get_global_setting("editor.visiblePanes") == ["viewer"]

        sqlite_host.select_document(loose)
        sqlite_host.execute_command("toggleEditors")
        automation.persist_current_layout()

        assert [t["title"] for t in fetch_all(sqlite_host.get_tags_of, loose)] == ["layout:richtext"]
