"""
Protocols for the note host.

The host owns document storage, tagging, settings and the editor UI. These
protocols describe the capabilities pinlayout consumes; any application
adapter that implements them can drive the layout engine.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence, TypedDict, runtime_checkable


class Tag(TypedDict):
    """Tag record as returned by the host."""

    id: str
    title: str


class Document(TypedDict):
    """Minimal document record as returned by the host."""

    id: str
    title: str


class Page(TypedDict):
    """One page of a paginated host query."""

    items: list
    has_more: bool


SelectionHandler = Callable[[], None]
SettingsHandler = Callable[[Sequence[str]], None]


@runtime_checkable
class NoteHost(Protocol):
    """
    Capabilities the layout engine needs from its host application.

    Every call may block until the host answers and may raise a HostError.
    Paginated calls take a 1-based page number; use
    pinlayout.host.pagination.fetch_all to assemble complete lists.
    """

    def get_selected_document(self) -> Optional[Document]:
        """Return the currently selected document, or None."""
        ...

    def get_selected_document_ids(self) -> list[str]:
        """Return the ids of all selected documents (multi-selection)."""
        ...

    def get_tags_of(self, document_id: str, *, page: int = 1) -> Page:
        """Return one page of tags attached to a document."""
        ...

    def get_all_tags(self, fields: Sequence[str] = ("id", "title"), *, page: int = 1) -> Page:
        """Return one page of all tags."""
        ...

    def create_tag(self, title: str) -> Tag:
        """Create a tag globally and return it."""
        ...

    def attach_tag(self, tag_id: str, document_id: str) -> None:
        """Attach a tag to a document. Attaching twice is a no-op."""
        ...

    def detach_tag(self, tag_id: str, document_id: str) -> None:
        """Detach a tag from a document."""
        ...

    def get_global_setting(self, key: str) -> Any:
        """Read a host-owned setting such as the current visible panes."""
        ...

    def get_setting(self, key: str) -> Any:
        """Read one of this plugin's settings."""
        ...

    def execute_command(self, name: str) -> None:
        """Run a named host command."""
        ...

    def on_document_selection_changed(self, handler: SelectionHandler) -> None:
        """Register a handler called after the selection changes."""
        ...

    def on_settings_changed(self, handler: SettingsHandler) -> None:
        """Register a handler called with the keys of changed settings."""
        ...
