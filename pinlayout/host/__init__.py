"""Host adapters and the capability protocol the layout engine consumes."""

from .pagination import fetch_all
from .protocols import Document, NoteHost, Page, Tag

__all__ = ["Document", "NoteHost", "Page", "Tag", "fetch_all"]
