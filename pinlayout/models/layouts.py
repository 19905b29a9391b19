"""Layout catalog and layout selection model.

A layout is a combination of the editor mode (markdown source or rich text)
and the set of visible panes. The catalog is fixed: one descriptor per
concrete LayoutKind. PREVIOUS is a meta selection that the resolver replaces
with a remembered concrete layout, so it has no descriptor.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Union

from pinlayout.config.constants import (
    DEFAULT_LAYOUT_OPTIONS,
    LABEL_EDITOR,
    LABEL_NONE,
    LABEL_RICHTEXT,
    LABEL_SPLIT,
    LABEL_VIEWER,
    PANE_EDITOR,
    PANE_VIEWER,
)
from pinlayout.exceptions import UnknownLayoutError


class LayoutKind(IntEnum):
    """Recognized layouts. Values match the stored defaultLayout option."""

    NONE = 0
    EDITOR = 1
    SPLIT = 2
    VIEWER = 3
    RICHTEXT = 4  # WYSIWYG
    PREVIOUS = 5

    @classmethod
    def parse(cls, value: Union["LayoutKind", int, str, None]) -> "LayoutKind":
        """Parse a setting value into a LayoutKind.

        Accepts the enum itself, its integer value (or a digit string), the
        member name in any case, or the option label shown in settings.

        Raises:
            ValueError: If the value names no layout.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        if isinstance(value, bool):
            raise ValueError(f"Invalid layout value: {value!r}")
        if isinstance(value, int):
            return cls(value)

        text = str(value).strip()
        if not text:
            return cls.NONE
        if text.isdigit():
            return cls(int(text))

        normalized = text.replace(" ", "").replace("_", "").upper()
        for member in cls:
            if member.name == normalized:
                return member
        for number, label in DEFAULT_LAYOUT_OPTIONS.items():
            if label.strip() and label.replace(" ", "").upper() == normalized:
                return cls(int(number))
        raise ValueError(f"Invalid layout value: {value!r}")

    @property
    def is_concrete(self) -> bool:
        """True for layouts that can be written as a tag."""
        return self not in (LayoutKind.NONE, LayoutKind.PREVIOUS)


@dataclass(frozen=True)
class LayoutDescriptor:
    """Static description of one layout."""

    label: str
    uses_source_view: bool
    visible_panes: frozenset

    def matches(self, uses_source_view: bool, visible_panes: frozenset) -> bool:
        return (
            self.uses_source_view == uses_source_view
            and self.visible_panes == visible_panes
        )


LAYOUT_CATALOG = {
    LayoutKind.NONE: LayoutDescriptor(LABEL_NONE, True, frozenset()),
    LayoutKind.EDITOR: LayoutDescriptor(LABEL_EDITOR, True, frozenset({PANE_EDITOR})),
    LayoutKind.SPLIT: LayoutDescriptor(
        LABEL_SPLIT, True, frozenset({PANE_EDITOR, PANE_VIEWER})
    ),
    LayoutKind.VIEWER: LayoutDescriptor(LABEL_VIEWER, True, frozenset({PANE_VIEWER})),
    LayoutKind.RICHTEXT: LayoutDescriptor(LABEL_RICHTEXT, False, frozenset()),
}

# Kinds that may be pinned to a document, in rule evaluation order
CONCRETE_LAYOUTS = (
    LayoutKind.EDITOR,
    LayoutKind.SPLIT,
    LayoutKind.VIEWER,
    LayoutKind.RICHTEXT,
)

# Pane layouts distinguished by their pane set once source view is confirmed
_SOURCE_VIEW_LAYOUTS = (LayoutKind.EDITOR, LayoutKind.SPLIT, LayoutKind.VIEWER)


def descriptor_for(kind: LayoutKind) -> LayoutDescriptor:
    """Return the catalog descriptor for a kind.

    Raises:
        UnknownLayoutError: For PREVIOUS, which must be resolved first.
    """
    try:
        return LAYOUT_CATALOG[kind]
    except KeyError:
        raise UnknownLayoutError(
            "Layout has no descriptor", kind=LayoutKind(kind).name
        ) from None


def layout_labels() -> dict:
    """Map each concrete kind to its tag label."""
    return {kind: LAYOUT_CATALOG[kind].label for kind in CONCRETE_LAYOUTS}


def kind_for_label(label: str) -> Optional[LayoutKind]:
    """Reverse lookup of a concrete kind from a tag label."""
    label = label.lower().strip()
    for kind in CONCRETE_LAYOUTS:
        if LAYOUT_CATALOG[kind].label == label:
            return kind
    return None


def normalize_panes(visible_panes: Optional[Iterable[str]]) -> frozenset:
    """Turn a host pane list into a comparable set.

    Order and duplicates do not matter; blank entries are dropped since some
    hosts report an empty layout as [""].
    """
    if not visible_panes:
        return frozenset()
    if isinstance(visible_panes, str):
        visible_panes = [visible_panes]
    return frozenset(p.strip() for p in visible_panes if p and p.strip())


class LayoutSelection:
    """A selected layout, constructed fresh for every selection event."""

    def __init__(self, kind: LayoutKind = LayoutKind.NONE):
        self._kind = LayoutKind(kind)

    def __repr__(self) -> str:
        return f"LayoutSelection({self._kind.name})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LayoutSelection):
            return self._kind == other._kind
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._kind)

    @property
    def kind(self) -> LayoutKind:
        return self._kind

    def set(self, kind: LayoutKind) -> None:
        """Replace the selected kind."""
        self._kind = LayoutKind(kind)

    def is_recognized(self) -> bool:
        return self._kind != LayoutKind.NONE

    def uses_source_view(self) -> bool:
        return descriptor_for(self._kind).uses_source_view

    def visible_panes(self) -> frozenset:
        return descriptor_for(self._kind).visible_panes

    def matches(self, uses_source_view: bool, visible_panes: Iterable[str]) -> bool:
        """Check the observed editor state against this layout.

        Panes are ignored for rich text, which has no panes to compare.
        """
        if self.uses_source_view() != bool(uses_source_view):
            return False
        if not self.uses_source_view():
            return True
        return self.visible_panes() == normalize_panes(visible_panes)

    @staticmethod
    def from_observed_state(
        uses_source_view: bool, visible_panes: Optional[Iterable[str]]
    ) -> LayoutKind:
        """Map observed editor state back to a layout kind.

        The editor mode is checked before the panes: NONE and RICHTEXT share
        an empty pane set and only differ in the mode.
        """
        if not uses_source_view:
            return LayoutKind.RICHTEXT

        panes = normalize_panes(visible_panes)
        for kind in _SOURCE_VIEW_LAYOUTS:
            if LAYOUT_CATALOG[kind].matches(True, panes):
                return kind
        return LayoutKind.NONE
