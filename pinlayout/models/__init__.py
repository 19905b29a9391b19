"""Layout models."""

from .layouts import (
    CONCRETE_LAYOUTS,
    LAYOUT_CATALOG,
    LayoutDescriptor,
    LayoutKind,
    LayoutSelection,
    descriptor_for,
    kind_for_label,
    layout_labels,
)

__all__ = [
    "CONCRETE_LAYOUTS",
    "LAYOUT_CATALOG",
    "LayoutDescriptor",
    "LayoutKind",
    "LayoutSelection",
    "descriptor_for",
    "kind_for_label",
    "layout_labels",
]
