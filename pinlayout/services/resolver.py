"""Resolve the target layout for a newly selected document.

Resolution order:
    1. First tag rule that matches (Editor, Split, Viewer, Richtext)
    2. The configured default layout
    3. For a PREVIOUS default, the layout last seen on an untagged document
    4. NONE, meaning the editor is left alone

The state threaded through these functions is process-lifetime only and is
never written to the store.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Iterable, Optional

from pinlayout.config.settings import TagRuleSet, normalize_tags
from pinlayout.models.layouts import LayoutKind

logger = logging.getLogger(__name__)


@dataclass
class ResolutionState:
    """Memory carried from one selection event to the next."""

    last_document_id: Optional[str] = None
    last_document_tags: frozenset = field(default_factory=frozenset)
    # NONE until a layout was observed on an untagged document
    last_layout_kind: LayoutKind = LayoutKind.NONE


def is_duplicate_selection(state: ResolutionState, document_id: str) -> bool:
    """True when the host re-announces the document resolved last."""
    return state.last_document_id is not None and state.last_document_id == document_id


def remember_previous_layout(
    state: ResolutionState,
    rules: TagRuleSet,
    observed: LayoutKind,
    previous_tags: Optional[Iterable[str]] = None,
) -> None:
    """Record the editor layout left behind on the previous document.

    Only layouts on documents without any layout tag are remembered; a tagged
    document's layout was chosen by its rule, not by the user.

    Args:
        previous_tags: Current tags of the previous document. The tags seen
            when it was selected are used when not given; they are stale once
            the document was tagged since.
    """
    if state.last_document_id is None:
        return
    tags = state.last_document_tags if previous_tags is None else normalize_tags(previous_tags)
    if rules.matches_any(tags):
        return
    if observed != state.last_layout_kind:
        logger.debug(
            f"Remembering {observed.name} from untagged document {state.last_document_id}"
        )
    state.last_layout_kind = observed


def resolve(
    document_tags: Iterable[str],
    rules: TagRuleSet,
    state: ResolutionState,
    observed: LayoutKind = LayoutKind.NONE,
    previous_tags: Optional[Iterable[str]] = None,
) -> LayoutKind:
    """Resolve the layout for a document with the given tags.

    Args:
        document_tags: Tag titles of the newly selected document
        rules: Tag rules and default layout
        state: Resolution state, updated in place
        observed: Editor layout as it is right now, before switching
        previous_tags: Current tags of the previously selected document

    Returns:
        The target layout; NONE means no change should be made
    """
    remember_previous_layout(state, rules, observed, previous_tags)

    matched = rules.match(document_tags)
    if matched is not None:
        return matched

    kind = rules.default_layout
    if kind == LayoutKind.PREVIOUS:
        kind = state.last_layout_kind
    return kind


def record_selection(
    state: ResolutionState, document_id: str, document_tags: Iterable[str]
) -> None:
    state.last_document_id = document_id
    state.last_document_tags = normalize_tags(document_tags)


class LayoutResolver:
    """Resolver holding its own ResolutionState across selection events."""

    def __init__(self, state: Optional[ResolutionState] = None):
        self.state = state if state is not None else ResolutionState()

    def is_duplicate(self, document_id: str) -> bool:
        return is_duplicate_selection(self.state, document_id)

    @property
    def previous_document_id(self) -> Optional[str]:
        return self.state.last_document_id

    def snapshot(self) -> ResolutionState:
        return replace(self.state)

    def restore(self, saved: ResolutionState) -> None:
        """Roll the state back to a snapshot, keeping the same state object."""
        for f in fields(ResolutionState):
            setattr(self.state, f.name, getattr(saved, f.name))

    def resolve(
        self,
        document_id: str,
        document_tags: Iterable[str],
        rules: TagRuleSet,
        observed: LayoutKind = LayoutKind.NONE,
        previous_tags: Optional[Iterable[str]] = None,
    ) -> LayoutKind:
        tags = normalize_tags(document_tags)
        kind = resolve(tags, rules, self.state, observed, previous_tags)
        record_selection(self.state, document_id, tags)
        logger.debug(f"Resolved document {document_id} to {kind.name}")
        return kind
