"""Layout automation service.

Connects the host's selection and settings notifications to the resolver
and the convergence loop, and exposes the user command that pins the current
layout to the selected documents.

The host delivers notifications one at a time and each handler runs to
completion before the next, so the resolver state needs no locking.
"""

import logging
from typing import Iterable, Optional, Sequence

from pinlayout.config.constants import GLOBAL_SOURCE_VIEW, GLOBAL_VISIBLE_PANES
from pinlayout.config.settings import LayoutSettings
from pinlayout.exceptions import DocumentNotFoundError
from pinlayout.host.pagination import fetch_all
from pinlayout.models.layouts import LayoutKind, LayoutSelection

from .convergence import PaneConvergence
from .persistence import LayoutPersistence, PersistResult
from .resolver import LayoutResolver

logger = logging.getLogger(__name__)


class LayoutAutomation:
    """Apply tag-driven layouts whenever the selected document changes."""

    def __init__(self, host, max_toggles: Optional[int] = None, resolver: Optional[LayoutResolver] = None):
        self.host = host
        self.settings = LayoutSettings(host)
        self.resolver = resolver or LayoutResolver()
        self.persistence = LayoutPersistence(host)
        self._max_toggles = max_toggles
        self._started = False

    @property
    def max_toggles(self) -> int:
        if self._max_toggles is not None:
            return self._max_toggles
        return self.settings.pane_toggle_limit

    def start(self) -> None:
        """Read all settings and subscribe to host notifications."""
        if self._started:
            return
        self.settings.read()
        self.host.on_document_selection_changed(self.on_selection_changed)
        self.host.on_settings_changed(self.on_settings_changed)
        self._started = True
        logger.info(
            f"Layout automation started (default layout: {self.settings.default_layout.name})"
        )

    def observed_layout(self) -> LayoutKind:
        """Map the editor's current state to a layout kind."""
        return LayoutSelection.from_observed_state(
            bool(self.host.get_global_setting(GLOBAL_SOURCE_VIEW)),
            self.host.get_global_setting(GLOBAL_VISIBLE_PANES),
        )

    def _tag_titles(self, document_id: str) -> list[str]:
        return [tag["title"] for tag in fetch_all(self.host.get_tags_of, document_id)]

    def _previous_document_tags(self) -> Optional[list[str]]:
        """Current tags of the previously selected document.

        Read again on every event since the document may have been tagged
        after it was selected. None when there is no previous document or it
        no longer exists.
        """
        previous_id = self.resolver.previous_document_id
        if previous_id is None:
            return None
        try:
            return self._tag_titles(previous_id)
        except DocumentNotFoundError:
            logger.debug(f"Previous document {previous_id} is gone")
            return None

    def handle_selection(self) -> Optional[LayoutKind]:
        """Resolve and apply the layout for the selected document.

        Returns:
            The applied layout, NONE if the editor was left alone, or None if
            the event was skipped (nothing selected or a repeated selection).
        """
        document = self.host.get_selected_document()
        if not document:
            return None

        document_id = document["id"]
        if self.resolver.is_duplicate(document_id):
            logger.debug(f"Skipping repeated selection of document {document_id}")
            return None

        tags = self._tag_titles(document_id)
        previous_tags = self._previous_document_tags()

        saved = self.resolver.snapshot()
        kind = self.resolver.resolve(
            document_id,
            tags,
            self.settings.rule_set,
            self.observed_layout(),
            previous_tags,
        )
        if kind == LayoutKind.NONE:
            return kind

        try:
            converged = PaneConvergence(self.host, self.max_toggles).apply(LayoutSelection(kind))
        except Exception:
            # Forget the event so the host's next notification retries it
            self.resolver.restore(saved)
            raise
        if not converged:
            logger.info(f"Layout {kind.name} not reachable for document {document_id}")
        return kind

    def on_selection_changed(self) -> None:
        """Host notification handler; failures are logged, never raised."""
        try:
            self.handle_selection()
        except Exception as e:
            logger.error(f"on_selection_changed: {e}", exc_info=True)

    def on_settings_changed(self, keys: Sequence[str]) -> None:
        """Host notification handler; refreshes only the changed keys."""
        try:
            self.settings.read(keys)
        except Exception as e:
            logger.error(f"on_settings_changed: {e}", exc_info=True)

    def persist_current_layout(
        self, document_ids: Optional[Iterable[str]] = None
    ) -> list[PersistResult]:
        """Tag documents with the layout the editor shows right now.

        Args:
            document_ids: Documents to tag; defaults to the host's selection
        """
        ids = list(document_ids) if document_ids else self.host.get_selected_document_ids()
        if not ids:
            logger.warning("No documents selected, nothing to persist")
            return []
        return self.persistence.persist(ids, self.observed_layout())
