"""Write the current editor layout back to documents as a layout tag."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from pinlayout.host.pagination import fetch_all
from pinlayout.models.layouts import CONCRETE_LAYOUTS, LayoutKind, descriptor_for

logger = logging.getLogger(__name__)


@dataclass
class PersistResult:
    """Tag changes made on one document."""

    document_id: str
    added: list = field(default_factory=list)
    removed: list = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


class LayoutPersistence:
    """Pin a layout to documents by replacing their layout tags."""

    def __init__(self, host):
        self.host = host

    def _find_or_create_tag(self, label: str) -> str:
        for tag in fetch_all(self.host.get_all_tags, fields=["id", "title"]):
            if tag["title"].lower().strip() == label:
                return tag["id"]
        created = self.host.create_tag(label)
        logger.info(f"Created tag {label}")
        return created["id"]

    def persist(
        self, document_ids: Iterable[str], observed_layout: LayoutKind
    ) -> list[PersistResult]:
        """Tag each document with the label of the observed layout.

        Tags of the other layouts are detached first. The target tag is only
        attached where it is missing. NONE and PREVIOUS name no concrete
        layout, so nothing is written for them.
        """
        observed_layout = LayoutKind(observed_layout)
        if not observed_layout.is_concrete:
            logger.warning(f"Not persisting unrecognized layout {observed_layout.name}")
            return []

        label = descriptor_for(observed_layout).label
        other_labels = {
            descriptor_for(kind).label for kind in CONCRETE_LAYOUTS if kind != observed_layout
        }
        tag_id: Optional[str] = None

        results = []
        for document_id in document_ids:
            result = PersistResult(document_id=document_id)
            has_target = False
            for tag in fetch_all(self.host.get_tags_of, document_id):
                title = tag["title"].lower().strip()
                if title in other_labels:
                    self.host.detach_tag(tag["id"], document_id)
                    result.removed.append(title)
                elif title == label:
                    has_target = True

            if not has_target:
                if tag_id is None:
                    tag_id = self._find_or_create_tag(label)
                self.host.attach_tag(tag_id, document_id)
                result.added.append(label)

            if result.changed:
                logger.info(
                    f"Pinned {label} to document {document_id}"
                    + (f", removed {', '.join(result.removed)}" if result.removed else "")
                )
            results.append(result)
        return results
