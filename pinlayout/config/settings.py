"""Configuration utilities for pinlayout.

Holds the tag rule set that maps document tags to layouts and the settings
reader that keeps it in sync with the host's plugin settings.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

from .constants import (
    DEFAULT_DB_NAME,
    ENV_DB_PATH,
    ENV_TEST_DB,
    MAX_PANE_TOGGLES,
    PINLAYOUT_CONFIG_DIR,
    SETTING_DEFAULT_LAYOUT,
    SETTING_DEFINITIONS,
    SETTING_EDITOR_TAGS,
    SETTING_PANE_TOGGLE_LIMIT,
    SETTING_RICHTEXT_TAGS,
    SETTING_SPLIT_TAGS,
    SETTING_VIEWER_TAGS,
)
from pinlayout.models.layouts import LayoutKind

logger = logging.getLogger(__name__)


def get_db_path() -> Path:
    """Get the database path, respecting PINLAYOUT_TEST_DB and PINLAYOUT_DB.

    When running tests, set PINLAYOUT_TEST_DB to a temp file path to prevent
    tests from polluting the real database.
    """
    test_db = os.environ.get(ENV_TEST_DB)
    if test_db:
        return Path(test_db)

    db_path = os.environ.get(ENV_DB_PATH)
    if db_path:
        return Path(db_path).expanduser()

    PINLAYOUT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return PINLAYOUT_CONFIG_DIR / DEFAULT_DB_NAME


def parse_tag_list(text: Optional[str]) -> frozenset:
    """Parse a comma separated tag setting into a set of tag names.

    Names are stripped and lower-cased; empty entries are dropped, so an
    unset or blank setting yields an empty set that matches nothing.
    """
    if not text:
        return frozenset()
    return frozenset(
        name.strip().lower() for name in str(text).split(",") if name.strip()
    )


def normalize_tags(tags: Iterable[str]) -> frozenset:
    """Lower-case and strip document tag titles for matching."""
    return frozenset(t.strip().lower() for t in tags if t and t.strip())


@dataclass(frozen=True)
class TagRuleSet:
    """Tag lists per layout plus the fallback used when none match."""

    editor_tags: frozenset = field(default_factory=frozenset)
    split_tags: frozenset = field(default_factory=frozenset)
    viewer_tags: frozenset = field(default_factory=frozenset)
    richtext_tags: frozenset = field(default_factory=frozenset)
    default_layout: LayoutKind = LayoutKind.NONE

    def rules(self) -> Iterator[Tuple[LayoutKind, frozenset]]:
        """Yield (kind, tags) in evaluation order; earlier rules win."""
        yield LayoutKind.EDITOR, self.editor_tags
        yield LayoutKind.SPLIT, self.split_tags
        yield LayoutKind.VIEWER, self.viewer_tags
        yield LayoutKind.RICHTEXT, self.richtext_tags

    def match(self, document_tags: Iterable[str]) -> Optional[LayoutKind]:
        """Return the first layout whose tag list intersects the document tags."""
        tags = normalize_tags(document_tags)
        for kind, rule_tags in self.rules():
            if rule_tags & tags:
                return kind
        return None

    def matches_any(self, document_tags: Iterable[str]) -> bool:
        return self.match(document_tags) is not None

    @classmethod
    def from_settings(cls, values: Mapping[str, Any]) -> "TagRuleSet":
        """Build a rule set from raw setting values keyed by setting name."""
        return cls(
            editor_tags=parse_tag_list(values.get(SETTING_EDITOR_TAGS)),
            split_tags=parse_tag_list(values.get(SETTING_SPLIT_TAGS)),
            viewer_tags=parse_tag_list(values.get(SETTING_VIEWER_TAGS)),
            richtext_tags=parse_tag_list(values.get(SETTING_RICHTEXT_TAGS)),
            default_layout=parse_default_layout(values.get(SETTING_DEFAULT_LAYOUT)),
        )


def parse_default_layout(value: Any) -> LayoutKind:
    """Parse the defaultLayout setting, falling back to NONE when invalid."""
    try:
        return LayoutKind.parse(value)
    except ValueError as e:
        logger.warning(f"Ignoring invalid {SETTING_DEFAULT_LAYOUT} setting: {e}")
        return LayoutKind.NONE


def parse_toggle_limit(value: Any) -> int:
    """Parse the paneToggleLimit setting, falling back to the built-in bound."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return MAX_PANE_TOGGLES
    if limit < 1:
        logger.warning(f"Ignoring {SETTING_PANE_TOGGLE_LIMIT}={limit}, must be >= 1")
        return MAX_PANE_TOGGLES
    return limit


def validate_setting(key: str, value: Any) -> Tuple[bool, Optional[str]]:
    """Validate a single plugin setting value.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if key not in SETTING_DEFINITIONS:
        return False, f"Unknown setting '{key}'. Known settings: {sorted(SETTING_DEFINITIONS)}"

    if key == SETTING_DEFAULT_LAYOUT:
        try:
            LayoutKind.parse(value)
        except ValueError:
            options = [k.name.lower() for k in LayoutKind]
            return False, f"Invalid value '{value}' for {key}. Valid values: {options}"

    if key == SETTING_PANE_TOGGLE_LIMIT:
        try:
            if int(value) < 1:
                raise ValueError(value)
        except (TypeError, ValueError):
            return False, f"Invalid value '{value}' for {key}. Expected a positive integer"

    return True, None


def default_settings() -> dict:
    """Default value for every plugin setting."""
    return {key: definition["default"] for key, definition in SETTING_DEFINITIONS.items()}


class LayoutSettings:
    """Cached view of the plugin settings held by the host.

    read() with no keys reloads everything; with a list of keys only those
    are fetched again and the rest keep their cached values.
    """

    def __init__(self, host):
        self.host = host
        self._values = default_settings()

    def read(self, changed_keys: Optional[Iterable[str]] = None) -> None:
        keys = list(SETTING_DEFINITIONS) if changed_keys is None else [
            k for k in changed_keys if k in SETTING_DEFINITIONS
        ]
        for key in keys:
            value = self.host.get_setting(key)
            self._values[key] = SETTING_DEFINITIONS[key]["default"] if value is None else value
        if keys:
            logger.debug(f"Read settings: {', '.join(keys)}")

    def value(self, key: str) -> Any:
        return self._values[key]

    @property
    def default_layout(self) -> LayoutKind:
        return parse_default_layout(self._values[SETTING_DEFAULT_LAYOUT])

    @property
    def pane_toggle_limit(self) -> int:
        return parse_toggle_limit(self._values[SETTING_PANE_TOGGLE_LIMIT])

    @property
    def rule_set(self) -> TagRuleSet:
        return TagRuleSet.from_settings(self._values)
