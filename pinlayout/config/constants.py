"""
Centralized constants for pinlayout.

Setting keys, host command names and the tag labels that make up the
durable representation of a pinned layout all live here.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

PINLAYOUT_CONFIG_DIR = Path.home() / ".config" / "pinlayout"
DEFAULT_DB_NAME = "notes.db"
DEFAULT_RULES_FILE = "rules.yaml"

# =============================================================================
# LAYOUT TAG LABELS
# =============================================================================

LABEL_NONE = "layout:none"  # never written to a document
LABEL_EDITOR = "layout:editor"
LABEL_SPLIT = "layout:split"
LABEL_VIEWER = "layout:viewer"
LABEL_RICHTEXT = "layout:richtext"

# =============================================================================
# PANES
# =============================================================================

PANE_EDITOR = "editor"
PANE_VIEWER = "viewer"

# Order the host's pane toggle walks through, starting from split view
PANE_CYCLE = (
    (PANE_EDITOR, PANE_VIEWER),
    (PANE_EDITOR,),
    (PANE_VIEWER,),
)

# Upper bound on pane toggles per convergence. Matches len(PANE_CYCLE) of the
# host this was measured against; override with the paneToggleLimit setting.
MAX_PANE_TOGGLES = 3

# =============================================================================
# HOST API
# =============================================================================

DEFAULT_PAGE_SIZE = 100  # items per page for paginated host queries

# Global (host-owned) settings describing the live editor state
GLOBAL_SOURCE_VIEW = "editor.sourceViewEnabled"
GLOBAL_VISIBLE_PANES = "editor.visiblePanes"

# Host commands; both are toggles, the host offers no setter
CMD_TOGGLE_EDITORS = "toggleEditors"  # flips source/rendered mode
CMD_TOGGLE_VISIBLE_PANES = "toggleVisiblePanes"  # cycles visible panes

# =============================================================================
# PLUGIN SETTINGS
# =============================================================================

SETTING_DEFAULT_LAYOUT = "defaultLayout"
SETTING_EDITOR_TAGS = "editorTags"
SETTING_SPLIT_TAGS = "splitTags"
SETTING_VIEWER_TAGS = "viewerTags"
SETTING_RICHTEXT_TAGS = "richtextTags"
SETTING_PANE_TOGGLE_LIMIT = "paneToggleLimit"

TAG_SETTING_KEYS = (
    SETTING_EDITOR_TAGS,
    SETTING_SPLIT_TAGS,
    SETTING_VIEWER_TAGS,
    SETTING_RICHTEXT_TAGS,
)

# Option values mirror LayoutKind integer values
DEFAULT_LAYOUT_OPTIONS = {
    "0": " ",
    "1": "Editor",
    "2": "Split View",
    "3": "Viewer",
    "4": "Rich Text",
    "5": "Previous",
}

SETTING_DEFINITIONS = {
    SETTING_DEFAULT_LAYOUT: {
        "label": "Default editor layout",
        "description": (
            "Layout used for all notes that have no layout tags. If empty is "
            "selected, the current layout is kept. 'Previous' reuses the layout "
            "last seen on an untagged note."
        ),
        "default": 0,
        "options": DEFAULT_LAYOUT_OPTIONS,
    },
    SETTING_EDITOR_TAGS: {
        "label": "Tags for editor layout",
        "description": "Comma separated list of tags which select the editor-only layout.",
        "default": LABEL_EDITOR,
    },
    SETTING_SPLIT_TAGS: {
        "label": "Tags for split view layout",
        "description": "Comma separated list of tags which select the split view layout.",
        "default": LABEL_SPLIT,
    },
    SETTING_VIEWER_TAGS: {
        "label": "Tags for viewer layout",
        "description": "Comma separated list of tags which select the viewer-only layout.",
        "default": LABEL_VIEWER,
    },
    SETTING_RICHTEXT_TAGS: {
        "label": "Tags for rich text layout",
        "description": "Comma separated list of tags which select the rich text (WYSIWYG) editor.",
        "default": LABEL_RICHTEXT,
    },
    SETTING_PANE_TOGGLE_LIMIT: {
        "label": "Pane toggle limit",
        "description": "Maximum number of pane toggles issued while switching layouts.",
        "default": MAX_PANE_TOGGLES,
        "advanced": True,
    },
}

# =============================================================================
# ENVIRONMENT
# =============================================================================

ENV_TEST_DB = "PINLAYOUT_TEST_DB"
ENV_DB_PATH = "PINLAYOUT_DB"
