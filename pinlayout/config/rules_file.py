"""
Layout rules file for pinlayout.
Lets users keep their tag rules in YAML and load them into a host's settings.

Example ``~/.config/pinlayout/rules.yaml``::

    default_layout: previous
    rules:
      editor: [layout:editor, draft]
      split: [layout:split]
      viewer: [layout:viewer, reference]
      richtext: [layout:richtext]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from pinlayout.exceptions import ConfigurationError
from pinlayout.models.layouts import LayoutKind

from .constants import (
    DEFAULT_RULES_FILE,
    PINLAYOUT_CONFIG_DIR,
    SETTING_DEFAULT_LAYOUT,
    SETTING_DEFINITIONS,
    TAG_SETTING_KEYS,
)
from .settings import parse_tag_list

logger = logging.getLogger(__name__)

# rules file key -> setting key
RULE_KEYS = dict(zip(("editor", "split", "viewer", "richtext"), TAG_SETTING_KEYS))


@dataclass
class LayoutRulesFile:
    """In-memory form of a rules file."""

    default_layout: LayoutKind = LayoutKind.NONE
    rules: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "default_layout": self.default_layout.name.lower(),
            "rules": {name: list(tags) for name, tags in self.rules.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutRulesFile":
        """Create from a parsed YAML mapping.

        Raises:
            ConfigurationError: On unknown layouts or malformed tag lists.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Rules file must contain a mapping")

        try:
            default_layout = LayoutKind.parse(data.get("default_layout"))
        except ValueError as e:
            raise ConfigurationError(str(e), setting="default_layout") from e

        rules: Dict[str, List[str]] = {}
        for name, tags in (data.get("rules") or {}).items():
            if name not in RULE_KEYS:
                raise ConfigurationError(
                    f"Unknown layout '{name}'. Valid layouts: {sorted(RULE_KEYS)}",
                    setting="rules",
                )
            if isinstance(tags, str):
                tags = sorted(parse_tag_list(tags))
            elif not isinstance(tags, list):
                raise ConfigurationError("Tag list must be a list or string", setting=name)
            rules[name] = [str(t).strip().lower() for t in tags if str(t).strip()]
        return cls(default_layout=default_layout, rules=rules)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "LayoutRulesFile":
        path = Path(path or PINLAYOUT_CONFIG_DIR / DEFAULT_RULES_FILE).expanduser()
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigurationError("Could not read rules file", path=str(path)) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=str(path)) from e
        return cls.from_dict(data)

    def save(self, path: Optional[Path] = None) -> Path:
        path = Path(path or PINLAYOUT_CONFIG_DIR / DEFAULT_RULES_FILE).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        return path

    def settings(self) -> Dict[str, Any]:
        """Setting values described by this file, keyed by setting name."""
        values: Dict[str, Any] = {SETTING_DEFAULT_LAYOUT: int(self.default_layout)}
        for name, key in RULE_KEYS.items():
            if name in self.rules:
                values[key] = ", ".join(self.rules[name])
        return values

    def apply_to(self, host) -> Dict[str, Any]:
        """Write the rules into the host's settings. Returns what was written."""
        values = self.settings()
        for key, value in values.items():
            host.set_setting(key, value)
        logger.info(f"Applied {len(values)} settings from rules file")
        return values

    @classmethod
    def from_host(cls, host) -> "LayoutRulesFile":
        """Snapshot the host's current settings as a rules file."""
        raw = host.get_setting(SETTING_DEFAULT_LAYOUT)
        try:
            default_layout = LayoutKind.parse(raw)
        except ValueError:
            logger.warning(f"Exporting invalid {SETTING_DEFAULT_LAYOUT}={raw!r} as none")
            default_layout = LayoutKind.NONE

        rules = {}
        for name, key in RULE_KEYS.items():
            value = host.get_setting(key)
            if value is None:
                value = SETTING_DEFINITIONS[key]["default"]
            rules[name] = sorted(parse_tag_list(value))
        return cls(default_layout=default_layout, rules=rules)
