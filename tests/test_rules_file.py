"""Tests for the YAML rules file."""

import pytest
import yaml

from pinlayout.config.rules_file import LayoutRulesFile
from pinlayout.exceptions import ConfigurationError
from pinlayout.models.layouts import LayoutKind


class TestLayoutRulesFile:
    def test_load(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text(
            "default_layout: previous\n"
            "rules:\n"
            "  editor: [layout:editor, Draft]\n"
            "  viewer: 'layout:viewer, reference'\n"
        )
        rules = LayoutRulesFile.load(path)
        assert rules.default_layout == LayoutKind.PREVIOUS
        assert rules.rules["editor"] == ["layout:editor", "draft"]
        assert rules.rules["viewer"] == ["layout:viewer", "reference"]

    def test_settings(self):
        rules = LayoutRulesFile(LayoutKind.SPLIT, {"split": ["meeting", "layout:split"]})
        assert rules.settings() == {
            "defaultLayout": 2,
            "splitTags": "meeting, layout:split",
        }

    def test_save_writes_yaml(self, tmp_path):
        path = tmp_path / "nested" / "rules.yaml"
        LayoutRulesFile(LayoutKind.VIEWER, {"viewer": ["ref"]}).save(path)
        data = yaml.safe_load(path.read_text())
        assert data == {"default_layout": "viewer", "rules": {"viewer": ["ref"]}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("")
        rules = LayoutRulesFile.load(path)
        assert rules.default_layout == LayoutKind.NONE
        assert rules.rules == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            LayoutRulesFile.load(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            LayoutRulesFile.load(path)

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {"default_layout": "sideways"},
            {"rules": {"outline": ["x"]}},
            {"rules": {"editor": 42}},
        ],
    )
    def test_invalid_content(self, data):
        with pytest.raises(ConfigurationError):
            LayoutRulesFile.from_dict(data)

    def test_apply_to_and_from_host(self, memory_host):
        LayoutRulesFile(LayoutKind.RICHTEXT, {"richtext": ["wysiwyg"]}).apply_to(memory_host)

        exported = LayoutRulesFile.from_host(memory_host)

        assert exported.default_layout == LayoutKind.RICHTEXT
        assert exported.rules["richtext"] == ["wysiwyg"]
        assert exported.rules["editor"] == ["layout:editor"]
