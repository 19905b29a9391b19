"""Tests for layout resolution and the remembered layout."""

import pytest

from pinlayout.config.settings import TagRuleSet, parse_tag_list
from pinlayout.models.layouts import LayoutKind
from pinlayout.services.resolver import (
    LayoutResolver,
    ResolutionState,
    is_duplicate_selection,
    record_selection,
    remember_previous_layout,
    resolve,
)


@pytest.fixture
def rules():
    return TagRuleSet(
        editor_tags=parse_tag_list("layout:editor, draft"),
        split_tags=parse_tag_list("layout:split, draft, meeting"),
        viewer_tags=parse_tag_list("layout:viewer"),
        richtext_tags=parse_tag_list("layout:richtext"),
    )


def with_default(rules, kind):
    return TagRuleSet(
        editor_tags=rules.editor_tags,
        split_tags=rules.split_tags,
        viewer_tags=rules.viewer_tags,
        richtext_tags=rules.richtext_tags,
        default_layout=kind,
    )


class TestResolve:
    def test_tag_match(self, rules):
        assert resolve({"layout:viewer"}, rules, ResolutionState()) == LayoutKind.VIEWER

    def test_editor_beats_split(self, rules):
        assert resolve({"draft"}, rules, ResolutionState()) == LayoutKind.EDITOR
        assert resolve({"layout:split", "layout:editor"}, rules, ResolutionState()) == LayoutKind.EDITOR

    def test_case_insensitive(self, rules):
        assert resolve({"Layout:RichText"}, rules, ResolutionState()) == LayoutKind.RICHTEXT

    def test_default_when_untagged(self, rules):
        assert resolve({"python"}, with_default(rules, LayoutKind.SPLIT), ResolutionState()) == LayoutKind.SPLIT

    def test_none_default_means_no_change(self, rules):
        assert resolve(set(), rules, ResolutionState()) == LayoutKind.NONE

    def test_previous_without_memory_is_none(self, rules):
        state = ResolutionState()
        assert resolve(set(), with_default(rules, LayoutKind.PREVIOUS), state) == LayoutKind.NONE

    def test_previous_uses_remembered_layout(self, rules):
        state = ResolutionState(last_layout_kind=LayoutKind.VIEWER)
        assert resolve(set(), with_default(rules, LayoutKind.PREVIOUS), state) == LayoutKind.VIEWER

    def test_empty_rules_match_nothing(self):
        assert resolve({"layout:editor"}, TagRuleSet(), ResolutionState()) == LayoutKind.NONE


class TestRememberPreviousLayout:
    def test_nothing_remembered_without_previous_document(self, rules):
        state = ResolutionState()
        remember_previous_layout(state, rules, LayoutKind.SPLIT)
        assert state.last_layout_kind == LayoutKind.NONE

    def test_remembers_layout_of_untagged_document(self, rules):
        state = ResolutionState()
        record_selection(state, "a", ["python"])
        remember_previous_layout(state, rules, LayoutKind.VIEWER)
        assert state.last_layout_kind == LayoutKind.VIEWER

    def test_ignores_layout_of_tagged_document(self, rules):
        state = ResolutionState(last_layout_kind=LayoutKind.EDITOR)
        record_selection(state, "a", ["meeting"])
        remember_previous_layout(state, rules, LayoutKind.SPLIT)
        assert state.last_layout_kind == LayoutKind.EDITOR

    def test_resolve_looks_at_prior_document(self, rules):
        """Switching between untagged notes carries the user's layout along."""
        rules = with_default(rules, LayoutKind.PREVIOUS)
        state = ResolutionState()
        record_selection(state, "a", [])

        kind = resolve(["python"], rules, state, observed=LayoutKind.SPLIT)

        assert kind == LayoutKind.SPLIT
        assert state.last_layout_kind == LayoutKind.SPLIT

    def test_tagged_document_does_not_overwrite_memory(self, rules):
        rules = with_default(rules, LayoutKind.PREVIOUS)
        state = ResolutionState(last_layout_kind=LayoutKind.VIEWER)
        record_selection(state, "a", ["layout:editor"])

        kind = resolve([], rules, state, observed=LayoutKind.EDITOR)

        assert kind == LayoutKind.VIEWER

    def test_current_previous_tags_override_stale_snapshot(self, rules):
        state = ResolutionState()
        record_selection(state, "a", [])
        remember_previous_layout(state, rules, LayoutKind.VIEWER, previous_tags=["Layout:Editor"])
        assert state.last_layout_kind == LayoutKind.NONE

    def test_previous_tags_removed_since_selection(self, rules):
        state = ResolutionState()
        record_selection(state, "a", ["layout:split"])
        remember_previous_layout(state, rules, LayoutKind.VIEWER, previous_tags=[])
        assert state.last_layout_kind == LayoutKind.VIEWER


class TestDuplicateSelection:
    def test_first_selection_is_not_duplicate(self):
        assert not is_duplicate_selection(ResolutionState(), "a")

    def test_same_id_is_duplicate(self):
        state = ResolutionState()
        record_selection(state, "a", [])
        assert is_duplicate_selection(state, "a")
        assert not is_duplicate_selection(state, "b")


class TestLayoutResolver:
    def test_tracks_state_between_calls(self, rules):
        resolver = LayoutResolver()
        rules = with_default(rules, LayoutKind.PREVIOUS)

        assert resolver.resolve("a", [], rules, observed=LayoutKind.EDITOR) == LayoutKind.NONE
        assert resolver.state.last_document_id == "a"
        assert resolver.is_duplicate("a")

        assert resolver.resolve("b", ["Layout:Split"], rules, observed=LayoutKind.VIEWER) == LayoutKind.SPLIT
        assert resolver.state.last_layout_kind == LayoutKind.VIEWER
        assert resolver.state.last_document_tags == {"layout:split"}

        # b was tagged, so the split view seen now is not remembered
        assert resolver.resolve("c", [], rules, observed=LayoutKind.SPLIT) == LayoutKind.VIEWER

    def test_shares_given_state(self):
        state = ResolutionState()
        resolver = LayoutResolver(state)
        resolver.resolve("a", [], TagRuleSet())
        assert state.last_document_id == "a"

    def test_restore_rolls_back_a_resolution(self, rules):
        state = ResolutionState()
        resolver = LayoutResolver(state)
        rules = with_default(rules, LayoutKind.PREVIOUS)
        resolver.resolve("a", [], rules)

        saved = resolver.snapshot()
        resolver.resolve("b", [], rules, observed=LayoutKind.VIEWER)
        assert state.last_layout_kind == LayoutKind.VIEWER

        resolver.restore(saved)

        assert resolver.state is state
        assert state.last_document_id == "a"
        assert state.last_layout_kind == LayoutKind.NONE
        assert not resolver.is_duplicate("b")
