"""Tests for key routing across binding contexts."""

from __future__ import annotations

from kvx.core.input_context import InputContext
from kvx.core.key_router import get_binding_contexts, resolve_action
from kvx.core.keymap import ActionKeyDef, KeymapProvider, format_key, get_keymap, normalize_key, set_keymap


def _ctx(**overrides) -> InputContext:
    values = dict(view="list_secrets", focus="list", detail_shown=True, has_selected_secret=True)
    values.update(overrides)
    return InputContext(**values)


class TestContexts:
    def test_detail_view_activates_all_contexts(self) -> None:
        assert get_binding_contexts(_ctx()) == ["global", "secret_detail", "secret_list", "navigation"]

    def test_prompt_hides_list_contexts(self) -> None:
        assert get_binding_contexts(_ctx(prompt_visible=True, focus="command")) == ["global"]

    def test_vault_view_only_navigates(self) -> None:
        assert get_binding_contexts(_ctx(view="select_vault", detail_shown=False)) == ["global", "navigation"]

    def test_active_mode_disables_secret_actions(self) -> None:
        ctx = _ctx(view="move_select_target", action_mode="move_target", detail_shown=False)
        assert get_binding_contexts(ctx) == ["global", "navigation"]


class TestResolveAction:
    def test_secret_actions_require_detail(self) -> None:
        assert resolve_action("e", _ctx()) == "edit_secret"
        assert resolve_action("c", _ctx()) == "copy_secret"
        assert resolve_action("e", _ctx(detail_shown=False)) is None

    def test_secret_actions_require_a_selection(self) -> None:
        assert resolve_action("r", _ctx(has_selected_secret=False)) is None

    def test_create_only_in_secret_list(self) -> None:
        assert resolve_action("n", _ctx(detail_shown=False)) == "create_secret"
        assert resolve_action("n", _ctx(view="select_vault", detail_shown=False)) is None

    def test_printable_globals_yield_to_text_inputs(self) -> None:
        assert resolve_action("slash", _ctx()) == "focus_filter"
        assert resolve_action("slash", _ctx(focus="filter")) is None
        assert resolve_action("colon", _ctx(focus="command", prompt_visible=True)) is None

    def test_tab_is_ignored_inside_prompt(self) -> None:
        assert resolve_action("tab", _ctx(focus="filter")) == "toggle_focus"
        assert resolve_action("tab", _ctx(focus="command", prompt_visible=True)) is None

    def test_escape_always_resolves(self) -> None:
        assert resolve_action("escape", _ctx(focus="command", prompt_visible=True)) == "escape"

    def test_back_requires_list_focus(self) -> None:
        assert resolve_action("b", _ctx(detail_shown=False)) == "back"
        assert resolve_action("b", _ctx(focus="filter")) is None

    def test_unbound_key(self) -> None:
        assert resolve_action("x", _ctx()) is None


class _CustomKeymap(KeymapProvider):
    def get_action_keys(self) -> list[ActionKeyDef]:
        return [
            ActionKeyDef("y", "copy_secret", "secret_detail", label="yank"),
            ActionKeyDef("ctrl+y", "copy_secret", "secret_detail", primary=False),
        ]


def test_custom_keymap_replaces_default() -> None:
    set_keymap(_CustomKeymap())
    assert resolve_action("y", _ctx()) == "copy_secret"
    assert resolve_action("c", _ctx()) is None
    assert resolve_action("ctrl+y", _ctx()) == "copy_secret"
    assert get_keymap().hints() == "y: yank"


def test_default_keymap_hints() -> None:
    hints = get_keymap().hints()
    assert "/: search" in hints
    assert "e: edit" in hints
    assert "Esc: back" in hints


def test_key_normalization_and_display() -> None:
    assert normalize_key("slash") == "slash"
    assert normalize_key("colon", ":") == "colon"
    assert normalize_key("/", "/") == "slash"
    assert normalize_key(":") == "colon"
    assert normalize_key("e", "e") == "e"
    assert format_key("ctrl+s") == "^s"
    assert format_key("colon") == ":"
