"""Resolve key presses to browser actions.

Binding contexts are evaluated in a fixed priority order; the first context
that is active and has an allowed binding for the key wins.
"""

from __future__ import annotations

from collections.abc import Callable

from kvx.core.input_context import InputContext
from kvx.core.keymap import KeymapProvider, get_keymap

CONTEXT_PRIORITY: tuple[str, ...] = ("global", "secret_detail", "secret_list", "navigation")


def _list_ready(ctx: InputContext) -> bool:
    return ctx.focus == "list" and not ctx.prompt_visible


def _secret_list_active(ctx: InputContext) -> bool:
    return _list_ready(ctx) and ctx.view == "list_secrets" and ctx.action_mode == "none"


CONTEXT_CHECKS: dict[str, Callable[[InputContext], bool]] = {
    "global": lambda ctx: True,
    "secret_detail": lambda ctx: (
        _secret_list_active(ctx) and ctx.detail_shown and ctx.has_selected_secret
    ),
    "secret_list": _secret_list_active,
    "navigation": _list_ready,
}

GUARDS: dict[str, Callable[[InputContext], bool]] = {
    # Text inputs own printable keys, so "/" and ":" only act from the list.
    "list_focused": lambda ctx: ctx.focus == "list",
    "outside_prompt": lambda ctx: ctx.focus != "command",
}


def get_binding_contexts(ctx: InputContext) -> list[str]:
    """Active binding contexts, highest priority first."""
    return [name for name in CONTEXT_PRIORITY if CONTEXT_CHECKS[name](ctx)]


def resolve_action(key: str, ctx: InputContext, keymap: KeymapProvider | None = None) -> str | None:
    """Return the action bound to ``key`` in the current context, if any."""
    bindings = (keymap or get_keymap()).bindings_for_key(key)
    if not bindings:
        return None
    for context in get_binding_contexts(ctx):
        for binding in bindings:
            if binding.context != context:
                continue
            guard = GUARDS.get(binding.guard) if binding.guard else None
            if guard is not None and not guard(ctx):
                continue
            return binding.action
    return None
