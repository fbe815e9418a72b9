"""UI-agnostic input context used for key routing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InputContext:
    """Snapshot of browser input state for key routing."""

    view: str  # "select_vault" | "list_secrets" | "move_select_target"
    focus: str  # "list" | "filter" | "command"
    detail_shown: bool = False
    prompt_visible: bool = False
    action_mode: str = "none"
    has_selected_secret: bool = False
