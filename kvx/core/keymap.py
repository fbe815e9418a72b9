"""Core keymap definitions (UI-agnostic)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

KEY_DISPLAY_OVERRIDES: dict[str, str] = {
    "slash": "/",
    "colon": ":",
    "escape": "Esc",
    "enter": "Enter",
    "tab": "Tab",
    "shift+tab": "S-Tab",
}

# Textual reports some printable keys by name; map the character form too.
CHARACTER_KEYS: dict[str, str] = {
    "/": "slash",
    ":": "colon",
}


def format_key(key: str) -> str:
    """Format a key name for display in UI hints."""
    if key in KEY_DISPLAY_OVERRIDES:
        return KEY_DISPLAY_OVERRIDES[key]
    if key.startswith("ctrl+"):
        return f"^{key.split('+', 1)[1]}"
    return key


def normalize_key(key: str, character: str | None = None) -> str:
    """Return the canonical key name for a key event."""
    if character and character in CHARACTER_KEYS:
        return CHARACTER_KEYS[character]
    return CHARACTER_KEYS.get(key, key)


@dataclass
class ActionKeyDef:
    """Definition of a regular action keybinding."""

    key: str  # The key to press (Textual key name)
    action: str  # The action name
    context: str  # Binding context that must be active
    guard: str | None = None  # Guard name (resolved by the key router)
    label: str | None = None  # Label for the hints bar
    primary: bool = True  # Primary key for display vs secondary aliases


class KeymapProvider(ABC):
    """Abstract base class for keymap providers."""

    @abstractmethod
    def get_action_keys(self) -> list[ActionKeyDef]:
        """Get all action key definitions, in priority order within a context."""
        raise NotImplementedError

    def bindings_for_key(self, key: str) -> list[ActionKeyDef]:
        """Get all bindings for a key."""
        return [ak for ak in self.get_action_keys() if ak.key == key]

    def hints(self) -> str:
        """One-line summary of labelled bindings."""
        parts: list[str] = []
        for ak in self.get_action_keys():
            if ak.label and ak.primary:
                parts.append(f"{format_key(ak.key)}: {ak.label}")
        return " | ".join(parts)


class DefaultKeymapProvider(KeymapProvider):
    """Default keymap with hardcoded bindings."""

    def __init__(self) -> None:
        self._action_keys_cache: list[ActionKeyDef] | None = None

    def get_action_keys(self) -> list[ActionKeyDef]:
        if self._action_keys_cache is None:
            self._action_keys_cache = self._build_action_keys()
        return list(self._action_keys_cache)

    def _build_action_keys(self) -> list[ActionKeyDef]:
        return [
            # Global
            ActionKeyDef("tab", "toggle_focus", "global", guard="outside_prompt", label="focus"),
            ActionKeyDef("slash", "focus_filter", "global", guard="list_focused", label="search"),
            ActionKeyDef("colon", "open_command", "global", guard="list_focused"),
            ActionKeyDef("escape", "escape", "global", label="back"),
            # Secret detail
            ActionKeyDef("c", "copy_secret", "secret_detail", label="copy"),
            ActionKeyDef("e", "edit_secret", "secret_detail", label="edit"),
            ActionKeyDef("r", "rename_secret", "secret_detail", label="rename"),
            ActionKeyDef("m", "move_secret", "secret_detail", label="move"),
            # Secret list
            ActionKeyDef("n", "create_secret", "secret_list", label="new"),
            # Navigation
            ActionKeyDef("b", "back", "navigation"),
        ]


# Global keymap instance
_keymap_provider: KeymapProvider | None = None


def get_keymap() -> KeymapProvider:
    """Get the current keymap provider."""
    global _keymap_provider
    if _keymap_provider is None:
        _keymap_provider = DefaultKeymapProvider()
    return _keymap_provider


def set_keymap(provider: KeymapProvider | None) -> None:
    """Replace the keymap provider (None restores the default)."""
    global _keymap_provider
    _keymap_provider = provider
