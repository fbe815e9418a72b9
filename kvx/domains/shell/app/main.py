"""Main Textual application for kvx."""

from __future__ import annotations

import sys
from typing import Any, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import DescendantFocus, Key
from textual.widgets import Input, OptionList, Static

from kvx.core.keymap import get_keymap, normalize_key
from kvx.domains.browser.app.controller import BrowserController
from kvx.domains.browser.app.events import (
    FilterChanged,
    FilterSubmitted,
    FocusChanged,
    KeyPressed,
    ListActivated,
    ListHighlighted,
    PromptSubmitted,
)
from kvx.domains.browser.state.modes import FocusTarget
from kvx.domains.shell.app.startup_flow import run_on_mount
from kvx.domains.vaults.store.base import SecretStoreProtocol
from kvx.shared.app.runtime import RuntimeConfig
from kvx.shared.ui.protocols import ListOption
from kvx.shared.ui.widgets import CommandPrompt, DetailView, EntryList, FilterInput

# Keys the app claims before any widget sees them.
ROUTED_PRIORITY_KEYS = ("escape", "tab")


class KvxApp(App):
    """Key Vault explorer."""

    TITLE = "kvx"
    CSS_PATH = "main.css"

    BINDINGS: ClassVar[list[Any]] = [
        *(Binding(key, f"route_key('{key}')", show=False, priority=True) for key in ROUTED_PRIORITY_KEYS),
        Binding("ctrl+c", "quit", show=False, priority=True),
    ]

    def __init__(
        self,
        *,
        store: SecretStoreProtocol,
        runtime: RuntimeConfig | None = None,
        discover_on_mount: bool = True,
    ):
        super().__init__()
        self.runtime = runtime or RuntimeConfig.from_env()
        self.store = store
        self.discover_on_mount = discover_on_mount
        self.controller = BrowserController(store, self)

    @property
    def filter_input(self) -> FilterInput:
        return self.query_one("#filter", FilterInput)

    @property
    def command_prompt(self) -> CommandPrompt:
        return self.query_one("#command", CommandPrompt)

    @property
    def entry_list(self) -> EntryList:
        return self.query_one("#entries", EntryList)

    @property
    def detail_view(self) -> DetailView:
        return self.query_one("#details", DetailView)

    def _hints_text(self) -> str:
        hints = get_keymap().hints()
        return f"Enter: select/open | {hints} | :q quit"

    def compose(self) -> ComposeResult:
        yield Static(self._hints_text(), id="hints", markup=False)
        yield CommandPrompt(id="command")
        with Horizontal(id="content"):
            with Vertical(id="sidebar"):
                yield FilterInput(id="filter")
                yield EntryList(id="entries")
            yield DetailView(id="details")

    def on_mount(self) -> None:
        run_on_mount(self)

    async def on_unmount(self) -> None:
        await self.store.close()

    # -- input routing -------------------------------------------------------

    def action_route_key(self, key: str) -> None:
        self.controller.post(KeyPressed(key))

    def on_key(self, event: Key) -> None:
        """Route key presses that reached the app through the key router."""
        key = normalize_key(event.key, event.character)
        if key in ROUTED_PRIORITY_KEYS:
            return
        if self.controller.resolve_key(key) is None:
            return
        event.prevent_default()
        event.stop()
        self.controller.post(KeyPressed(key))

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        # Drop highlights the cursor has already moved past.
        if event.option_index is not None and event.option_index == event.option_list.highlighted:
            self.controller.post(ListHighlighted(event.option_index))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.controller.post(ListActivated(event.option_index))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "filter":
            self.controller.post(FilterChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "filter":
            self.controller.post(FilterSubmitted())
        elif event.input.id == "command":
            self.controller.post(PromptSubmitted(event.value))

    def on_descendant_focus(self, event: DescendantFocus) -> None:
        widget_id = getattr(self.focused, "id", None)
        target = {
            "entries": FocusTarget.LIST,
            "filter": FocusTarget.FILTER,
            "command": FocusTarget.COMMAND,
        }.get(widget_id or "")
        if target is not None:
            self.controller.post(FocusChanged(target))

    # -- BrowserView ---------------------------------------------------------

    def set_list_title(self, title: str) -> None:
        self.entry_list.border_title = title

    def set_list_options(self, options: list[ListOption]) -> None:
        entries = self.entry_list
        with entries.prevent(OptionList.OptionHighlighted):
            entries.set_entries(options)

    def set_selected_index(self, index: int) -> None:
        entries = self.entry_list
        with entries.prevent(OptionList.OptionHighlighted):
            entries.highlighted = index if 0 <= index < entries.option_count else None

    def set_filter_text(self, text: str) -> None:
        filter_input = self.filter_input
        if filter_input.value == text:
            return
        with filter_input.prevent(Input.Changed):
            filter_input.value = text

    def set_detail(self, text: str, *, title: str | None = None, styled: bool = False) -> None:
        detail = self.detail_view
        detail.set_content(text, styled=styled)
        if title is not None:
            detail.border_title = title

    def show_prompt(self, title: str, value: str = "") -> None:
        self.command_prompt.open(title, value)

    def hide_prompt(self) -> None:
        self.command_prompt.close()

    def focus_widget(self, target: FocusTarget) -> None:
        widget = {
            FocusTarget.LIST: self.entry_list,
            FocusTarget.FILTER: self.filter_input,
            FocusTarget.COMMAND: self.command_prompt,
        }[target]
        widget.focus()

    def notify_user(self, message: str, *, severity: str = "information") -> None:
        self.notify(message, severity=severity)  # type: ignore[arg-type]

    def copy_to_clipboard_text(self, text: str) -> bool:
        """Copy text to the clipboard. Returns False if no method worked."""

        if sys.platform == "darwin":
            # Prefer pyperclip on macOS; Textual's copy_to_clipboard can no-op.
            try:
                import pyperclip  # type: ignore

                pyperclip.copy(text)
                return True
            except Exception:
                pass

        # Prefer Textual's clipboard support (OSC52 where available).
        try:
            self.copy_to_clipboard(text)
            return True
        except Exception:
            pass

        # Fallback to system clipboard via pyperclip (requires platform support).
        try:
            import pyperclip  # type: ignore

            pyperclip.copy(text)
            return True
        except Exception:
            return False

    def exit_app(self, code: int = 0) -> None:
        self.exit(return_code=code)
