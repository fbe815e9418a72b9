"""Protocol the browser controller uses to drive the rendering layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from kvx.domains.browser.state.modes import FocusTarget


@dataclass(frozen=True)
class ListOption:
    """One row in the left-hand list."""

    name: str
    description: str
    value: Any


class BrowserView(Protocol):
    def set_list_title(self, title: str) -> None: ...

    def set_list_options(self, options: list[ListOption]) -> None: ...

    def set_selected_index(self, index: int) -> None: ...

    def set_filter_text(self, text: str) -> None:
        """Replace the filter input text without emitting a change event."""
        ...

    def set_detail(self, text: str, *, title: str | None = None, styled: bool = False) -> None: ...

    def show_prompt(self, title: str, value: str = "") -> None: ...

    def hide_prompt(self) -> None: ...

    def focus_widget(self, target: FocusTarget) -> None: ...

    def notify_user(self, message: str, *, severity: str = "information") -> None: ...

    def copy_to_clipboard_text(self, text: str) -> bool: ...

    def exit_app(self, code: int = 0) -> None: ...
