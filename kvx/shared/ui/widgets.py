"""Widgets for the kvx browser."""

from __future__ import annotations

import json
import re
from typing import Any

from rich.console import Group, RenderableType
from rich.syntax import Syntax
from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from kvx.shared.ui.protocols import ListOption

_LABEL_RE = re.compile(r"^([A-Z][A-Za-z ]*):(?=\s|$)")


def styled_detail(text: str) -> Text:
    """Bold the ``Label:`` prefixes of the metadata block and the value header."""
    result = Text()
    in_header = True
    lines = text.split("\n")
    for index, line in enumerate(lines):
        match = _LABEL_RE.match(line) if in_header or line == "Value:" else None
        if match:
            result.append(match.group(0), style="bold")
            result.append(line[match.end():])
        else:
            result.append(line)
        if line in ("", "Value:"):
            in_header = False
        if index < len(lines) - 1:
            result.append("\n")
    return result


def _is_json(value: str) -> bool:
    if not value.lstrip().startswith(("{", "[")):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def detail_renderable(text: str, *, styled: bool = False) -> RenderableType:
    """Renderable for the detail pane. A JSON value is syntax highlighted."""
    if not styled:
        return Text(text)
    header, separator, value = text.partition("\nValue:\n")
    if separator and _is_json(value):
        return Group(
            styled_detail(f"{header}\nValue:"),
            Syntax(value, "json", theme="ansi_dark", word_wrap=True),
        )
    return styled_detail(text)


class FilterInput(Input):
    """Filter box above the list."""

    DEFAULT_CSS = """
    FilterInput {
        border: round $primary 50%;
        height: 3;
    }

    FilterInput:focus {
        border: round $primary;
    }
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("placeholder", "Type to filter...")
        super().__init__(*args, **kwargs)
        self.border_title = "Filter"


class CommandPrompt(Input):
    """Single shared text prompt for commands and action input."""

    DEFAULT_CSS = """
    CommandPrompt {
        display: none;
        border: round $warning;
        height: 3;
    }

    CommandPrompt.visible {
        display: block;
    }
    """

    def open(self, title: str, value: str = "") -> None:
        self.border_title = title
        self.value = value
        self.cursor_position = len(value)
        self.add_class("visible")

    def close(self) -> None:
        self.remove_class("visible")
        self.value = ""

    @property
    def is_open(self) -> bool:
        return self.has_class("visible")


class EntryList(OptionList):
    """Vault or secret list with a dimmed description under each name."""

    DEFAULT_CSS = """
    EntryList {
        height: 1fr;
        border: round $primary 50%;
    }

    EntryList:focus {
        border: round $primary;
    }
    """

    def set_entries(self, entries: list[ListOption]) -> None:
        self.clear_options()
        self.add_options([Option(self._render_entry(entry)) for entry in entries])

    @staticmethod
    def _render_entry(entry: ListOption) -> Text:
        text = Text(entry.name, style="bold")
        if entry.description:
            text.append("\n")
            text.append(entry.description, style="dim")
        return text


class DetailView(VerticalScroll):
    """Scrollable detail pane."""

    DEFAULT_CSS = """
    DetailView {
        height: 1fr;
        border: round $secondary 50%;
        padding: 0 1;
    }

    DetailView #detail-text {
        width: 1fr;
        height: auto;
    }
    """

    def compose(self) -> Any:
        yield Static("", id="detail-text", markup=False)

    @property
    def text_widget(self) -> Static:
        return self.query_one("#detail-text", Static)

    def set_content(self, text: str, *, styled: bool = False) -> None:
        self.text_widget.update(detail_renderable(text, styled=styled))
        self.scroll_home(animate=False)
