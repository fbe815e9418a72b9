"""Quit command handler."""

from __future__ import annotations

from typing import Any

from .router import register_command_handler


def _handle_quit_command(app: Any, cmd: str, args: list[str]) -> bool:
    if cmd not in {"q", "quit"}:
        return False
    app.view.exit_app(0)
    return True


register_command_handler(_handle_quit_command)
