"""Registry of typed-command handlers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

CommandHandler = Callable[[Any, str, list[str]], bool]

_handlers: list[CommandHandler] = []


def register_command_handler(handler: CommandHandler) -> None:
    if handler not in _handlers:
        _handlers.append(handler)


def dispatch_command(app: Any, cmd: str, args: list[str]) -> bool:
    """Offer a command to each handler until one claims it."""
    for handler in _handlers:
        if handler(app, cmd, args):
            return True
    return False
