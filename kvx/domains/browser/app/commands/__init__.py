"""Command handlers for the browser prompt."""

from __future__ import annotations

from .router import dispatch_command, register_command_handler
from . import quit as _quit
from .dispatcher import CommandDispatcher

__all__ = ["CommandDispatcher", "dispatch_command", "register_command_handler"]
