"""Route prompt submissions to the active action or a typed command."""

from __future__ import annotations

import logging
from typing import Any

from kvx.domains.browser.app.actions import ActionModeMachine
from kvx.domains.browser.state.modes import NoAction

from .router import dispatch_command

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """While a mode is active the prompt belongs to it; otherwise text is a command."""

    def __init__(self, host: Any, actions: ActionModeMachine) -> None:
        self.host = host
        self.actions = actions

    async def dispatch(self, text: str) -> None:
        if not isinstance(self.actions.mode, NoAction):
            await self.actions.submit(text)
            return

        self.actions.close_prompt()
        parts = text.strip().split()
        if not parts:
            return
        cmd, args = parts[0].lower(), parts[1:]
        if not dispatch_command(self.host, cmd, args):
            logger.debug("Ignoring unknown command %r", cmd)
