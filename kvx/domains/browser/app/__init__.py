"""Browser application layer."""

from kvx.domains.browser.app.actions import ActionModeMachine
from kvx.domains.browser.app.controller import BrowserController
from kvx.domains.browser.app.commands import CommandDispatcher
from kvx.domains.browser.app.events import EventPump
from kvx.domains.browser.app.navigation import NavigationController

__all__ = [
    "ActionModeMachine",
    "BrowserController",
    "CommandDispatcher",
    "EventPump",
    "NavigationController",
]
