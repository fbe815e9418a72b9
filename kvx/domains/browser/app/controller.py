"""Browser controller: wires the session, navigation, actions and commands."""

from __future__ import annotations

import logging

from kvx.core.key_router import resolve_action
from kvx.core.keymap import KeymapProvider
from kvx.domains.browser.app.actions import ActionModeMachine
from kvx.domains.browser.app.commands import CommandDispatcher
from kvx.domains.browser.app.events import (
    BrowserEvent,
    EventPump,
    FilterChanged,
    FilterSubmitted,
    FocusChanged,
    KeyPressed,
    ListActivated,
    ListHighlighted,
    PromptSubmitted,
    Startup,
)
from kvx.domains.browser.app.navigation import NavigationController
from kvx.domains.browser.state.modes import FocusTarget, MoveTarget, ViewState
from kvx.domains.browser.state.session import BrowserSession
from kvx.domains.vaults.app.value_cache import SecretValueCache
from kvx.domains.vaults.store.base import SecretStoreProtocol
from kvx.shared.ui.protocols import BrowserView

logger = logging.getLogger(__name__)


class BrowserController:
    def __init__(
        self,
        store: SecretStoreProtocol,
        view: BrowserView,
        keymap: KeymapProvider | None = None,
    ) -> None:
        self.store = store
        self.view = view
        self.keymap = keymap
        self.session = BrowserSession()
        self.cache = SecretValueCache(store)
        self.navigation = NavigationController(self.session, store, self.cache, view)
        self.actions = ActionModeMachine(self.session, store, self.cache, view, self.navigation)
        self.commands = CommandDispatcher(self, self.actions)
        self.pump = EventPump(self.handle, on_error=self._render_error)

    def post(self, event: BrowserEvent) -> None:
        self.pump.post(event)

    def resolve_key(self, key: str) -> str | None:
        return resolve_action(key, self.session.to_input_context(), self.keymap)

    async def handle(self, event: BrowserEvent) -> None:
        if isinstance(event, Startup):
            await self.navigation.discover_vaults()
        elif isinstance(event, KeyPressed):
            await self.handle_key(event.key)
        elif isinstance(event, ListHighlighted):
            self.navigation.highlight(event.index)
        elif isinstance(event, ListActivated):
            if self.session.prompt_visible:
                return
            self.session.selected_index = event.index
            await self.activate()
        elif isinstance(event, FilterChanged):
            if event.text != self.session.filter_text:
                self.navigation.apply_filter(event.text)
        elif isinstance(event, FilterSubmitted):
            if self.session.prompt_visible:
                return
            await self.activate()
        elif isinstance(event, PromptSubmitted):
            if self.session.prompt_visible:
                await self.commands.dispatch(event.text)
        elif isinstance(event, FocusChanged):
            self.navigation.sync_focus(event.target)

    def _render_error(self, event: BrowserEvent, exc: Exception) -> None:
        self.view.set_detail(f"Unexpected error: {exc}", title="Details")

    # -- keys ----------------------------------------------------------------

    async def handle_key(self, key: str) -> bool:
        action = self.resolve_key(key)
        if action is None:
            return False
        handler = getattr(self, f"action_{action}", None)
        if handler is None:
            logger.warning("No handler for action %s", action)
            return False
        logger.debug("Key %s -> %s", key, action)
        await handler()
        return True

    async def action_toggle_focus(self) -> None:
        self.navigation.toggle_focus()

    async def action_focus_filter(self) -> None:
        self.navigation.focus_filter()

    async def action_open_command(self) -> None:
        if not self.actions.open_command_prompt():
            self.view.notify_user("Finish or cancel the current action first.", severity="warning")

    async def action_escape(self) -> None:
        if self.session.prompt_visible:
            self.actions.cancel()
        elif self.session.focus == FocusTarget.FILTER:
            self.navigation.focus_list()
        else:
            await self.action_back()

    async def action_back(self) -> None:
        if self.actions.unwind():
            return
        if self.session.view == ViewState.MOVE_SELECT_TARGET:
            self.actions.abandon()
        self.navigation.back()

    async def action_copy_secret(self) -> None:
        secret = self.session.selected_secret
        if secret is not None:
            await self.actions.copy_secret(secret)

    async def action_edit_secret(self) -> None:
        secret = self.session.selected_secret
        if secret is not None:
            await self.actions.start_edit(secret)

    async def action_rename_secret(self) -> None:
        secret = self.session.selected_secret
        if secret is not None:
            self.actions.start_rename(secret)

    async def action_move_secret(self) -> None:
        secret = self.session.selected_secret
        if secret is not None:
            self.actions.start_move(secret)

    async def action_create_secret(self) -> None:
        self.actions.start_create()

    # -- activation ----------------------------------------------------------

    async def activate(self) -> None:
        session = self.session
        if session.view == ViewState.MOVE_SELECT_TARGET:
            vault = session.selected_vault
            if vault is not None and isinstance(session.mode, MoveTarget):
                self.actions.choose_move_target(vault)
            return
        await self.navigation.activate()
