"""Multi-step secret mutations (edit, rename, move, create) and copy."""

from __future__ import annotations

import logging

from kvx.domains.browser.app.navigation import NavigationController
from kvx.domains.browser.state.modes import (
    NO_ACTION,
    ActionMode,
    CreateName,
    CreateValue,
    EditValue,
    FocusTarget,
    MoveNewName,
    MoveTarget,
    NoAction,
    Rename,
)
from kvx.domains.browser.state.session import BrowserSession
from kvx.domains.vaults.app.value_cache import SecretValueCache
from kvx.domains.vaults.domain.models import SecretRef, VaultRef, find_vault_by_name
from kvx.domains.vaults.store.base import SecretStoreError, SecretStoreProtocol
from kvx.shared.ui.protocols import BrowserView

logger = logging.getLogger(__name__)


class ActionModeMachine:
    """Drive the action mode through its prompts and perform the mutation.

    Terminal steps reset the mode and hide the prompt before touching the
    store, so a failing call never leaves the browser stuck mid-action.
    """

    def __init__(
        self,
        session: BrowserSession,
        store: SecretStoreProtocol,
        cache: SecretValueCache,
        view: BrowserView,
        navigation: NavigationController,
    ) -> None:
        self.session = session
        self.store = store
        self.cache = cache
        self.view = view
        self.navigation = navigation

    @property
    def mode(self) -> ActionMode:
        return self.session.mode

    def _set_mode(self, mode: ActionMode) -> None:
        if mode != self.session.mode:
            logger.debug("Action mode %s -> %s", self.session.mode.name, mode.name)
        self.session.mode = mode

    # -- prompt --------------------------------------------------------------

    def show_prompt(self, title: str, value: str = "") -> None:
        session = self.session
        if not session.prompt_visible and session.focus != FocusTarget.COMMAND:
            session.prompt_return_focus = session.focus
        session.prompt_visible = True
        session.focus = FocusTarget.COMMAND
        self.view.show_prompt(title, value)
        self.view.focus_widget(FocusTarget.COMMAND)

    def close_prompt(self) -> None:
        session = self.session
        if session.prompt_visible:
            session.prompt_visible = False
            self.view.hide_prompt()
        if session.prompt_return_focus == FocusTarget.FILTER:
            self.navigation.focus_filter()
        else:
            self.navigation.focus_list()
        session.prompt_return_focus = FocusTarget.LIST

    def open_command_prompt(self) -> bool:
        """Open the prompt for a typed command. Refused mid-action."""
        mode = self.mode
        if mode.uses_prompt:
            return False
        if isinstance(mode, MoveTarget):
            self.show_prompt(f"Move • target vault for {mode.secret.name}")
        else:
            self.show_prompt("Command")
        return True

    def _finish(self) -> None:
        self._set_mode(NO_ACTION)
        self.close_prompt()

    # -- entry points --------------------------------------------------------

    async def copy_secret(self, secret: SecretRef) -> None:
        value = await self.navigation.fetch_value(secret.name)
        if value is None:
            self.view.notify_user("Secret value unavailable; nothing copied.", severity="warning")
            return
        if self.view.copy_to_clipboard_text(value):
            self.view.notify_user("Secret copied to clipboard.")
        else:
            self.view.notify_user("Failed to copy to clipboard.", severity="error")

    async def start_edit(self, secret: SecretRef) -> None:
        value = await self.navigation.fetch_value(secret.name)
        if value is None:
            self.view.notify_user(f"Current value of {secret.name} is unavailable.", severity="warning")
        self._set_mode(EditValue(secret))
        self.show_prompt(f"Edit value • {secret.name}", value or "")

    def start_rename(self, secret: SecretRef) -> None:
        self._set_mode(Rename(secret))
        self.show_prompt(f"Rename • new name for {secret.name}")

    def start_move(self, secret: SecretRef) -> None:
        self._set_mode(MoveTarget(secret))
        self.navigation.show_move_targets(secret)

    def start_create(self) -> None:
        self._set_mode(CreateName())
        self.show_prompt("Create • secret name")

    def choose_move_target(self, vault: VaultRef) -> None:
        mode = self.mode
        if not isinstance(mode, MoveTarget):
            return
        self._set_mode(MoveNewName(mode.secret, vault))
        self.show_prompt(
            f"Move • new name for {mode.secret.name} in {vault.name}",
            mode.secret.name,
        )

    # -- unwinding -----------------------------------------------------------

    def unwind(self) -> bool:
        """Step back inside a multi-step action. Returns False if there is none."""
        mode = self.mode
        if not isinstance(mode, MoveNewName):
            return False
        self._set_mode(MoveTarget(mode.secret))
        self.close_prompt()
        self.navigation.show_move_targets(mode.secret)
        return True

    def abandon(self) -> None:
        """Drop the current action without touching the store."""
        self._set_mode(NO_ACTION)
        if self.session.prompt_visible:
            self.close_prompt()

    def cancel(self) -> None:
        """Escape pressed while the prompt is visible."""
        mode = self.mode
        if isinstance(mode, MoveNewName):
            self.unwind()
        elif isinstance(mode, MoveTarget):
            # Only the typed-target prompt closes; the vault list stays.
            self.close_prompt()
        else:
            self._finish()

    # -- submission ----------------------------------------------------------

    async def submit(self, text: str) -> None:
        mode = self.mode
        if isinstance(mode, EditValue):
            await self._submit_edit(mode, text)
        elif isinstance(mode, Rename):
            await self._submit_rename(mode, text)
        elif isinstance(mode, MoveTarget):
            self._submit_move_target(mode, text)
        elif isinstance(mode, MoveNewName):
            await self._submit_move(mode, text)
        elif isinstance(mode, CreateName):
            self._submit_create_name(text)
        elif isinstance(mode, CreateValue):
            await self._submit_create_value(mode, text)
        elif isinstance(mode, NoAction):
            self.close_prompt()

    async def _submit_edit(self, mode: EditValue, text: str) -> None:
        vault = self.session.current_vault
        self._finish()
        if vault is None:
            return
        self.navigation.show_status("Saving secret value...")
        try:
            await self.store.set_secret_value(vault, mode.secret.name, text)
        except SecretStoreError as exc:
            logger.warning("Update of %s failed: %s", mode.secret.name, exc)
            self.navigation.show_status(f"Update failed: {exc}")
            return
        self.cache.set(mode.secret.name, text)
        self.view.notify_user("Secret updated.")
        await self.navigation.open_secret(mode.secret)

    async def _submit_rename(self, mode: Rename, text: str) -> None:
        old_name = mode.secret.name
        new_name = text.strip()
        vault = self.session.current_vault
        self._finish()
        if vault is None or not new_name or new_name == old_name:
            return

        value = await self.navigation.fetch_value(old_name)
        if value is None:
            self.navigation.show_status(f"Rename failed: value of {old_name} is unavailable.")
            return
        self.navigation.show_status(f"Renaming {old_name} to {new_name}...")
        try:
            await self.store.set_secret_value(vault, new_name, value)
        except SecretStoreError as exc:
            logger.warning("Rename of %s failed: %s", old_name, exc)
            self.navigation.show_status(f"Rename failed: {exc}")
            return
        try:
            await self.store.delete_secret(vault, old_name)
        except SecretStoreError as exc:
            logger.warning("Renamed %s to %s but deleting the old name failed: %s", old_name, new_name, exc)

        self.cache.set(new_name, value)
        self.cache.discard(old_name)
        await self.navigation.enter_vault(vault, message=f"Renamed to {new_name}.")

    def _submit_move_target(self, mode: MoveTarget, text: str) -> None:
        vault = find_vault_by_name(self.session.all_vaults, text)
        if vault is None:
            self.close_prompt()
            self.navigation.show_status(f"Vault not found: {text.strip()}")
            return
        self.choose_move_target(vault)

    async def _submit_move(self, mode: MoveNewName, text: str) -> None:
        new_name = text.strip() or mode.secret.name
        source = self.session.current_vault
        self._finish()
        if source is None:
            return

        value = await self.navigation.fetch_value(mode.secret.name)
        if value is None:
            self.navigation.leave_move_targets()
            self.navigation.show_status(f"Move failed: value of {mode.secret.name} is unavailable.")
            return
        self.navigation.show_status(f"Copying {mode.secret.name} to {mode.target.name}...")
        try:
            await self.store.set_secret_value(mode.target, new_name, value)
        except SecretStoreError as exc:
            logger.warning("Move of %s to %s failed: %s", mode.secret.name, mode.target.name, exc)
            self.navigation.leave_move_targets()
            self.navigation.show_status(f"Move failed: {exc}")
            return

        if mode.target.id == source.id:
            self.cache.set(new_name, value)
        await self.navigation.enter_vault(
            source, message=f"Copied to vault {mode.target.name} as {new_name}."
        )

    def _submit_create_name(self, text: str) -> None:
        name = text.strip()
        if not name:
            self._finish()
            self.navigation.show_status("Name cannot be empty.")
            return
        self._set_mode(CreateValue(name))
        self.show_prompt(f"Create • value for {name}")

    async def _submit_create_value(self, mode: CreateValue, text: str) -> None:
        name = mode.secret_name
        vault = self.session.current_vault
        self._finish()
        if vault is None:
            return
        self.navigation.show_status(f"Creating {name}...")
        try:
            await self.store.set_secret_value(vault, name, text)
        except SecretStoreError as exc:
            logger.warning("Create of %s failed: %s", name, exc)
            self.navigation.show_status(f"Create failed: {exc}")
            return

        self.cache.set(name, text)
        if not await self.navigation.enter_vault(vault, message=f"Created {name}."):
            return
        secret = self.navigation.select_secret_named(name)
        if secret is not None:
            await self.navigation.open_secret(secret)
