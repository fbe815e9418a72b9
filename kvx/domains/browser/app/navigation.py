"""View-state machine and focus arbitration for the browser."""

from __future__ import annotations

import logging

from kvx.core.filtering import filter_items
from kvx.domains.browser.state.modes import FocusTarget, ViewState
from kvx.domains.browser.state.session import BrowserSession
from kvx.domains.vaults.app.formatting import (
    SECRETS_HINT,
    VAULTS_HINT,
    render_secret_detail,
    render_secret_preview,
    secret_description,
    vault_description,
)
from kvx.domains.vaults.app.value_cache import SecretValueCache
from kvx.domains.vaults.domain.models import SecretRef, VaultRef
from kvx.domains.vaults.store.base import SecretStoreError, SecretStoreProtocol
from kvx.shared.ui.protocols import BrowserView, ListOption

logger = logging.getLogger(__name__)

DETAILS_TITLE = "Details"


class NavigationController:
    """Owns view transitions (vaults -> secrets -> detail -> move target)."""

    def __init__(
        self,
        session: BrowserSession,
        store: SecretStoreProtocol,
        cache: SecretValueCache,
        view: BrowserView,
    ) -> None:
        self.session = session
        self.store = store
        self.cache = cache
        self.view = view

    # -- rendering -----------------------------------------------------------

    def list_title(self) -> str:
        if self.session.view == ViewState.MOVE_SELECT_TARGET:
            return "Target Vault"
        if self.session.view == ViewState.LIST_SECRETS and self.session.current_vault:
            return f"Secrets • {self.session.current_vault.name}"
        return "Vaults"

    def render_list(self) -> None:
        """Repopulate the list from the active projection and select the first row."""
        session = self.session
        if session.lists_vaults:
            options = [ListOption(v.name, vault_description(v), v) for v in session.filtered_vaults]
        else:
            options = [ListOption(s.name, secret_description(s), s) for s in session.filtered_secrets]
        self.view.set_list_title(self.list_title())
        self.view.set_list_options(options)
        session.selected_index = 0
        self.view.set_selected_index(0)

    def show_status(self, text: str) -> None:
        self.view.set_detail(text)

    def _reset_filter(self) -> None:
        session = self.session
        session.filter_text = ""
        self.view.set_filter_text("")
        session.filtered_vaults = list(session.all_vaults)
        session.filtered_secrets = list(session.all_secrets)

    # -- focus ---------------------------------------------------------------

    def focus_list(self) -> None:
        self.session.focus = FocusTarget.LIST
        self.view.focus_widget(FocusTarget.LIST)

    def focus_filter(self) -> None:
        self.session.focus = FocusTarget.FILTER
        self.view.focus_widget(FocusTarget.FILTER)

    def toggle_focus(self) -> None:
        if self.session.focus == FocusTarget.FILTER:
            self.focus_list()
        else:
            self.focus_filter()

    def sync_focus(self, target: FocusTarget) -> None:
        """Record focus moved by the user (mouse clicks)."""
        if target == FocusTarget.COMMAND and not self.session.prompt_visible:
            return
        self.session.focus = target

    # -- filtering -----------------------------------------------------------

    def apply_filter(self, text: str) -> None:
        session = self.session
        detailed = session.selected_secret if session.detail_shown else None
        session.filter_text = text
        if session.lists_vaults:
            session.filtered_vaults = filter_items(session.all_vaults, text)
        else:
            session.filtered_secrets = filter_items(session.all_secrets, text)
        self.render_list()

        if session.view == ViewState.LIST_SECRETS and detailed is not None:
            selected = session.selected_secret
            if selected is None or selected.name != detailed.name:
                self._show_preview(selected)

    # -- selection -----------------------------------------------------------

    def highlight(self, index: int) -> None:
        """The list cursor moved to ``index``."""
        session = self.session
        if index == session.selected_index:
            return
        session.selected_index = index
        if session.view == ViewState.LIST_SECRETS:
            self._show_preview(session.selected_secret)

    def _show_preview(self, secret: SecretRef | None) -> None:
        self.session.detail_shown = False
        if secret is None:
            self.view.set_detail(SECRETS_HINT, title=DETAILS_TITLE)
            return
        self.view.set_detail(render_secret_preview(secret), title=DETAILS_TITLE, styled=True)

    async def activate(self) -> None:
        """Open the selected vault or secret."""
        session = self.session
        if session.view == ViewState.SELECT_VAULT:
            vault = session.selected_vault
            if vault is not None:
                await self.enter_vault(vault)
        elif session.view == ViewState.LIST_SECRETS:
            secret = session.selected_secret
            if secret is not None:
                await self.open_secret(secret)
        self.focus_list()

    def select_secret_named(self, name: str) -> SecretRef | None:
        for index, secret in enumerate(self.session.filtered_secrets):
            if secret.name == name:
                self.session.selected_index = index
                self.view.set_selected_index(index)
                return secret
        return None

    # -- remote loads --------------------------------------------------------

    async def discover_vaults(self) -> None:
        session = self.session
        self.view.set_list_title("Vaults")
        self.show_status("Loading Key Vaults from Azure CLI across all subscriptions...")
        try:
            vaults = await self.store.list_vaults()
        except SecretStoreError as exc:
            logger.warning("Vault discovery failed: %s", exc)
            session.all_vaults = []
            session.filtered_vaults = []
            self.render_list()
            self.view.set_detail(f"Failed to load Key Vaults.\n{exc}", title=DETAILS_TITLE)
            return
        session.all_vaults = vaults
        if session.view == ViewState.SELECT_VAULT:
            session.filtered_vaults = filter_items(vaults, session.filter_text)
            self.render_list()
        self.view.set_detail(VAULTS_HINT, title=DETAILS_TITLE)

    async def enter_vault(self, vault: VaultRef, *, message: str | None = None) -> bool:
        """Load ``vault`` and show its secrets. Returns False if nothing was applied."""
        session = self.session
        session.vault_epoch += 1
        epoch = session.vault_epoch
        session.current_vault = vault
        self.cache.bind(vault)
        session.view = ViewState.LIST_SECRETS
        session.detail_shown = False
        session.all_secrets = []
        self._reset_filter()
        self.render_list()
        self.focus_list()
        prefix = f"{message}\n\n" if message else ""
        self.view.set_detail(f"{prefix}Loading secrets...", title=DETAILS_TITLE)

        try:
            secrets = await self.store.list_secret_metadata(vault)
        except SecretStoreError as exc:
            if epoch != session.vault_epoch:
                return False
            logger.warning("Listing secrets in %s failed: %s", vault.name, exc)
            self.view.set_detail(f"{prefix}Failed to load secrets.\n{exc}", title=DETAILS_TITLE)
            return False
        if epoch != session.vault_epoch:
            logger.debug("Discarding stale secret listing for %s", vault.name)
            return False

        session.all_secrets = sorted(secrets, key=lambda s: (s.name.casefold(), s.name))
        session.filtered_secrets = list(session.all_secrets)
        self.render_list()
        self.view.set_detail(f"{prefix}{SECRETS_HINT}", title=DETAILS_TITLE)
        return True

    async def fetch_value(self, name: str) -> str | None:
        """Value via the cache, with an interim status when a fetch is needed."""
        if name not in self.cache:
            self.show_status("Fetching secret value...")
        return await self.cache.get(name)

    async def open_secret(self, secret: SecretRef) -> None:
        session = self.session
        epoch = session.vault_epoch
        value = await self.fetch_value(secret.name)
        selected = session.selected_secret
        if (
            epoch != session.vault_epoch
            or session.view != ViewState.LIST_SECRETS
            or selected is None
            or selected.name != secret.name
        ):
            logger.debug("Discarding stale detail for %s", secret.name)
            return
        self.view.set_detail(
            render_secret_detail(secret, value),
            title=f"{DETAILS_TITLE} • {secret.name}",
            styled=True,
        )
        session.detail_shown = True

    # -- move target listing -------------------------------------------------

    def show_move_targets(self, secret: SecretRef) -> None:
        session = self.session
        session.view = ViewState.MOVE_SELECT_TARGET
        session.detail_shown = False
        self._reset_filter()
        self.render_list()
        self.focus_list()
        self.view.set_detail(f"Select target vault for {secret.name}", title=f"Move • {secret.name}")

    def leave_move_targets(self) -> None:
        session = self.session
        session.view = ViewState.LIST_SECRETS
        session.detail_shown = False
        self._reset_filter()
        self.render_list()
        self.focus_list()
        self.view.set_detail(SECRETS_HINT, title=DETAILS_TITLE)

    # -- back ----------------------------------------------------------------

    def back(self) -> bool:
        """Go up one layer. Returns False when already at the top."""
        session = self.session
        if session.view == ViewState.LIST_SECRETS and session.detail_shown:
            session.detail_shown = False
            self.view.set_detail(SECRETS_HINT, title=DETAILS_TITLE)
            return True
        if session.view == ViewState.MOVE_SELECT_TARGET:
            self.leave_move_targets()
            return True
        if session.view == ViewState.LIST_SECRETS:
            self.exit_vault()
            return True
        return False

    def exit_vault(self) -> None:
        session = self.session
        session.vault_epoch += 1
        session.view = ViewState.SELECT_VAULT
        session.detail_shown = False
        session.current_vault = None
        session.all_secrets = []
        self.cache.bind(None)
        self._reset_filter()
        self.render_list()
        self.focus_list()
        self.view.set_detail(VAULTS_HINT, title=DETAILS_TITLE)
