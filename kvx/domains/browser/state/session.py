"""Application-state aggregate owned by the browser controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from kvx.core.input_context import InputContext
from kvx.domains.browser.state.modes import NO_ACTION, ActionMode, FocusTarget, ViewState
from kvx.domains.vaults.domain.models import SecretRef, VaultRef


@dataclass
class BrowserSession:
    """Everything the browser knows about what is on screen."""

    view: ViewState = ViewState.SELECT_VAULT
    focus: FocusTarget = FocusTarget.LIST
    detail_shown: bool = False
    prompt_visible: bool = False
    # Where focus goes when the prompt closes.
    prompt_return_focus: FocusTarget = FocusTarget.LIST
    filter_text: str = ""
    all_vaults: list[VaultRef] = field(default_factory=list)
    filtered_vaults: list[VaultRef] = field(default_factory=list)
    current_vault: VaultRef | None = None
    all_secrets: list[SecretRef] = field(default_factory=list)
    filtered_secrets: list[SecretRef] = field(default_factory=list)
    selected_index: int = 0
    mode: ActionMode = NO_ACTION
    # Bumped on every vault entry/exit; async results tagged with an older
    # epoch are discarded.
    vault_epoch: int = 0

    @property
    def lists_vaults(self) -> bool:
        return self.view in (ViewState.SELECT_VAULT, ViewState.MOVE_SELECT_TARGET)

    @property
    def selected_vault(self) -> VaultRef | None:
        if not self.lists_vaults:
            return None
        return _at(self.filtered_vaults, self.selected_index)

    @property
    def selected_secret(self) -> SecretRef | None:
        if self.view != ViewState.LIST_SECRETS:
            return None
        return _at(self.filtered_secrets, self.selected_index)

    def to_input_context(self) -> InputContext:
        return InputContext(
            view=self.view.value,
            focus=self.focus.value,
            detail_shown=self.detail_shown,
            prompt_visible=self.prompt_visible,
            action_mode=self.mode.name,
            has_selected_secret=self.selected_secret is not None,
        )


def _at(items: list, index: int):
    if 0 <= index < len(items):
        return items[index]
    return None
