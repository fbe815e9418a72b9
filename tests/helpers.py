"""Shared test doubles for kvx tests."""

from __future__ import annotations

from kvx.domains.browser.app.controller import BrowserController
from kvx.domains.browser.app.events import KeyPressed, ListActivated, PromptSubmitted
from kvx.domains.browser.state.modes import FocusTarget
from kvx.domains.vaults.domain.models import VaultRef
from kvx.domains.vaults.store.memory import InMemorySecretStore
from kvx.shared.ui.protocols import ListOption


def make_vault(name: str, location: str | None = "westeurope") -> VaultRef:
    return VaultRef(
        name=name,
        uri=f"https://{name}.vault.azure.net/",
        id=f"/subscriptions/sub-1/resourceGroups/rg/providers/Microsoft.KeyVault/vaults/{name}",
        location=location,
    )


def make_store(**kwargs) -> InMemorySecretStore:
    return InMemorySecretStore(
        [make_vault("alpha-kv"), make_vault("beta-kv", "eastus")],
        {
            "alpha-kv": {"api-key": "k1", "db-password": "p1", "empty": ""},
            "beta-kv": {"token": "t1"},
        },
        **kwargs,
    )


class RecordingView:
    """BrowserView that records what the controller asked it to render."""

    def __init__(self) -> None:
        self.list_title = ""
        self.options: list[ListOption] = []
        self.selected_index: int | None = None
        self.filter_text = ""
        self.detail = ""
        self.detail_title = ""
        self.detail_styled = False
        self.detail_history: list[str] = []
        self.prompt_visible = False
        self.prompt_title = ""
        self.prompt_value = ""
        self.focused: FocusTarget | None = None
        self.notifications: list[tuple[str, str]] = []
        self.clipboard: str | None = None
        self.clipboard_works = True
        self.exit_code: int | None = None

    @property
    def option_names(self) -> list[str]:
        return [option.name for option in self.options]

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.notifications]

    def set_list_title(self, title: str) -> None:
        self.list_title = title

    def set_list_options(self, options: list[ListOption]) -> None:
        self.options = list(options)

    def set_selected_index(self, index: int) -> None:
        self.selected_index = index if 0 <= index < len(self.options) else None

    def set_filter_text(self, text: str) -> None:
        self.filter_text = text

    def set_detail(self, text: str, *, title: str | None = None, styled: bool = False) -> None:
        self.detail = text
        self.detail_styled = styled
        self.detail_history.append(text)
        if title is not None:
            self.detail_title = title

    def show_prompt(self, title: str, value: str = "") -> None:
        self.prompt_visible = True
        self.prompt_title = title
        self.prompt_value = value

    def hide_prompt(self) -> None:
        self.prompt_visible = False
        self.prompt_value = ""

    def focus_widget(self, target: FocusTarget) -> None:
        self.focused = target

    def notify_user(self, message: str, *, severity: str = "information") -> None:
        self.notifications.append((message, severity))

    def copy_to_clipboard_text(self, text: str) -> bool:
        if not self.clipboard_works:
            return False
        self.clipboard = text
        return True

    def exit_app(self, code: int = 0) -> None:
        self.exit_code = code


async def start_browser(store: InMemorySecretStore, view: RecordingView) -> BrowserController:
    controller = BrowserController(store, view)
    await controller.navigation.discover_vaults()
    return controller


def index_of(view: RecordingView, name: str) -> int:
    return view.option_names.index(name)


async def activate(controller: BrowserController, view: RecordingView, name: str) -> None:
    await controller.handle(ListActivated(index_of(view, name)))


async def press(controller: BrowserController, *keys: str) -> None:
    for key in keys:
        await controller.handle(KeyPressed(key))


async def submit(controller: BrowserController, text: str) -> None:
    await controller.handle(PromptSubmitted(text))
