"""View, focus and action-mode types for the browser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from kvx.domains.vaults.domain.models import SecretRef, VaultRef


class ViewState(str, Enum):
    SELECT_VAULT = "select_vault"
    LIST_SECRETS = "list_secrets"
    MOVE_SELECT_TARGET = "move_select_target"


class FocusTarget(str, Enum):
    LIST = "list"
    FILTER = "filter"
    COMMAND = "command"


@dataclass(frozen=True)
class NoAction:
    name = "none"
    uses_prompt = False


@dataclass(frozen=True)
class EditValue:
    secret: SecretRef
    name = "edit_value"
    uses_prompt = True


@dataclass(frozen=True)
class Rename:
    secret: SecretRef
    name = "rename"
    uses_prompt = True


@dataclass(frozen=True)
class MoveTarget:
    """Choosing the destination vault; driven by the list, not the prompt."""

    secret: SecretRef
    name = "move_target"
    uses_prompt = False


@dataclass(frozen=True)
class MoveNewName:
    secret: SecretRef
    target: VaultRef
    name = "move_new_name"
    uses_prompt = True


@dataclass(frozen=True)
class CreateName:
    name = "create_name"
    uses_prompt = True


@dataclass(frozen=True)
class CreateValue:
    secret_name: str
    name = "create_value"
    uses_prompt = True


ActionMode = Union[NoAction, EditValue, Rename, MoveTarget, MoveNewName, CreateName, CreateValue]

NO_ACTION = NoAction()
