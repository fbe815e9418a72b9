"""Browser state exports."""

from .modes import (
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
    ViewState,
)
from .session import BrowserSession

__all__ = [
    "NO_ACTION",
    "ActionMode",
    "BrowserSession",
    "CreateName",
    "CreateValue",
    "EditValue",
    "FocusTarget",
    "MoveNewName",
    "MoveTarget",
    "NoAction",
    "Rename",
    "ViewState",
]
