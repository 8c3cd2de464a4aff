"""Application messages produced by keyboard shortcuts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from partman.settings.keymap import BindableMessage


class Modal(Enum):
    LOGIN = "login"
    SELECT_PROFILE = "select_profile"


class AppTab(Enum):
    SEARCH = "search"
    BOM_IMPORT = "bom_import"


@dataclass(frozen=True)
class Quit:
    """Close the application."""


@dataclass(frozen=True)
class OpenModal:
    modal: Modal


@dataclass(frozen=True)
class SwitchTab:
    tab: AppTab


AppMessage = Union[Quit, OpenModal, SwitchTab]

_MESSAGES = {
    BindableMessage.QUIT: Quit(),
    BindableMessage.LOGIN: OpenModal(Modal.LOGIN),
    BindableMessage.SELECT_PROFILE: OpenModal(Modal.SELECT_PROFILE),
    BindableMessage.IMPORT_TAB: SwitchTab(AppTab.BOM_IMPORT),
    BindableMessage.SEARCH_TAB: SwitchTab(AppTab.SEARCH),
}


def to_app_message(action: BindableMessage) -> AppMessage:
    """Translate a bound action into the message the application handles."""
    return _MESSAGES[action]


__all__ = ["AppMessage", "AppTab", "Modal", "OpenModal", "Quit", "SwitchTab", "to_app_message"]
