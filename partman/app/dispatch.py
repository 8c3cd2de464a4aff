"""Keyboard event dispatch for the UI event loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from partman.observability.logging import get_logger
from partman.settings.config import Grid
from partman.settings.store import ConfigStore

from .messages import AppMessage, to_app_message

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeyEvent:
    """A raw key press as delivered by the windowing toolkit."""

    key: str
    modifiers: FrozenSet[str] = field(default_factory=frozenset)


class KeyDispatcher:
    """Resolves key events against the configured keybinding table.

    Events without a binding return ``None`` so the caller can pass them on
    to the focused widget.
    """

    def __init__(self, store: ConfigStore):
        self.store = store

    def dispatch(self, event: KeyEvent) -> Optional[AppMessage]:
        action = self.store.get().keyboard.dispatch(event)
        if action is None:
            return None
        logger.debug("Key %s resolved to %s", event, action.value)
        return to_app_message(action)

    def grid(self) -> Grid:
        return self.store.get().grid


__all__ = ["KeyDispatcher", "KeyEvent"]
