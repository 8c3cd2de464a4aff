"""Runtime settings: the parsed configuration, its keybindings and its store."""

from .config import Config, Grid, ServerKind, default_config_text
from .keymap import BindableMessage, Chord, Keybinds, Modifier
from .store import ConfigStore

__all__ = [
    "BindableMessage",
    "Chord",
    "Config",
    "ConfigStore",
    "Grid",
    "Keybinds",
    "Modifier",
    "ServerKind",
    "default_config_text",
]
