"""
Core of the partman electronics part manager.

partman keeps the client-side configuration of a part and BOM inventory
client. Keybindings, the storage grid size and the server to talk to are
written in a small line-oriented configuration language:

    Bind ctrl+q Quit
    Grid 8 12 3
    SetServer Development

The code is organised into several modules:

* ``lang`` – the lexer, statement assembler and command dispatcher for
  the configuration language.
* ``settings`` – the runtime ``Config`` the language compiles into, the
  keybinding table and the single-assignment ``ConfigStore``.
* ``app`` – application messages and the key dispatcher the UI event loop
  uses to turn keyboard events into actions.
* ``cli`` – a command line interface to check and inspect configuration
  files.
"""

from pathlib import Path
from importlib import metadata as _metadata
from typing import Optional, Union

from .errors import ConfigError
from .settings import Config, ConfigStore

try:  # pragma: no cover - metadata fallback for source trees
    __version__ = _metadata.version("partman")
except _metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"


def load_config(source: Union[str, bytes], path: Optional[str] = None) -> Config:
    """Parse configuration text into a :class:`Config`."""
    return Config.from_str(source, path=path)


def load_config_file(path: Union[str, Path]) -> Config:
    """Read and parse a configuration file."""
    return Config.from_file(path)


__all__ = ["Config", "ConfigError", "ConfigStore", "load_config", "load_config_file", "__version__"]
