"""Command table and dispatcher for configuration statements.

Each command takes a fixed number of positional arguments. Adding a command
means adding a :class:`Command` member, its arity and a handler.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Dict, List, Optional

from partman.errors import (
    ArityMismatchError,
    ConfigError,
    InvalidIntegerError,
    UnknownCommandError,
)
from partman.observability.logging import get_logger
from partman.settings.config import Config, Grid, ServerKind
from partman.settings.keymap import BindableMessage

from .statements import Statement

logger = get_logger(__name__)

_DECIMAL = re.compile(r"[0-9]+")


class Command(Enum):
    """Statement verbs understood by the configuration language."""

    BIND = "Bind"
    GRID = "Grid"
    SET_SERVER = "SetServer"

    @property
    def arity(self) -> int:
        return COMMAND_ARITY[self]

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_name(cls, name: str) -> "Command":
        try:
            return cls(name)
        except ValueError:
            raise UnknownCommandError(
                message=f"Unknown command {name!r}",
                name=name,
                choices=cls.names(),
            ) from None


COMMAND_ARITY: Dict[Command, int] = {
    Command.BIND: 2,
    Command.GRID: 3,
    Command.SET_SERVER: 1,
}


def parse_dimension(text: str) -> int:
    """Parse a grid dimension: a plain decimal integer of at least 1."""
    if not _DECIMAL.fullmatch(text):
        raise InvalidIntegerError(message=f"{text!r} is not a non-negative integer", text=text)
    value = int(text)
    if value < 1:
        raise InvalidIntegerError(message=f"Grid dimension must be at least 1, got {text}", text=text)
    return value


class CommandDispatcher:
    """Validates statements and applies them to a :class:`Config`."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._handlers: Dict[Command, Callable[[List[str], Config], None]] = {
            Command.BIND: self._bind,
            Command.GRID: self._grid,
            Command.SET_SERVER: self._set_server,
        }

    def apply(self, statement: Statement, config: Config) -> Command:
        """Apply one statement to ``config``.

        Raises:
            ConfigError: Any subclass describing why the statement is invalid.
                The error is located at the statement's line.
        """
        try:
            command = Command.from_name(statement.command)
            if len(statement.args) != command.arity:
                raise ArityMismatchError(
                    message=f"{command.value} requires {command.arity} "
                    f"argument{'s' if command.arity != 1 else ''}, got {len(statement.args)}",
                    command=command.value,
                    expected=command.arity,
                    got=len(statement.args),
                )
            self._handlers[command](statement.args, config)
        except ConfigError as exc:
            raise exc.locate(path=self.path, line=statement.line, statement=str(statement))
        logger.debug("Applied %s at line %d", command.value, statement.line)
        return command

    def _bind(self, args: List[str], config: Config) -> None:
        chord, action = args
        config.keyboard.bind(chord, BindableMessage.from_name(action))

    def _grid(self, args: List[str], config: Config) -> None:
        rows, columns, zs = (parse_dimension(arg) for arg in args)
        config.grid = Grid(rows=rows, columns=columns, zs=zs)

    def _set_server(self, args: List[str], config: Config) -> None:
        config.server_kind = ServerKind.from_name(args[0])


__all__ = ["Command", "COMMAND_ARITY", "CommandDispatcher", "parse_dimension"]
