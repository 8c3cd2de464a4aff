"""Unified error model for configuration loading.

Every failure raised while lexing, assembling or applying a configuration
text is a :class:`ConfigError`. Errors carry:

- The file path (when known), line and column
- The offending statement text
- Expected vs. found information where it applies
- An error code for programmatic handling
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ConfigError(Exception):
    """Base class for all configuration errors."""

    message: str
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    statement: Optional[str] = None
    code: str = "CONFIG_ERROR"

    def __str__(self) -> str:
        """Format error message with location."""
        parts = []

        if self.path:
            parts.append(f"File: {self.path}")

        if self.line is not None:
            if self.column is not None:
                parts.append(f"Line {self.line}:{self.column}")
            else:
                parts.append(f"Line {self.line}")

        parts.append(f"[{self.code}] {self.message}")

        base = " | ".join(parts)
        details = self.details()
        if details:
            return base + "\n  " + "\n  ".join(details)
        return base

    def details(self) -> List[str]:
        """Extra indented lines rendered below the headline."""
        if self.statement is not None:
            return [f"Statement: {self.statement}"]
        return []

    def locate(
        self,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        statement: Optional[str] = None,
    ) -> "ConfigError":
        """Fill in location fields that are still unknown and return self."""
        if self.path is None:
            self.path = path
        if self.line is None:
            self.line = line
        if self.column is None:
            self.column = column
        if self.statement is None:
            self.statement = statement
        return self


@dataclass
class ConfigLexError(ConfigError):
    """Input could not be split into tokens."""

    code: str = "LEX_ERROR"


@dataclass
class ConfigSyntaxError(ConfigError):
    """Tokens do not form a valid statement."""

    code: str = "SYNTAX_ERROR"


@dataclass
class MalformedStatementError(ConfigSyntaxError):
    """A statement has arguments but no command name."""

    code: str = "MALFORMED_STATEMENT"


@dataclass
class UnknownCommandError(ConfigError):
    """The first word of a statement names no known command."""

    name: str = ""
    choices: List[str] = field(default_factory=list)
    code: str = "UNKNOWN_COMMAND"

    def details(self) -> List[str]:
        lines = super().details()
        if self.choices:
            lines.append(f"Expected one of: {', '.join(self.choices)}")
        lines.append(f"Found: {self.name}")
        return lines


@dataclass
class ArityMismatchError(ConfigError):
    """A known command received the wrong number of arguments."""

    command: str = ""
    expected: int = 0
    got: int = 0
    code: str = "ARITY_MISMATCH"

    def details(self) -> List[str]:
        lines = super().details()
        noun = "argument" if self.expected == 1 else "arguments"
        lines.append(f"Expected: {self.expected} {noun} for {self.command}")
        lines.append(f"Found: {self.got}")
        return lines


@dataclass
class UnknownSymbolError(ConfigError):
    """An enum-valued argument matched none of the known symbols."""

    name: str = ""
    choices: List[str] = field(default_factory=list)
    code: str = "UNKNOWN_SYMBOL"

    def details(self) -> List[str]:
        lines = super().details()
        if self.choices:
            lines.append(f"Expected one of: {', '.join(self.choices)}")
        lines.append(f"Found: {self.name}")
        return lines


@dataclass
class UnknownActionNameError(UnknownSymbolError):
    """A ``Bind`` action is not a bindable message."""

    code: str = "UNKNOWN_ACTION"


@dataclass
class UnknownServerKindError(UnknownSymbolError):
    """A ``SetServer`` argument is not a server kind."""

    code: str = "UNKNOWN_SERVER_KIND"


@dataclass
class InvalidIntegerError(ConfigError):
    """A ``Grid`` argument is not a usable integer."""

    text: str = ""
    code: str = "INVALID_INTEGER"

    def details(self) -> List[str]:
        lines = super().details()
        lines.append(f"Found: {self.text!r}")
        return lines


@dataclass
class InvalidChordSyntaxError(ConfigError):
    """A ``Bind`` chord was rejected by the keybinding table."""

    text: str = ""
    code: str = "INVALID_CHORD"

    def details(self) -> List[str]:
        lines = super().details()
        lines.append(f"Found: {self.text!r}")
        return lines


@dataclass
class ConfigStateError(ConfigError):
    """The configuration store was used out of its startup lifecycle."""

    code: str = "CONFIG_STATE"


__all__ = [
    "ConfigError",
    "ConfigLexError",
    "ConfigSyntaxError",
    "MalformedStatementError",
    "UnknownCommandError",
    "ArityMismatchError",
    "UnknownSymbolError",
    "UnknownActionNameError",
    "UnknownServerKindError",
    "InvalidIntegerError",
    "InvalidChordSyntaxError",
    "ConfigStateError",
]
