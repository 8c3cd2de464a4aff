"""Statement assembler for the configuration language.

Groups the token stream into statements: one command name followed by its
ordered arguments, terminated by a newline or the end of input.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Union

from partman.errors import MalformedStatementError
from partman.observability.logging import get_logger

from .lexer import Lexer, Token, TokenType, decode_source, strip_carriage_returns

logger = get_logger(__name__)


class ParserState(Enum):
    EXPECTING_COMMAND = auto()
    EXPECTING_ARGS = auto()


@dataclass
class Statement:
    """One configuration line: a command name and its arguments."""

    command: str
    args: List[str] = field(default_factory=list)
    line: int = 0
    text: str = ""

    def __str__(self) -> str:
        return self.text or " ".join([self.command, *self.args])


class StatementAssembler:
    """Turns tokens into :class:`Statement` objects.

    A statement that has a pending command at the end of input is still
    emitted, so files without a trailing newline load completely. Text that
    starts with spaces before the command name is rejected.
    """

    def __init__(self, source_lines: Optional[List[str]] = None, path: Optional[str] = None):
        self.source_lines = source_lines or []
        self.path = path

    def _line_text(self, line: int) -> str:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return ""

    def _emit(self, command: str, args: List[str], line: int) -> Statement:
        statement = Statement(command=command, args=list(args), line=line, text=self._line_text(line))
        logger.debug("Statement at line %d: %s %s", line, command, args)
        return statement

    def assemble(self, tokens: Iterable[Token]) -> Iterator[Statement]:
        state = ParserState.EXPECTING_COMMAND
        command: Optional[str] = None
        command_line = 0
        args: List[str] = []

        for token in tokens:
            if token.type is TokenType.STRING:
                if state is ParserState.EXPECTING_COMMAND:
                    command = token.value
                    command_line = token.line
                    state = ParserState.EXPECTING_ARGS
                elif command is None:
                    raise MalformedStatementError(
                        message=f"Statement starts with whitespace before {token.value!r}; "
                        "the command name must begin the line",
                        path=self.path,
                        line=token.line,
                        column=token.column,
                        statement=self._line_text(token.line),
                    )
                else:
                    args.append(token.value)
            elif token.type is TokenType.ARG_DELIM:
                state = ParserState.EXPECTING_ARGS
            elif token.type is TokenType.STATEMENT_DELIM:
                if command is not None:
                    yield self._emit(command, args, command_line)
                state = ParserState.EXPECTING_COMMAND
                command = None
                args = []

        if command is not None:
            yield self._emit(command, args, command_line)


def iter_statements(
    tokens: Iterable[Token],
    source_lines: Optional[List[str]] = None,
    path: Optional[str] = None,
) -> Iterator[Statement]:
    """Yield statements assembled from ``tokens``."""
    return StatementAssembler(source_lines, path).assemble(tokens)


def parse_statements(source: Union[str, bytes], path: Optional[str] = None) -> List[Statement]:
    """Lex and assemble ``source`` into a list of statements.

    Carriage returns are stripped before lexing.

    Raises:
        ConfigLexError: If ``source`` cannot be tokenized.
        MalformedStatementError: If a line starts with whitespace before a command.
    """
    text = strip_carriage_returns(decode_source(source, path))
    lexer = Lexer(text, path)
    return list(iter_statements(lexer, text.split("\n"), path))


__all__ = [
    "ParserState",
    "Statement",
    "StatementAssembler",
    "iter_statements",
    "parse_statements",
]
