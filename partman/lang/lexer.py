"""Lexical analyzer (tokenizer) for partman configuration files.

Converts configuration text into a stream of tokens. The language has only
three token kinds, matched greedily:

1. one or more spaces -> ``ARG_DELIM``
2. a single newline -> ``STATEMENT_DELIM``
3. one or more characters that are neither space nor newline -> ``STRING``

Token values are the exact matched text, so joining the values of every token
reproduces the input.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Union

from partman.errors import ConfigLexError
from partman.observability.logging import get_logger

logger = get_logger(__name__)

SPACE = " "
NEWLINE = "\n"


class TokenType(Enum):
    """Token types for the configuration language."""

    ARG_DELIM = auto()
    STATEMENT_DELIM = auto()
    STRING = auto()


@dataclass(frozen=True)
class Token:
    """A single token with position information."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


def strip_carriage_returns(source: str) -> str:
    """Drop every ``\\r`` so CRLF input lexes like LF input."""
    return source.replace("\r", "")


def decode_source(source: Union[str, bytes], path: Optional[str] = None) -> str:
    """Return ``source`` as text, decoding bytes as UTF-8.

    Raises:
        ConfigLexError: If ``source`` is bytes that are not valid UTF-8.
    """
    if isinstance(source, str):
        return source
    try:
        return source.decode("utf-8")
    except UnicodeDecodeError as exc:
        prefix = source[: exc.start]
        line = prefix.count(b"\n") + 1
        column = exc.start - (prefix.rfind(b"\n") + 1) + 1
        raise ConfigLexError(
            message=f"Invalid UTF-8 byte 0x{source[exc.start]:02x} at offset {exc.start}",
            path=path,
            line=line,
            column=column,
        ) from exc


class Lexer:
    """Tokenizer for configuration text.

    Iterating a lexer yields tokens lazily. Every iteration starts again from
    the beginning of the source, so a lexer can be iterated any number of
    times with the same result.
    """

    def __init__(self, source: Union[str, bytes], path: Optional[str] = None):
        self.path = path
        self.source = decode_source(source, path)

    def __iter__(self) -> Iterator[Token]:
        source = self.source
        length = len(source)
        pos = 0
        line = 1
        column = 1

        while pos < length:
            char = source[pos]

            if char == SPACE:
                end = pos
                while end < length and source[end] == SPACE:
                    end += 1
                yield Token(TokenType.ARG_DELIM, source[pos:end], line, column)
                column += end - pos
                pos = end
                continue

            if char == NEWLINE:
                yield Token(TokenType.STATEMENT_DELIM, NEWLINE, line, column)
                line += 1
                column = 1
                pos += 1
                continue

            end = pos
            while end < length and source[end] not in (SPACE, NEWLINE):
                end += 1
            yield Token(TokenType.STRING, source[pos:end], line, column)
            column += end - pos
            pos = end

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        tokens = list(self)
        logger.debug("Lexed %d tokens from %s", len(tokens), self.path or "<string>")
        return tokens


def tokenize(source: Union[str, bytes], path: Optional[str] = None) -> List[Token]:
    """Tokenize configuration text."""
    lexer = Lexer(source, path)
    return lexer.tokenize()


__all__ = [
    "Token",
    "TokenType",
    "Lexer",
    "tokenize",
    "decode_source",
    "strip_carriage_returns",
]
