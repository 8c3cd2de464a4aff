"""Configuration language: lexer, statement assembler and command dispatcher.

Public API:
    tokenize(source, path) -> list[Token]
    parse_statements(source, path) -> list[Statement]
    CommandDispatcher - applies statements to a Config
"""

from .commands import COMMAND_ARITY, Command, CommandDispatcher
from .lexer import Lexer, Token, TokenType, strip_carriage_returns, tokenize
from .statements import Statement, StatementAssembler, iter_statements, parse_statements

__all__ = [
    "COMMAND_ARITY",
    "Command",
    "CommandDispatcher",
    "Lexer",
    "Statement",
    "StatementAssembler",
    "Token",
    "TokenType",
    "iter_statements",
    "parse_statements",
    "strip_carriage_returns",
    "tokenize",
]
