"""Tests for the configuration lexer."""

import pytest

from partman.errors import ConfigLexError
from partman.lang.lexer import Lexer, TokenType, strip_carriage_returns, tokenize


def kinds(tokens):
    return [token.type for token in tokens]


class TestTokenKinds:
    """Each of the three token patterns."""

    def test_statement(self):
        tokens = tokenize("Bind ctrl+q Quit\n")
        assert kinds(tokens) == [
            TokenType.STRING,
            TokenType.ARG_DELIM,
            TokenType.STRING,
            TokenType.ARG_DELIM,
            TokenType.STRING,
            TokenType.STATEMENT_DELIM,
        ]
        assert [t.value for t in tokens if t.type is TokenType.STRING] == ["Bind", "ctrl+q", "Quit"]

    def test_space_runs_are_one_delimiter(self):
        tokens = tokenize("Grid    1 2")
        assert kinds(tokens)[1] is TokenType.ARG_DELIM
        assert tokens[1].value == "    "

    def test_each_newline_is_its_own_delimiter(self):
        tokens = tokenize("\n\n")
        assert kinds(tokens) == [TokenType.STATEMENT_DELIM, TokenType.STATEMENT_DELIM]

    def test_strings_are_verbatim(self):
        """Tabs, quotes and backslashes are ordinary string characters."""
        tokens = tokenize('a\\b\t"c"')
        assert len(tokens) == 1
        assert tokens[0].value == 'a\\b\t"c"'

    def test_empty_input(self):
        assert tokenize("") == []


class TestPositions:
    """Line and column tracking."""

    def test_line_and_column(self):
        tokens = tokenize("Bind  a Quit\nGrid 1 2 3")
        grid = [t for t in tokens if t.value == "Grid"][0]
        assert (grid.line, grid.column) == (2, 1)
        a = [t for t in tokens if t.value == "a"][0]
        assert (a.line, a.column) == (1, 7)


class TestRoundTrip:
    """Concatenating token values reproduces the input."""

    @pytest.mark.parametrize(
        "source",
        [
            "Bind ctrl+q Quit\nGrid 8 12 3\n",
            "  leading\n\ntrailing  ",
            "x",
            "a b\nc d e\n\n\nf",
        ],
    )
    def test_round_trip(self, source):
        assert "".join(t.value for t in tokenize(source)) == source


class TestLexerIteration:
    """The lexer is lazy and restartable."""

    def test_iterating_twice_gives_same_tokens(self):
        lexer = Lexer("Grid 1 2 3\nSetServer Production\n")
        assert list(lexer) == list(lexer)

    def test_iteration_is_lazy(self):
        iterator = iter(Lexer("Bind a Quit\n" * 1000))
        first = next(iterator)
        assert first.value == "Bind"


class TestInputNormalisation:
    """Byte input and carriage returns."""

    def test_utf8_bytes_are_decoded(self):
        tokens = tokenize("Bind ctrl+ä Quit\n".encode("utf-8"))
        assert tokens[2].value == "ctrl+ä"

    def test_invalid_utf8_raises_lex_error(self):
        with pytest.raises(ConfigLexError) as exc_info:
            tokenize(b"Grid 1 2 3\nBind \xff Quit\n", path="bad.conf")
        error = exc_info.value
        assert error.line == 2
        assert error.column == 6
        assert error.path == "bad.conf"
        assert "LEX_ERROR" in str(error)

    def test_strip_carriage_returns(self):
        assert strip_carriage_returns("a b\r\nc\r\n") == "a b\nc\n"
