"""
Tokenizer (lexer) for math expressions.

Terms are read one at a time from a scan cursor, so the parser can
classify each term as soon as it is read.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from .errors import EndOfInputError
from .symbols import is_symbol_char


class TokenKind(Enum):
    """Token kinds produced by the tokenizer."""

    # A single operator, grouping or unrecognized character
    SYMBOL = "SYMBOL"

    # A maximal run of letters, digits and '.'
    TERM = "TERM"


@dataclass
class Token:
    """A token produced by the tokenizer."""

    value: str
    position: int
    kind: TokenKind


def _is_blank(ch: str) -> bool:
    return ch in (" ", "\t")


def _is_term_part(ch: str) -> bool:
    # No support for exponent notation: '1e5' is one term, '1e-5' is three.
    return ch.isalnum() or ch == "."


class Tokenizer:
    """Incremental tokenizer over an expression string."""

    def __init__(self, source: str, position: int = 0):
        self._source = source
        self._position = position

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> int:
        """Current scan offset; always past any blanks after the last term."""
        return self._position

    @property
    def at_end(self) -> bool:
        self._skip_blanks()
        return self._position >= len(self._source)

    def read_term(self) -> Token:
        """
        Reads the next token and advances past it and any trailing blanks.

        Raises:
            EndOfInputError: If no characters are left to read
        """
        self._skip_blanks()

        if self._position >= len(self._source):
            raise EndOfInputError(self._position, self._source)

        start = self._position
        ch = self._source[start]

        if is_symbol_char(ch) or not _is_term_part(ch):
            self._position += 1
            self._skip_blanks()
            return Token(ch, start, TokenKind.SYMBOL)

        while self._position < len(self._source) and _is_term_part(
            self._source[self._position]
        ):
            self._position += 1

        value = self._source[start:self._position]
        self._skip_blanks()
        return Token(value, start, TokenKind.TERM)

    def _skip_blanks(self) -> None:
        while self._position < len(self._source) and _is_blank(
            self._source[self._position]
        ):
            self._position += 1


def tokenize(source: str) -> List[Token]:
    """
    Tokenizes an expression string.

    Args:
        source: The expression string to tokenize

    Returns:
        List of tokens
    """
    tokenizer = Tokenizer(source)
    tokens: List[Token] = []
    while not tokenizer.at_end:
        tokens.append(tokenizer.read_term())
    return tokens
