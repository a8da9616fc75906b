"""Lexical tokens produced by the search tokenizer."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Kinds of search tokens."""

    WORD = "word"
    PHRASE = "phrase"
    AND = "and"
    OR = "or"
    NOT = "not"
    RANGE = "range"
    LPAREN = "lparen"
    RPAREN = "rparen"
    PREFIX = "prefix"
    PREFIX_VALUE = "prefix_value"
    PREFIX_VALUE_QUOTED = "prefix_value_quoted"
    PROPERTY = "property"


@dataclass(frozen=True)
class Token:
    """A single token of a search query.

    ``value`` is the decoded payload (quotes stripped, escapes resolved,
    operator keywords lowercased); ``original`` is the matched source text.
    """

    kind: TokenKind
    value: str
    original: str
    position: int

    @property
    def end(self) -> int:
        """Offset just past the token's source text."""
        return self.position + len(self.original)
