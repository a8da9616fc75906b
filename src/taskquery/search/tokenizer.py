"""Tokenizer for the task search query language.

Lexing is lenient: characters that start no known token are skipped one at a
time, so malformed input degrades to a shorter token stream instead of
raising.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from ..models.tokens import Token, TokenKind

# Binding powers for the Pratt parser
BP_NOT = 100
BP_AND = 80
BP_OR = 60
BP_DEFAULT = 50

_QUOTED = r'"([^"\\]*(?:\\.[^"\\]*)*)"'

# Tried in order at each position; order encodes lexical precedence.
PATTERNS: tuple[tuple[TokenKind, re.Pattern[str]], ...] = (
    (TokenKind.PHRASE, re.compile(r'"(?:\\.|[^"\\])*"')),
    (TokenKind.OR, re.compile(r"\bOR\b", re.IGNORECASE)),
    (TokenKind.AND, re.compile(r"\bAND\b", re.IGNORECASE)),
    (TokenKind.RANGE, re.compile(r"\.\.")),
    (TokenKind.LPAREN, re.compile(r"\(")),
    (TokenKind.RPAREN, re.compile(r"\)")),
    (
        TokenKind.PREFIX,
        re.compile(r"\b(?:path|file|tag|state|priority|content|scheduled|deadline):"),
    ),
    (
        TokenKind.PROPERTY,
        re.compile(
            r"\[(?:" + _QUOTED + r'|([^\s:"\]]+))(?:\s*:\s*(?:' + _QUOTED + r"|([^\]]*)))?\]"
        ),
    ),
    (TokenKind.NOT, re.compile(r"-")),
    (TokenKind.WORD, re.compile(r'[^\s"()]+')),
)

PROPERTY_PATTERN = dict(PATTERNS)[TokenKind.PROPERTY]

# Extent of an unquoted prefix value, used to look for a range operator
_VALUE_RUN = re.compile(r'[^\s"()]+')

_BINDING_POWERS = {
    TokenKind.NOT: BP_NOT,
    TokenKind.AND: BP_AND,
    TokenKind.OR: BP_OR,
}


class PropertySpec(NamedTuple):
    """Decoded contents of a ``[key:value]`` property token."""

    key: str
    value: str | None
    exact: bool


def _unescape(text: str) -> str:
    return text.replace('\\"', '"')


def parse_property_text(original: str) -> PropertySpec:
    """Split a bracketed property token into key, value and exactness.

    Quoting is unwrapped independently for key and value. An empty value
    (``[key:]`` or ``[key:""]``) yields a key-only spec. The spec is exact
    when either the key or the value was quoted.

    Raises:
        ValueError: If ``original`` is not a bracketed property token.
    """
    match = PROPERTY_PATTERN.fullmatch(original)
    if match is None:
        raise ValueError(f"Not a property token: {original!r}")

    quoted_key, bare_key, quoted_value, bare_value = match.groups()
    key = _unescape(quoted_key) if quoted_key is not None else bare_key
    exact = quoted_key is not None

    value: str | None = None
    if quoted_value is not None:
        value = _unescape(quoted_value)
        exact = True
    elif bare_value is not None:
        value = _unescape(bare_value.strip())

    return PropertySpec(key, value or None, exact)


def _decode(kind: TokenKind, text: str) -> str:
    """Compute a token's semantic value from its matched text."""
    if kind in (TokenKind.PHRASE, TokenKind.PREFIX_VALUE_QUOTED):
        return _unescape(text[1:-1])
    if kind is TokenKind.PREFIX:
        return text[:-1]
    if kind in (TokenKind.OR, TokenKind.AND, TokenKind.RANGE):
        return text.lower()
    if kind is TokenKind.PROPERTY:
        spec = parse_property_text(text)
        return spec.key if spec.value is None else f"{spec.key}:{spec.value}"
    return text


def binding_power(kind: TokenKind) -> int:
    """Binding power of a token kind; higher binds tighter."""
    return _BINDING_POWERS.get(kind, BP_DEFAULT)


class SearchTokenizer:
    """Converts a query string into a list of tokens."""

    def tokenize(self, query: str) -> list[Token]:
        """Tokenize ``query``. Never raises."""
        tokens: list[Token] = []
        pos = 0
        length = len(query)

        while pos < length:
            if query[pos].isspace():
                pos += 1
                continue

            last = tokens[-1] if tokens else None

            # A range operator right after a prefix value
            if (
                last is not None
                and last.kind in (TokenKind.PREFIX_VALUE, TokenKind.PREFIX_VALUE_QUOTED)
                and query.startswith("..", pos)
            ):
                tokens.append(Token(TokenKind.RANGE, "..", "..", pos))
                pos += 2
                continue

            # Value of a prefix containing a range: cut it at the ".."
            if last is not None and last.kind is TokenKind.PREFIX:
                split = self._split_range_value(query, pos)
                if split is not None:
                    tokens.append(Token(TokenKind.PREFIX_VALUE, split, split, pos))
                    pos += len(split)
                    continue

            next_pos = self._match_pattern(query, pos, tokens)
            if next_pos is None:
                # Unrecognized character
                pos += 1
            else:
                pos = next_pos

        return tokens

    def _split_range_value(self, query: str, pos: int) -> str | None:
        """Return the text before ``..`` if the value run at ``pos`` has one."""
        if query[pos] == '"':
            return None
        run = _VALUE_RUN.match(query, pos)
        if run is None:
            return None
        index = run.group().find("..")
        if index <= 0:
            return None
        return run.group()[:index]

    def _match_pattern(self, query: str, pos: int, tokens: list[Token]) -> int | None:
        """Match the first applicable pattern at ``pos``, appending its token.

        Returns the new position, or None when nothing matched.
        """
        last = tokens[-1] if tokens else None

        after_prefix = last is not None and last.kind is TokenKind.PREFIX

        for kind, pattern in PATTERNS:
            if after_prefix and kind in (TokenKind.OR, TokenKind.AND):
                # "tag:and" is a value, not an operator
                continue
            match = pattern.match(query, pos)
            if match is None:
                continue
            text = match.group()

            if after_prefix:
                # The word pattern keeps inner dashes, so "state:in-progress"
                # stays one value rather than a value followed by NOT.
                if kind is TokenKind.WORD:
                    kind = TokenKind.PREFIX_VALUE
                elif kind is TokenKind.PHRASE:
                    kind = TokenKind.PREFIX_VALUE_QUOTED

            tokens.append(Token(kind, _decode(kind, text), text, pos))
            return match.end()

        return None


_default_tokenizer = SearchTokenizer()


def tokenize(query: str) -> list[Token]:
    """Tokenize ``query`` with a shared tokenizer instance."""
    return _default_tokenizer.tokenize(query)
