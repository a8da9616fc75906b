"""Pratt parser turning search tokens into an AST."""

from __future__ import annotations

from ..exceptions import SearchError
from ..models.nodes import (
    AndNode,
    Node,
    NotNode,
    OrNode,
    PhraseNode,
    PrefixField,
    PrefixFilter,
    PropertyFilter,
    RangeFilter,
    TermNode,
)
from ..models.tokens import Token, TokenKind
from .tokenizer import BP_NOT, binding_power, parse_property_text, tokenize

_VALUE_KINDS = frozenset(
    {
        TokenKind.PREFIX_VALUE,
        TokenKind.PREFIX_VALUE_QUOTED,
        TokenKind.WORD,
        TokenKind.PHRASE,
    }
)
_QUOTED_KINDS = frozenset({TokenKind.PREFIX_VALUE_QUOTED, TokenKind.PHRASE})

RANGE_ERROR = "Range operator can only be used with scheduled: or deadline: prefixes"


def _and_with(left: Node, right: Node, position: int) -> AndNode:
    """Combine ``left`` and ``right`` with AND, flattening into an existing AND."""
    if isinstance(left, AndNode):
        return AndNode(left.children + (right,), left.position)
    return AndNode((left, right), position)


class PrattParser:
    """Operator-precedence parser over a token list.

    Binding powers: NOT 100, AND 80, OR 60, everything else 50. Adjacent
    atoms are joined with an implicit AND, and a NOT in the middle of an
    expression always produces ``and(left, not(right))``.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.position = 0

    def parse(self) -> Node:
        """Parse the whole token list as one expression."""
        node = self.parse_expression(0)
        if self.position < len(self.tokens):
            token = self.tokens[self.position]
            raise SearchError(f"Unexpected token: {token.original}", token.position)
        return node

    def _offset(self) -> int:
        """Character offset of the current token, or the end of input."""
        token = self._peek()
        if token is not None:
            return token.position
        return self.tokens[-1].end if self.tokens else 0

    def _peek(self) -> Token | None:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def parse_expression(self, bp: int) -> Node:
        left = self._parse_prefix()

        while (token := self._peek()) is not None:
            if token.kind is TokenKind.RPAREN:
                # Closing parenthesis belongs to the enclosing group
                break
            if binding_power(token.kind) <= bp:
                break

            match token.kind:
                case TokenKind.NOT:
                    self.position += 1
                    right = self.parse_expression(BP_NOT - 1)
                    left = AndNode((left, NotNode(right, token.position)), token.position)
                case TokenKind.PREFIX:
                    left = _and_with(left, self._parse_prefix_filter(), token.position)
                case TokenKind.PROPERTY:
                    left = _and_with(left, self._parse_property_filter(), token.position)
                case TokenKind.LPAREN:
                    left = _and_with(left, self._parse_group(), token.position)
                case TokenKind.WORD | TokenKind.PHRASE:
                    self.position += 1
                    left = _and_with(left, self._term(token), token.position)
                case TokenKind.AND | TokenKind.OR:
                    self.position += 1
                    right = self.parse_expression(binding_power(token.kind) - 1)
                    node_cls = AndNode if token.kind is TokenKind.AND else OrNode
                    left = node_cls((left, right), token.position)
                case TokenKind.RANGE:
                    raise SearchError(RANGE_ERROR, token.position)
                case _:
                    raise SearchError(f"Unexpected token: {token.original}", token.position)

        return left

    def _parse_prefix(self) -> Node:
        token = self._peek()
        if token is None:
            raise SearchError("Unexpected end of expression", self._offset())

        match token.kind:
            case TokenKind.NOT:
                self.position += 1
                operand = self.parse_expression(BP_NOT - 1)
                return NotNode(operand, token.position)
            case TokenKind.LPAREN:
                return self._parse_group()
            case TokenKind.PREFIX:
                return self._parse_prefix_filter()
            case TokenKind.PROPERTY:
                return self._parse_property_filter()
            case TokenKind.WORD | TokenKind.PHRASE:
                self.position += 1
                return self._term(token)
            case _:
                raise SearchError(f"Unexpected token: {token.original}", token.position)

    def _parse_group(self) -> Node:
        """Parse ``( expr )`` starting at the opening parenthesis."""
        self.position += 1
        inner = self.parse_expression(0)
        closing = self._peek()
        if closing is None or closing.kind is not TokenKind.RPAREN:
            raise SearchError("Expected closing parenthesis", self._offset())
        self.position += 1
        return inner

    def _parse_prefix_filter(self) -> Node:
        prefix = self.tokens[self.position]
        self.position += 1

        value = self._peek()
        if value is None:
            raise SearchError("Expected value after prefix", prefix.position)
        if value.kind not in _VALUE_KINDS:
            raise SearchError(f"Expected prefix value, got {value.kind.value}", value.position)
        self.position += 1

        field = PrefixField(prefix.value)
        node = PrefixFilter(
            field=field,
            value=value.value,
            exact=value.kind in _QUOTED_KINDS,
            position=prefix.position,
        )

        operator = self._peek()
        if operator is not None and operator.kind is TokenKind.RANGE:
            return self._parse_range(node, operator)
        return node

    def _parse_range(self, start: PrefixFilter, operator: Token) -> RangeFilter:
        if not start.field.is_date:
            raise SearchError(RANGE_ERROR, operator.position)
        self.position += 1

        end = self._peek()
        if end is None or end.kind not in _VALUE_KINDS:
            raise SearchError("Expected date value after range operator", operator.position)
        self.position += 1

        return RangeFilter(
            field=start.field,
            start=start.value,
            end=end.value,
            position=operator.position,
        )

    def _parse_property_filter(self) -> PropertyFilter:
        token = self.tokens[self.position]
        self.position += 1
        spec = parse_property_text(token.original)
        return PropertyFilter(
            key=spec.key,
            expected=spec.value,
            exact=spec.exact,
            position=token.position,
        )

    def _term(self, token: Token) -> Node:
        if token.kind is TokenKind.PHRASE:
            return PhraseNode(token.value, token.position)
        return TermNode(token.value, token.position)


def parse_tokens(tokens: list[Token]) -> Node:
    """Parse a token list into an AST.

    Raises:
        SearchError: If the tokens do not form a valid expression.
    """
    return PrattParser(tokens).parse()


def parse_query(query: str) -> Node:
    """Tokenize and parse ``query``.

    Raises:
        SearchError: If the query cannot be parsed.
    """
    return parse_tokens(tokenize(query))
