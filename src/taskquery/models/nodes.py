"""AST node classes for parsed search queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PrefixField(str, Enum):
    """Fields addressable with a ``field:value`` prefix filter."""

    PATH = "path"
    FILE = "file"
    TAG = "tag"
    STATE = "state"
    PRIORITY = "priority"
    CONTENT = "content"
    SCHEDULED = "scheduled"
    DEADLINE = "deadline"

    @property
    def is_date(self) -> bool:
        return self in (PrefixField.SCHEDULED, PrefixField.DEADLINE)


@dataclass(frozen=True)
class AndNode:
    """All children must match."""

    children: tuple[Node, ...]
    position: int = 0


@dataclass(frozen=True)
class OrNode:
    """Any child must match."""

    children: tuple[Node, ...]
    position: int = 0


@dataclass(frozen=True)
class NotNode:
    """Negation of a single child."""

    child: Node
    position: int = 0

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.child,)


@dataclass(frozen=True)
class TermNode:
    """A bare word, matched as a substring."""

    value: str
    position: int = 0


@dataclass(frozen=True)
class PhraseNode:
    """A quoted phrase, matched on word boundaries."""

    value: str
    position: int = 0


@dataclass(frozen=True)
class PrefixFilter:
    """A field-scoped filter like ``state:TODO`` or ``tag:"work"``.

    ``exact`` records whether the value was quoted in the query.
    """

    field: PrefixField
    value: str
    exact: bool = False
    position: int = 0


@dataclass(frozen=True)
class RangeFilter:
    """A date range filter like ``scheduled:2024-01-01..2024-01-31``."""

    field: PrefixField
    start: str
    end: str
    position: int = 0


@dataclass(frozen=True)
class PropertyFilter:
    """A document property filter like ``[type:Project]`` or ``[status]``.

    ``expected`` is None for key-only filters.
    """

    key: str
    expected: str | None = None
    exact: bool = False
    position: int = 0

    @property
    def value(self) -> str:
        """Canonical ``key:value`` (or bare ``key``) text."""
        if self.expected is None:
            return self.key
        return f"{self.key}:{self.expected}"


Node = AndNode | OrNode | NotNode | TermNode | PhraseNode | PrefixFilter | RangeFilter | PropertyFilter
