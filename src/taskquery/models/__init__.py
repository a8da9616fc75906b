"""Data models."""

from .nodes import (
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
from .search_config import SearchConfig
from .task import Priority, Task
from .tokens import Token, TokenKind

__all__ = [
    "AndNode",
    "Node",
    "NotNode",
    "OrNode",
    "PhraseNode",
    "PrefixField",
    "PrefixFilter",
    "Priority",
    "PropertyFilter",
    "RangeFilter",
    "SearchConfig",
    "Task",
    "TermNode",
    "Token",
    "TokenKind",
]
