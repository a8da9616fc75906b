"""Public entry point for parsing, validating and evaluating queries."""

from __future__ import annotations

import logging

from ..exceptions import SearchError
from ..models.nodes import Node
from ..models.search_config import SearchConfig
from ..models.task import Task
from .cache import QueryCache
from .evaluator import SearchEvaluator
from .parser import parse_query

logger = logging.getLogger(__name__)


class Search:
    """Query facade owning a parsed-AST cache and an evaluator."""

    def __init__(
        self,
        cache: QueryCache | None = None,
        evaluator: SearchEvaluator | None = None,
    ) -> None:
        self.cache = cache if cache is not None else QueryCache()
        self.evaluator = evaluator if evaluator is not None else SearchEvaluator()

    @classmethod
    def from_config(cls, config: SearchConfig, evaluator: SearchEvaluator | None = None) -> Search:
        """Create a facade with a cache sized from ``config``."""
        return cls(QueryCache(config.cache_size), evaluator)

    def parse(self, query: str) -> Node:
        """Parse ``query``, consulting the cache first.

        Raises:
            SearchError: If the query is malformed.
        """
        cached = self.cache.get(query)
        if cached is not None:
            return cached
        node = parse_query(query)
        self.cache.put(query, node)
        return node

    def validate(self, query: str) -> bool:
        """Return True if ``query`` parses."""
        try:
            self.parse(query)
        except SearchError:
            return False
        return True

    def get_error(self, query: str) -> str | None:
        """Return the parse error message for ``query``, or None if valid."""
        try:
            self.parse(query)
        except SearchError as e:
            return e.message
        return None

    async def evaluate(
        self,
        query: str,
        task: Task,
        case_sensitive: bool = False,
        settings: SearchConfig | None = None,
    ) -> bool:
        """Return whether ``task`` matches ``query``.

        A malformed query matches nothing. Errors other than parse errors,
        such as a failing property lookup, propagate.
        """
        try:
            node = self.parse(query)
        except SearchError as e:
            logger.debug("Invalid query %r: %s", query, e.message)
            return False
        return await self.evaluator.evaluate(node, task, case_sensitive, settings)

    def clear_cache(self) -> None:
        """Drop all cached ASTs."""
        self.cache.clear()
