"""Bounded cache of parsed query ASTs."""

import logging
import threading

from ..models.nodes import Node

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50


class QueryCache:
    """Maps exact query strings to their parsed AST.

    Eviction is first-in-first-out: when full, the entry inserted earliest
    is dropped, however recently it was read. Reads never reorder entries.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        self.capacity = capacity
        self._entries: dict[str, Node] = {}
        self._lock = threading.Lock()

    def get(self, query: str) -> Node | None:
        """Return the cached AST for ``query``, or None."""
        with self._lock:
            return self._entries.get(query)

    def put(self, query: str, node: Node) -> None:
        """Insert an AST, evicting the oldest entry if at capacity."""
        with self._lock:
            if query in self._entries:
                self._entries[query] = node
                return
            if len(self._entries) >= self.capacity:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug("Evicted cached query: %r", oldest)
            self._entries[query] = node

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        """Cached queries in insertion order."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, query: object) -> bool:
        with self._lock:
            return query in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
