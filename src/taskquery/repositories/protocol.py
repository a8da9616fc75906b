"""Protocol for document property lookups."""

from collections.abc import Mapping
from typing import Any, Protocol


class PropertySourceProtocol(Protocol):
    """Interface for resolving a document's top-level properties.

    Implementations return the key/value mapping stored in a document's
    metadata block (e.g. YAML front matter), or None when the document is
    missing or its metadata cannot be read. Other failures propagate.
    """

    async def get_properties(self, path: str) -> Mapping[str, Any] | None:
        """Return the properties of the document at ``path``.

        Args:
            path: Document path as stored on the task (e.g. "notes/a.md").

        Returns:
            Mapping of top-level properties, or None if unavailable.
        """
        ...
