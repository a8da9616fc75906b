"""Property source backed by markdown front matter on disk."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import frontmatter
import yaml

logger = logging.getLogger(__name__)


class FrontmatterPropertySource:
    """Reads YAML front matter from documents under a root directory.

    Parsed metadata is cached per path until ``reload`` or ``invalidate``.
    """

    def __init__(self, root: Path) -> None:
        """
        Initialize the property source.

        Args:
            root: Directory that task paths are relative to
        """
        self.root = root
        self._cache: dict[str, Mapping[str, Any] | None] = {}

    async def get_properties(self, path: str) -> Mapping[str, Any] | None:
        """Return the front matter of ``path``, or None if unavailable."""
        if path in self._cache:
            return self._cache[path]
        properties = await asyncio.to_thread(self._load, path)
        self._cache[path] = properties
        return properties

    def invalidate(self, path: str) -> None:
        """Forget cached metadata for one document."""
        self._cache.pop(path, None)

    def reload(self) -> None:
        """Clear all cached metadata."""
        self._cache.clear()

    def _load(self, path: str) -> Mapping[str, Any] | None:
        filepath = self.root / path
        if not filepath.is_file():
            logger.debug("Document not found for property lookup: %s", filepath)
            return None

        try:
            post = frontmatter.load(filepath)
        except (yaml.YAMLError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Failed to parse front matter in %s: %s", filepath, e)
            return None

        return dict(post.metadata)


class MappingPropertySource:
    """In-memory property source keyed by document path."""

    def __init__(self, documents: Mapping[str, Mapping[str, Any] | None] | None = None) -> None:
        self.documents: dict[str, Mapping[str, Any] | None] = dict(documents or {})

    async def get_properties(self, path: str) -> Mapping[str, Any] | None:
        return self.documents.get(path)
