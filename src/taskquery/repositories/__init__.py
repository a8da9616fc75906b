"""Repository layer for tasks and document properties."""

from .frontmatter_source import FrontmatterPropertySource, MappingPropertySource
from .protocol import PropertySourceProtocol
from .tasks_file import TaskFileRepository

__all__ = [
    "FrontmatterPropertySource",
    "MappingPropertySource",
    "PropertySourceProtocol",
    "TaskFileRepository",
]
