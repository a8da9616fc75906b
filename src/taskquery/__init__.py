"""Boolean search queries over markdown task records."""

from .exceptions import SearchError, TaskQueryError
from .models import SearchConfig, Task
from .search import QueryCache, Search, SearchEvaluator

__version__ = "0.1.0"

__all__ = [
    "QueryCache",
    "Search",
    "SearchConfig",
    "SearchError",
    "SearchEvaluator",
    "Task",
    "TaskQueryError",
    "__version__",
]
