"""Service for applying search queries to task lists."""

import asyncio
import logging

from ..models import SearchConfig, Task
from ..search import Search

logger = logging.getLogger(__name__)


class FilterService:
    """Filters tasks with a search query."""

    def __init__(self, search: Search | None = None, config: SearchConfig | None = None) -> None:
        self.config = config or SearchConfig.default()
        self.search = search or Search.from_config(self.config)

    async def apply(
        self,
        tasks: list[Task],
        query: str,
        case_sensitive: bool | None = None,
    ) -> list[Task]:
        """Return the tasks matching ``query``, in input order.

        A blank query matches every task; an invalid one matches none.
        Tasks are evaluated concurrently.
        """
        if not query.strip():
            return list(tasks)

        if case_sensitive is None:
            case_sensitive = self.config.case_sensitive

        results = await asyncio.gather(
            *(self.search.evaluate(query, task, case_sensitive, self.config) for task in tasks)
        )
        matched = [task for task, ok in zip(tasks, results, strict=True) if ok]
        logger.debug("Query %r matched %d of %d tasks", query, len(matched), len(tasks))
        return matched
