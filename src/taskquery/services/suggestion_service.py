"""Collects candidate values for prefix filter auto-completion."""

from ..models import PrefixField, Task
from ..search.dates import RELATIVE_KEYWORDS
from ..search.evaluator import PRIORITY_ALIASES

DATE_SUGGESTIONS = sorted(RELATIVE_KEYWORDS | {"next 7 days"})


class SuggestionService:
    """Builds sorted, de-duplicated suggestion lists from tasks."""

    def paths(self, tasks: list[Task]) -> list[str]:
        """All parent directory prefixes of the task paths."""
        found: set[str] = set()
        for task in tasks:
            parts = task.path.split("/")
            for i in range(1, len(parts)):
                found.add("/".join(parts[:i]))
        return sorted(found)

    def files(self, tasks: list[Task]) -> list[str]:
        """Unique file names."""
        return sorted({task.filename for task in tasks if task.path})

    def tags(self, tasks: list[Task]) -> list[str]:
        """Unique tags, including each parent of a hierarchical tag."""
        found: set[str] = set()
        for task in tasks:
            for tag in task.tags:
                parts = tag.split("/")
                for i in range(1, len(parts) + 1):
                    found.add("/".join(parts[:i]))
        return sorted(found)

    def states(self, tasks: list[Task]) -> list[str]:
        """Unique state keywords."""
        return sorted({task.state for task in tasks if task.state})

    def priorities(self) -> list[str]:
        """Accepted priority filter values."""
        return sorted(PRIORITY_ALIASES)

    def suggest(self, field: PrefixField, partial: str, tasks: list[Task]) -> list[str]:
        """Values for ``field`` starting with ``partial`` (case-insensitive)."""
        match field:
            case PrefixField.PATH:
                values = self.paths(tasks)
            case PrefixField.FILE:
                values = self.files(tasks)
            case PrefixField.TAG:
                values = self.tags(tasks)
            case PrefixField.STATE:
                values = self.states(tasks)
            case PrefixField.PRIORITY:
                values = self.priorities()
            case PrefixField.SCHEDULED | PrefixField.DEADLINE:
                values = DATE_SUGGESTIONS
            case _:
                values = []
        prefix = partial.removeprefix("#").lower() if field is PrefixField.TAG else partial.lower()
        return [value for value in values if value.lower().startswith(prefix)]
