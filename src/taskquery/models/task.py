"""Task domain model."""

import re
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel

Priority = Literal["high", "med", "low"]

# Hashtags: "#" at line start or after whitespace/"("/","; excludes URL
# fragments (page#section) and priority cookies ([#A]).
TAG_PATTERN = re.compile(r"(?<![^\s(,])#([\w\-]+(?:/[\w\-]+)*)")

# camelCase spellings accepted by from_dict
_FIELD_ALIASES = {
    "rawText": "raw_text",
    "scheduledDate": "scheduled_date",
    "deadlineDate": "deadline_date",
}


class Task(BaseModel):
    """A single to-do item extracted from a document.

    Task values are produced by the extraction layer and consumed read-only
    by the query engine.
    """

    model_config = {"frozen": True}

    path: str = ""  # document path, e.g. "projects/home.md"
    line: int = 0
    raw_text: str = ""  # original source line
    text: str = ""  # text after the state keyword
    state: str = ""  # TODO, DOING, DONE, ...
    completed: bool = False
    priority: Priority | None = None
    scheduled_date: datetime | date | None = None
    deadline_date: datetime | date | None = None
    urgency: float | None = None

    @property
    def filename(self) -> str:
        """Final segment of the document path."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def tags(self) -> list[str]:
        """Hashtags found in the raw line, without the leading '#'."""
        return TAG_PATTERN.findall(self.raw_text)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Create a Task from a mapping, accepting camelCase keys."""
        normalized = {_FIELD_ALIASES.get(key, key): value for key, value in data.items()}
        return cls(**normalized)


def as_date(value: datetime | date | None) -> date | None:
    """Reduce a task date to day precision."""
    if isinstance(value, datetime):
        return value.date()
    return value
