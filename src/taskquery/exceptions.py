"""Exception hierarchy for taskquery."""


class TaskQueryError(Exception):
    """Base exception for all taskquery errors."""

    pass


class SearchError(TaskQueryError):
    """Raised when a search query cannot be parsed.

    ``position`` is the character offset where the problem was detected (just
    past the last token for end-of-input errors), for error reporting only.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        super().__init__(message)


class TaskFileError(TaskQueryError):
    """Raised when a task file is missing or malformed."""

    pass
