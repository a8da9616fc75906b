"""Repository loading task records from a YAML task file."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..exceptions import TaskFileError
from ..models import Task

logger = logging.getLogger(__name__)


class TaskFileRepository:
    """
    Loads tasks from a YAML file.

    The file holds either a list of task mappings or a mapping with a
    ``tasks`` list. Keys may be snake_case or camelCase.
    """

    TASKS_YAML = "tasks.yaml"

    def __init__(self, task_file: Path) -> None:
        self.task_file = task_file
        self._tasks: list[Task] | None = None

    @classmethod
    def for_root(cls, task_root: Path) -> "TaskFileRepository":
        """Repository for the default task file inside ``task_root``."""
        return cls(task_root / cls.TASKS_YAML)

    def get_all(self) -> list[Task]:
        """Load and return all tasks, caching them until ``reload``."""
        if self._tasks is None:
            self._tasks = self._load()
        return list(self._tasks)

    def reload(self) -> None:
        """Clear cached tasks."""
        self._tasks = None

    def _load(self) -> list[Task]:
        if not self.task_file.exists():
            raise TaskFileError(f"Task file not found: {self.task_file}")

        try:
            with open(self.task_file) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise TaskFileError(f"Invalid YAML in {self.task_file}: {e}") from e

        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("tasks") or []
        if not isinstance(data, list):
            raise TaskFileError(f"Expected a list of tasks in {self.task_file}")

        tasks: list[Task] = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise TaskFileError(f"Task #{index} in {self.task_file} is not a mapping")
            try:
                tasks.append(Task.from_dict(item))
            except ValidationError as e:
                raise TaskFileError(f"Invalid task #{index} in {self.task_file}: {e}") from e

        logger.info("Loaded %d tasks from %s", len(tasks), self.task_file)
        return tasks
