"""Shared fixtures for taskquery tests."""

from collections.abc import Callable
from datetime import date

import pytest

from taskquery.models import Task
from taskquery.search import Search, SearchEvaluator

# A Wednesday
TODAY = date(2024, 6, 12)


def make_task(text: str = "task", **kwargs) -> Task:
    """Build a task whose raw line is derived from ``text`` unless given."""
    state = kwargs.pop("state", "TODO")
    data = {
        "path": "notes/todo.md",
        "raw_text": f"- {state} {text}",
        "text": text,
        "state": state,
    }
    data.update(kwargs)
    return Task(**data)


@pytest.fixture
def task_factory() -> Callable[..., Task]:
    """Factory for tasks with sensible defaults."""
    return make_task


@pytest.fixture
def evaluator() -> SearchEvaluator:
    """Evaluator with a fixed clock."""
    return SearchEvaluator(clock=lambda: TODAY)


@pytest.fixture
def search(evaluator: SearchEvaluator) -> Search:
    """Search facade with a fixed clock."""
    return Search(evaluator=evaluator)
