"""Tests for data models."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from taskquery.models import PrefixField, PropertyFilter, SearchConfig, Task, Token, TokenKind
from taskquery.models.task import as_date


class TestTask:
    """Tests for the Task model."""

    def test_defaults(self):
        task = Task()
        assert task.path == ""
        assert task.priority is None
        assert task.scheduled_date is None
        assert task.tags == []

    def test_filename(self):
        assert Task(path="projects/home/todo.md").filename == "todo.md"
        assert Task(path="todo.md").filename == "todo.md"

    def test_tags(self):
        task = Task(raw_text="- TODO plan #work/q3 and #home, see page#anchor [#A]")
        assert task.tags == ["work/q3", "home"]

    def test_tag_at_line_start(self):
        assert Task(raw_text="#inbox call").tags == ["inbox"]

    def test_invalid_priority(self):
        with pytest.raises(ValidationError):
            Task(priority="urgent")

    def test_frozen(self):
        task = Task(text="a")
        with pytest.raises(ValidationError):
            task.text = "b"

    def test_from_dict_camel_case(self):
        task = Task.from_dict(
            {
                "path": "a.md",
                "rawText": "- TODO x",
                "scheduledDate": "2024-06-12",
                "deadlineDate": "2024-06-20T09:00:00",
            }
        )
        assert task.raw_text == "- TODO x"
        assert as_date(task.scheduled_date) == date(2024, 6, 12)
        assert as_date(task.deadline_date) == date(2024, 6, 20)

    def test_as_date(self):
        assert as_date(datetime(2024, 6, 12, 8, 0)) == date(2024, 6, 12)
        assert as_date(date(2024, 6, 12)) == date(2024, 6, 12)
        assert as_date(None) is None


class TestSearchConfig:
    """Tests for SearchConfig validation."""

    def test_defaults(self):
        config = SearchConfig.default()
        assert config.case_sensitive is False
        assert config.week_starts_on == "Monday"
        assert config.cache_size == 50

    def test_week_start_capitalized(self):
        assert SearchConfig(week_starts_on=" sunday ").week_starts_on == "Sunday"

    def test_invalid_week_start(self):
        with pytest.raises(ValidationError):
            SearchConfig(week_starts_on="Friday")

    def test_cache_size_minimum(self):
        with pytest.raises(ValidationError):
            SearchConfig(cache_size=0)


class TestNodesAndTokens:
    """Tests for AST and token helpers."""

    def test_date_fields(self):
        assert PrefixField.SCHEDULED.is_date
        assert PrefixField.DEADLINE.is_date
        assert not PrefixField.TAG.is_date

    def test_property_value_text(self):
        assert PropertyFilter("type", "Project").value == "type:Project"
        assert PropertyFilter("type").value == "type"

    def test_token_end(self):
        token = Token(TokenKind.PHRASE, "a b", '"a b"', 4)
        assert token.end == 9
