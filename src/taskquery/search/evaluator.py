"""Evaluate a search AST against a single task."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any

from ..models.nodes import (
    AndNode,
    Node,
    NotNode,
    OrNode,
    PhraseNode,
    PrefixField,
    PrefixFilter,
    PropertyFilter,
    RangeFilter,
    TermNode,
)
from ..models.search_config import SearchConfig
from ..models.task import Task, as_date
from ..repositories.protocol import PropertySourceProtocol
from .dates import (
    DateRange,
    ExactDate,
    ParsedDate,
    RelativeDate,
    in_range,
    matches_relative,
    parse_date_value,
    resolve_window,
)

logger = logging.getLogger(__name__)

# Filter value -> Task.priority
PRIORITY_ALIASES: dict[str, str | None] = {
    "a": "high",
    "high": "high",
    "b": "med",
    "med": "med",
    "medium": "med",
    "c": "low",
    "low": "low",
    "none": None,
}

_COMPARISON = re.compile(r"^([><]=?)\s*(-?\d+(?:\.\d+)?)$")
_OR_SPLIT = re.compile(r"\s+OR\s+")


def _fold(text: str, case_sensitive: bool) -> str:
    return text if case_sensitive else text.lower()


def _contains(haystack: str, needle: str, case_sensitive: bool) -> bool:
    return _fold(needle, case_sensitive) in _fold(haystack, case_sensitive)


def _searchable_fields(task: Task) -> list[str]:
    """Fields consulted by bare terms and phrases, in order."""
    fields: list[str] = []
    if task.raw_text:
        fields.append(task.raw_text)
    if task.text:
        fields.append(task.text)
    if task.path:
        fields.append(task.path)
        fields.append(task.filename)
    return fields


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _property_day(value: Any) -> date | None:
    """The day held by a property value, if it is a date or an ISO date string."""
    if isinstance(value, datetime | date):
        return as_date(value)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def _stringify(value: Any) -> str:
    """Render a property value the way it is written in front matter."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime | date):
        return value.isoformat()
    if value is None:
        return "null"
    return str(value)


class SearchEvaluator:
    """Matches tasks against parsed search queries.

    Evaluation is asynchronous because property filters consult an external
    property source; every other node completes without suspending.
    """

    def __init__(
        self,
        property_source: PropertySourceProtocol | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            property_source: Lookup for document properties; without one,
                every document is treated as having no properties.
            clock: Returns the current day for relative date keywords.
        """
        self.property_source = property_source
        self.clock = clock

    async def evaluate(
        self,
        node: Node,
        task: Task,
        case_sensitive: bool = False,
        settings: SearchConfig | None = None,
    ) -> bool:
        """Return whether ``task`` matches ``node``."""
        match node:
            case AndNode(children=children):
                for child in children:
                    if not await self.evaluate(child, task, case_sensitive, settings):
                        return False
                return True
            case OrNode(children=children):
                for child in children:
                    if await self.evaluate(child, task, case_sensitive, settings):
                        return True
                return False
            case NotNode(child=child):
                return not await self.evaluate(child, task, case_sensitive, settings)
            case TermNode(value=value):
                return self._match_term(value, task, case_sensitive)
            case PhraseNode(value=value):
                return self._match_phrase(value, task, case_sensitive)
            case PrefixFilter():
                return self._match_prefix(node, task, case_sensitive, settings)
            case RangeFilter():
                return self._match_range(node, task)
            case PropertyFilter():
                return await self._match_property(node, task, case_sensitive, settings)
        raise TypeError(f"Unknown search node: {node!r}")

    # --- Text ---

    def _match_term(self, term: str, task: Task, case_sensitive: bool) -> bool:
        if not term:
            return False
        return any(_contains(field, term, case_sensitive) for field in _searchable_fields(task))

    def _match_phrase(self, phrase: str, task: Task, case_sensitive: bool) -> bool:
        if not phrase:
            return False
        flags = 0 if case_sensitive else re.IGNORECASE
        pattern = re.compile(rf"\b{re.escape(phrase)}\b", flags)
        return any(pattern.search(field) for field in _searchable_fields(task))

    # --- Prefix filters ---

    def _match_prefix(
        self,
        node: PrefixFilter,
        task: Task,
        case_sensitive: bool,
        settings: SearchConfig | None,
    ) -> bool:
        value = node.value
        if not value:
            return False

        match node.field:
            case PrefixField.PATH:
                return bool(task.path) and _contains(task.path, value, case_sensitive)
            case PrefixField.FILE:
                return bool(task.path) and _contains(task.filename, value, case_sensitive)
            case PrefixField.CONTENT:
                return any(
                    _contains(field, value, case_sensitive)
                    for field in (task.text, task.raw_text)
                    if field
                )
            case PrefixField.STATE:
                return task.state.lower() == value.lower()
            case PrefixField.PRIORITY:
                return self._match_priority(value, task)
            case PrefixField.TAG:
                return self._match_tag(value, node.exact, task, case_sensitive)
            case PrefixField.SCHEDULED:
                return self._match_date(value, node.exact, task.scheduled_date, settings)
            case PrefixField.DEADLINE:
                return self._match_date(value, node.exact, task.deadline_date, settings)
        return False

    def _match_priority(self, value: str, task: Task) -> bool:
        key = value.lower()
        if key not in PRIORITY_ALIASES:
            return False
        return task.priority == PRIORITY_ALIASES[key]

    def _match_tag(self, value: str, exact: bool, task: Task, case_sensitive: bool) -> bool:
        wanted = _fold(value.removeprefix("#"), case_sensitive)
        if not wanted:
            return False
        for tag in task.tags:
            tag = _fold(tag, case_sensitive)
            if tag == wanted:
                return True
            if not exact and tag.startswith(wanted + "/"):
                return True
        return False

    # --- Dates ---

    def _match_date(
        self,
        value: str,
        natural: bool,
        task_date: datetime | date | None,
        settings: SearchConfig | None,
    ) -> bool:
        today = self.clock()
        parsed = parse_date_value(value, natural=natural, reference=today)
        if parsed is None:
            return False

        if isinstance(parsed, RelativeDate) and parsed.keyword == "none":
            return task_date is None

        target = as_date(task_date)
        if target is None:
            return False
        return self._match_day(parsed, target, today, settings)

    def _match_day(
        self,
        parsed: ParsedDate,
        target: date,
        today: date,
        settings: SearchConfig | None,
    ) -> bool:
        """Check a concrete day against a parsed date filter value."""
        match parsed:
            case RelativeDate():
                week_starts_on = settings.week_starts_on if settings else "Monday"
                return matches_relative(parsed, target, today, week_starts_on)
            case DateRange(start=start, end=end):
                return in_range(target, start, end)
            case ExactDate():
                window = resolve_window(parsed)
                return window is not None and in_range(target, window.start, window.end)
        return False

    def _bounds(self, value: str) -> DateRange | None:
        """Window covered by one side of a range filter."""
        parsed = parse_date_value(value, reference=self.clock())
        match parsed:
            case DateRange():
                return parsed
            case ExactDate():
                return resolve_window(parsed)
        return None

    def _match_range(self, node: RangeFilter, task: Task) -> bool:
        if node.field is PrefixField.SCHEDULED:
            target = as_date(task.scheduled_date)
        else:
            target = as_date(task.deadline_date)
        if target is None:
            return False

        start = self._bounds(node.start)
        end = self._bounds(node.end)
        if start is None or end is None:
            return False
        return in_range(target, start.start, end.end)

    # --- Properties ---

    async def _match_property(
        self,
        node: PropertyFilter,
        task: Task,
        case_sensitive: bool,
        settings: SearchConfig | None,
    ) -> bool:
        properties: Mapping[str, Any] | None = None
        if self.property_source is not None and task.path:
            properties = await self.property_source.get_properties(task.path)
        if not properties or node.key not in properties:
            return False

        actual = properties[node.key]
        if node.expected is None:
            return True

        expected = node.expected
        if expected.startswith("(") and expected.endswith(")"):
            expected = expected[1:-1].strip()
        alternatives = [part.strip() for part in _OR_SPLIT.split(expected)]
        return any(
            self._match_property_value(alternative, node.exact, actual, case_sensitive, settings)
            for alternative in alternatives
            if alternative
        )

    def _match_property_value(
        self,
        expected: str,
        exact: bool,
        actual: Any,
        case_sensitive: bool,
        settings: SearchConfig | None,
    ) -> bool:
        if expected.lower() == "null" and not exact:
            return actual is None

        comparison = _COMPARISON.match(expected)
        if comparison and not exact:
            if not _is_number(actual):
                return False
            operator, number = comparison.group(1), float(comparison.group(2))
            match operator:
                case ">":
                    return actual > number
                case ">=":
                    return actual >= number
                case "<":
                    return actual < number
                case "<=":
                    return actual <= number

        if actual is None:
            return False

        today = self.clock()
        wanted_date = None if exact else parse_date_value(expected, reference=today)
        wanted_bool = {"true": True, "false": False}.get(expected.lower())

        # Top-level lists match element-wise; nested structures are not descended
        candidates = actual if isinstance(actual, list) else [actual]
        for candidate in candidates:
            if isinstance(candidate, dict | list):
                continue
            if isinstance(candidate, bool) and wanted_bool is not None:
                if candidate is wanted_bool:
                    return True
                continue
            if wanted_date is not None:
                day = _property_day(candidate)
                if day is not None and self._match_day(wanted_date, day, today, settings):
                    return True
            text = _stringify(candidate)
            if exact:
                if _fold(text, case_sensitive) == _fold(expected, case_sensitive):
                    return True
            elif _contains(text, expected, case_sensitive):
                return True
        return False
