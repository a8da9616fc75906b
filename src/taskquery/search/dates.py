"""Date value parsing and matching for scheduled:/deadline: filters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

import parsedatetime

RELATIVE_KEYWORDS = frozenset(
    {
        "none",
        "overdue",
        "due",
        "today",
        "tomorrow",
        "this week",
        "next week",
        "this month",
        "next month",
    }
)

_NEXT_N_DAYS = re.compile(r"^next\s+(\d+)\s+days$")
_IN_N_DAYS = re.compile(r"^in\s+(\d+)\s+days$")
_RANGE = re.compile(r"^(\d{4}-\d{2}-\d{2})\.\.(\d{4}-\d{2}-\d{2})$")
_FULL = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
_YEAR = re.compile(r"^(\d{4})$")

_calendar = parsedatetime.Calendar()


class DatePrecision(str, Enum):
    """How much of an absolute date was given."""

    FULL = "full"
    YEAR_MONTH = "year-month"
    YEAR = "year"


@dataclass(frozen=True)
class ExactDate:
    """An absolute date; year and year-month values sit on the 1st."""

    date: date
    precision: DatePrecision = DatePrecision.FULL


@dataclass(frozen=True)
class DateRange:
    """A half-open date range ``[start, end)``."""

    start: date
    end: date


@dataclass(frozen=True)
class RelativeDate:
    """A keyword resolved against the current day at match time."""

    keyword: str

    @property
    def next_days(self) -> int | None:
        """N for ``next N days``, otherwise None."""
        match = _NEXT_N_DAYS.match(self.keyword)
        return int(match.group(1)) if match else None


ParsedDate = ExactDate | DateRange | RelativeDate


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _shift(day: date, days: int) -> date | None:
    """``day`` moved by ``days``, or None outside the supported calendar."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return None


def _add_months(day: date, months: int) -> date | None:
    """First day of the month ``months`` after ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return _safe_date(index // 12, index % 12 + 1, 1)


def resolve_window(parsed: ExactDate) -> DateRange | None:
    """Widen an absolute date into the day, month or year it names.

    Returns None when the window would end past ``date.max``.
    """
    start = parsed.date
    if parsed.precision is DatePrecision.YEAR:
        end = _safe_date(start.year + 1, 1, 1)
    elif parsed.precision is DatePrecision.YEAR_MONTH:
        end = _add_months(start, 1)
    else:
        end = _shift(start, 1)
    if end is None:
        return None
    return DateRange(start, end)


def _exact(day: date | None, precision: DatePrecision = DatePrecision.FULL) -> ExactDate | None:
    """An ExactDate whose window is representable, otherwise None."""
    if day is None:
        return None
    parsed = ExactDate(day, precision)
    return parsed if resolve_window(parsed) is not None else None


def parse_natural_date(expression: str, reference: date | None = None) -> date | None:
    """Parse a natural-language expression like "next friday" or "in 3 days"."""
    reference = reference or date.today()
    source = datetime.combine(reference, datetime.min.time())
    result, status = _calendar.parseDT(expression, sourceTime=source)
    if not status:
        return None
    return result.date()


def parse_date_value(
    value: str,
    natural: bool = False,
    reference: date | None = None,
) -> ParsedDate | None:
    """Parse a date filter value.

    Args:
        value: Filter text, e.g. "2024-01-31", "2024-01", "next 7 days".
        natural: Allow delegation to the natural-language parser. Quoted
            values (``"next friday"``) always allow it.
        reference: Day used to resolve natural-language expressions.

    Returns:
        The parsed value, or None if the text is not a date expression.
    """
    text = value.strip().lower()
    if not text:
        return None

    if text.startswith('"') and text.endswith('"') and len(text) >= 2:
        text = text[1:-1].strip()
        natural = True

    if text in RELATIVE_KEYWORDS:
        return RelativeDate(text)

    next_days = _NEXT_N_DAYS.match(text)
    if next_days:
        return RelativeDate(f"next {int(next_days.group(1))} days")

    match = _RANGE.match(text)
    if match:
        start = parse_date_value(match.group(1))
        end = parse_date_value(match.group(2))
        if not isinstance(start, ExactDate) or not isinstance(end, ExactDate):
            return None
        return DateRange(start.date, resolve_window(end).end)

    match = _FULL.match(text)
    if match:
        return _exact(_safe_date(*(int(part) for part in match.groups())))

    match = _YEAR_MONTH.match(text)
    if match:
        day = _safe_date(int(match.group(1)), int(match.group(2)), 1)
        return _exact(day, DatePrecision.YEAR_MONTH)

    match = _YEAR.match(text)
    if match:
        return _exact(_safe_date(int(match.group(1)), 1, 1), DatePrecision.YEAR)

    in_days = _IN_N_DAYS.match(text)
    if in_days:
        reference = reference or date.today()
        return _exact(_shift(reference, int(in_days.group(1))))

    if natural:
        return _exact(parse_natural_date(text, reference))

    return None


def _week_start(today: date, week_starts_on: str) -> date:
    if week_starts_on == "Sunday":
        offset = (today.weekday() + 1) % 7
    else:
        offset = today.weekday()
    return today - timedelta(days=offset)


def matches_relative(
    keyword: RelativeDate,
    target: date,
    today: date,
    week_starts_on: str = "Monday",
) -> bool:
    """Check a non-null task date against a relative keyword.

    Windows are compared by day difference, so no bound is ever computed
    past ``date.max``.
    """
    offset = (target - today).days
    match keyword.keyword:
        case "overdue":
            return offset < 0
        case "today":
            return offset == 0
        case "due":
            return offset <= 0
        case "tomorrow":
            return offset == 1
        case "this week":
            return 0 <= (target - _week_start(today, week_starts_on)).days < 7
        case "next week":
            return 7 <= (target - _week_start(today, week_starts_on)).days < 14
        case "this month":
            return (target.year, target.month) == (today.year, today.month)
        case "next month":
            following = _add_months(today, 1)
            if following is None:
                return False
            return (target.year, target.month) == (following.year, following.month)
        case "none":
            return False

    days = keyword.next_days
    if days is not None:
        return 0 <= offset <= days
    return False


def in_range(target: date, start: date, end: date) -> bool:
    """True when ``target`` falls in the half-open range ``[start, end)``."""
    return start <= target < end
