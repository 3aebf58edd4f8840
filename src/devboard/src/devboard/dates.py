"""Relative date expressions.

Widgets describe their time range with two strings such as ``"7_days_ago"``
and ``"today"``. Each side is resolved on its own against a base date:

    >>> resolve(date(2019, 1, 15), "this_month", "today")
    DateRange(start=datetime.date(2019, 1, 1), end=datetime.date(2019, 1, 15))

Categories are matched by substring containment, in a fixed order, so
``"last_weekend"`` still resolves as ``"last_week"``. Anything unmatched is
parsed as a literal ``YYYY-MM-DD`` date.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Callable

from .errors import InvalidDateExpression
from .models import DateRange

__all__ = [
    "ISO_FORMAT",
    "extract_count_period",
    "month_bounds",
    "parse_iso",
    "resolve",
    "resolve_alias",
    "week_bounds",
    "year_bounds",
]

ISO_FORMAT = "%Y-%m-%d"
_ISO_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

TODAY = "today"
DAYS_AGO = "days_ago"
THIS_WEEK = "this_week"
WEEKS_AGO = "weeks_ago"
THIS_MONTH = "this_month"
MONTHS_AGO = "months_ago"
THIS_YEAR = "this_year"
YEARS_AGO = "years_ago"

# Checked in order, first match wins.
ALIASES = (
    ("yesterday", "1_days_ago"),
    ("last_week", "1_weeks_ago"),
    ("last_month", "1_months_ago"),
    ("last_year", "1_years_ago"),
)


def resolve(now: date, start_expr: str, end_expr: str) -> DateRange:
    """Convert a start/end expression pair into concrete dates relative to ``now``."""
    if isinstance(now, datetime):
        now = now.date()

    start = _convert(now, resolve_alias(start_expr), boundary=_first)
    end = _convert(now, resolve_alias(end_expr), boundary=_last)
    return DateRange(start=start, end=end)


def resolve_alias(expression: str) -> str:
    """Rewrite ``yesterday``/``last_*`` shorthands to their ``1_<unit>_ago`` form."""
    for alias, canonical in ALIASES:
        if alias in expression:
            return canonical
    return expression


def extract_count_period(expression: str) -> int:
    """Return the count of a period, ``5`` for ``"5_weeks_ago"``."""
    prefix = expression.split("_")[0]
    try:
        return int(prefix)
    except ValueError as exc:
        raise InvalidDateExpression(expression, f"has a count {prefix!r} that is not a valid number") from exc


def _first(bounds: tuple[date, date]) -> date:
    return bounds[0]


def _last(bounds: tuple[date, date]) -> date:
    return bounds[1]


def _convert(base: date, expression: str, *, boundary: Callable[[tuple[date, date]], date]) -> date:
    try:
        return _convert_relative(base, expression, boundary=boundary)
    except (OverflowError, ValueError) as exc:
        raise InvalidDateExpression(expression, "is outside the supported calendar range") from exc


def _convert_relative(base: date, expression: str, *, boundary: Callable[[tuple[date, date]], date]) -> date:
    if TODAY in expression:
        return base

    if DAYS_AGO in expression:
        return base - timedelta(days=extract_count_period(expression))

    if THIS_WEEK in expression:
        return boundary(week_bounds(base, 0))

    if WEEKS_AGO in expression:
        return boundary(week_bounds(base, extract_count_period(expression)))

    if THIS_MONTH in expression:
        return boundary(month_bounds(base, 0))

    if MONTHS_AGO in expression:
        return boundary(month_bounds(base, extract_count_period(expression)))

    if THIS_YEAR in expression:
        return boundary(year_bounds(base, 0))

    if YEARS_AGO in expression:
        return boundary(year_bounds(base, extract_count_period(expression)))

    return parse_iso(expression)


def parse_iso(expression: str) -> date:
    """Parse a literal, zero padded ``YYYY-MM-DD`` date."""
    try:
        if not _ISO_SHAPE.fullmatch(expression):
            raise ValueError(f"{expression!r} is not zero padded YYYY-MM-DD")
        return datetime.strptime(expression, ISO_FORMAT).date()
    except ValueError as exc:
        raise InvalidDateExpression(expression, "is not a valid YYYY-MM-DD date") from exc


def week_bounds(base: date, weeks_ago: int) -> tuple[date, date]:
    """Monday and Sunday of the week ``weeks_ago`` weeks before the week of ``base``."""
    monday = base - timedelta(days=base.weekday(), weeks=weeks_ago)
    return monday, monday + timedelta(days=6)


def month_bounds(base: date, months_ago: int) -> tuple[date, date]:
    """First and last day of the month ``months_ago`` months before ``base``."""
    month_index = base.year * 12 + (base.month - 1) - months_ago
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def year_bounds(base: date, years_ago: int) -> tuple[date, date]:
    year = base.year - years_ago
    return date(year, 1, 1), date(year, 12, 31)
