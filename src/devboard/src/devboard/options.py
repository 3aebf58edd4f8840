"""Typed extraction of widget options.

Widget options are always strings. The helpers below coerce them and apply
the documented defaults. None of them mutate the mapping they receive;
handlers that need to force a value use :func:`overlay`, which returns a new
read-only mapping.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping, Sequence

from .colors import COLOR_OPTIONS, STACKED_PALETTE, color_lookup
from .dates import resolve
from .errors import InvalidOptionValue
from .models import DateRange, freeze_options

# Option names
OPTION_TITLE = "title"
OPTION_START_DATE = "start_date"
OPTION_END_DATE = "end_date"
OPTION_METRIC = "metric"
OPTION_METRICS = "metrics"
OPTION_DIMENSION = "dimension"
OPTION_DIMENSIONS = "dimensions"
OPTION_FILTERS = "filters"
OPTION_ORDER = "order"
OPTION_ROW_LIMIT = "row_limit"
OPTION_CHAR_LIMIT = "char_limit"
OPTION_TIME_PERIOD = "time_period"
OPTION_GLOBAL = "global"
OPTION_UNIT = "unit"

DEFAULT_START_DATE = "7_days_ago"
DEFAULT_END_DATE = "today"
DEFAULT_METRIC = "sessions"
DEFAULT_TIME_PERIOD = "day"
DEFAULT_ROW_LIMIT = 5
DEFAULT_CHAR_LIMIT = 20

# Same spellings as Go's strconv.ParseBool, which older dashboard files rely on.
_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def overlay(options: Mapping[str, str], forced: Mapping[str, str]) -> Mapping[str, str]:
    """Return a new read-only mapping where ``forced`` replaces the caller's values."""
    merged = dict(options)
    merged.update(forced)
    return freeze_options(merged)


def split_list(value: str) -> list[str]:
    """Split a comma separated option, trimming items and dropping empty ones."""
    return [item.strip() for item in value.split(",") if item.strip()]


def extract_list(options: Mapping[str, str], key: str, default: Sequence[str] = ()) -> list[str]:
    """Return the comma separated option ``key`` or ``default`` when absent or blank."""
    items = split_list(options.get(key, ""))
    if not items:
        return list(default)
    return items


def extract_metric(options: Mapping[str, str]) -> str:
    return options.get(OPTION_METRIC, DEFAULT_METRIC)


def extract_dimensions(options: Mapping[str, str]) -> list[str]:
    return extract_list(options, OPTION_DIMENSIONS)


def extract_filters(options: Mapping[str, str]) -> list[str]:
    return extract_list(options, OPTION_FILTERS)


def extract_orders(options: Mapping[str, str], primary_metric: str) -> list[str]:
    """Return the ``order`` option, ordering by ``primary_metric`` descending by default."""
    return extract_list(options, OPTION_ORDER, default=[f"{primary_metric} desc"])


def extract_time_period(options: Mapping[str, str]) -> str:
    return options.get(OPTION_TIME_PERIOD, DEFAULT_TIME_PERIOD).strip()


def extract_bool(options: Mapping[str, str], key: str) -> bool:
    """Parse a boolean flag. Absent means ``False``."""
    if key not in options:
        return False

    value = options[key]
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidOptionValue(key, value, "a boolean")


def extract_int(options: Mapping[str, str], key: str, default: int) -> int:
    """Parse a non-negative integer option such as ``row_limit``."""
    if key not in options:
        return default

    value = options[key]
    try:
        number = int(value.strip())
    except ValueError as exc:
        raise InvalidOptionValue(key, value, "a number") from exc
    if number < 0:
        raise InvalidOptionValue(key, value, "a non-negative number")
    return number


def extract_time_range(now: date, options: Mapping[str, str]) -> DateRange:
    """Resolve ``start_date``/``end_date``, defaulting to the last seven days."""
    return resolve(
        now,
        options.get(OPTION_START_DATE, DEFAULT_START_DATE),
        options.get(OPTION_END_DATE, DEFAULT_END_DATE),
    )


def extract_title(options: Mapping[str, str], default: str) -> str:
    """An explicit ``title`` always wins over the computed ``default``."""
    if OPTION_TITLE in options:
        return options[OPTION_TITLE]
    return default


def extract_colors(options: Mapping[str, str]) -> list[str]:
    """Return the five stacked bar colors, each overridable by its ``*_color`` option."""
    colors = list(STACKED_PALETTE)
    for slot, key in enumerate(COLOR_OPTIONS):
        if key in options:
            colors[slot] = color_lookup(options[key])
    return colors
