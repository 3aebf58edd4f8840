"""Shape raw provider results into render primitives.

Everything here is pure: no fetching, no terminal access.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence

from loguru import logger

from .colors import DEFAULT
from .models import (
    STACKED_BAR_CAPACITY,
    BarPrimitive,
    StackedBarPrimitive,
    TablePrimitive,
)

_WORD_START = re.compile(r"(^|[^0-9A-Za-z_])([a-z])")
DAY = 24 * 3600


def title_case(text: str) -> str:
    """Capitalise the first letter of every word.

    Underscores do not split words, so ``"page_views"`` becomes ``"Page_views"``.
    """
    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), text)


def bar_title(metric: str, time_period: str) -> str:
    return f"{title_case(metric)} per {time_period}"


def truncate_label(label: str, char_limit: int) -> str:
    """Trim surrounding whitespace and keep the first ``char_limit`` characters."""
    return label.strip()[:char_limit]


def shape_table(
    row_limit: int,
    labels: Sequence[str],
    values: Sequence[Sequence[object]],
    char_limit: int,
    headers: Sequence[str],
) -> TablePrimitive:
    """Build a table whose first row is ``headers``.

    Args:
        row_limit: Maximum number of data rows kept.
        labels: Dimension label of each row, parallel to ``values``.
        values: Metric values of each row.
        char_limit: Maximum length of a dimension label.
        headers: Header row, dimension header first.
    """
    rows: list[tuple[str, ...]] = [tuple(str(header) for header in headers)]
    kept = min(row_limit, len(values))
    for label, row_values in zip(labels[:kept], values[:kept]):
        rows.append((truncate_label(label, char_limit), *(str(value) for value in row_values)))
    return TablePrimitive(rows=tuple(rows))


def shape_bar(labels: Sequence[str], values: Sequence[int]) -> BarPrimitive:
    """Pair one metric's values with its axis labels."""
    return BarPrimitive(values=tuple(int(value) for value in values), labels=tuple(labels))


def shape_stacked_bar(
    metric: str,
    series: Mapping[str, Sequence[int]],
    labels: Sequence[str],
    palette: Sequence[str],
) -> tuple[StackedBarPrimitive, str]:
    """Place named series into a stacked bar and compute its default title.

    Series are placed in encounter order. Beyond ``STACKED_BAR_CAPACITY`` the
    remaining series are dropped and logged. Series without a palette slot get
    the neutral ``default`` color.

    Returns:
        The primitive and a title such as ``"Sessions - New Visitor (blue) / Returning Visitor (green)"``.
    """
    names = list(series)
    if len(names) > STACKED_BAR_CAPACITY:
        dropped = names[STACKED_BAR_CAPACITY:]
        logger.warning(
            f"Stacked bar for {metric} holds {STACKED_BAR_CAPACITY} series, dropping {len(dropped)}: {dropped}"
        )
        names = names[:STACKED_BAR_CAPACITY]

    placed: list[tuple[str, tuple[int, ...]]] = []
    colors: list[str] = []
    for slot, name in enumerate(names):
        placed.append((name, tuple(int(value) for value in series[name])))
        colors.append(palette[slot] if slot < len(palette) else DEFAULT)

    legend = " / ".join(f"{name} ({color})" for name, color in zip(names, colors))
    title = f"{title_case(metric).strip('_')} - {legend}".rstrip(" -")

    primitive = StackedBarPrimitive(series=tuple(placed), labels=tuple(labels), colors=tuple(colors))
    return primitive, title


def format_uptime(seconds: float) -> str:
    """Format an uptime as ``"2d 3h 4m 5s"``.

    Whole days are split off only while more than 24 hours remain, so exactly
    one day reads ``"24h 0m 0s"``.
    """
    remaining = max(int(seconds), 0)
    days = (remaining - 1) // DAY if remaining > DAY else 0
    remaining -= days * DAY

    hours, remaining = divmod(remaining, 3600)
    minutes, secs = divmod(remaining, 60)
    if hours:
        clock = f"{hours}h {minutes}m {secs}s"
    elif minutes:
        clock = f"{minutes}m {secs}s"
    else:
        clock = f"{secs}s"

    if days:
        return f"{days}d {clock}"
    return clock
