"""Chart generation utilities for the terminal surface."""

from math import ceil
from typing import Optional, Sequence

from rich.text import Text


def _fit(text: str, width: int) -> str:
    """Center ``text`` in ``width`` columns, cutting it when too long."""
    return text[:width].center(width)


def _scale(values: list, height: int, maximum: Optional[float]) -> list:
    top = maximum if maximum is not None else max(values, default=0)
    if top <= 0:
        return [0 for _ in values]
    return [min(height, int(ceil(v * height / top))) if v > 0 else 0 for v in values]


def plot_bars(values: Sequence[int], labels: Sequence[str], cfg: Optional[dict] = None) -> Text:
    """Generate a vertical ascii bar chart, one bar per label."""
    if len(values) == 0:
        return Text("")

    cfg = cfg or {}
    height = cfg.get("height", 8)
    bar_width = cfg.get("bar_width", 6)
    gap = cfg.get("gap", 1)
    bar_color = cfg.get("bar_color", "blue")
    number_color = cfg.get("number_color", "default")
    symbol = cfg.get("symbol", "█")

    values = list(values)
    levels = _scale(values, height, cfg.get("max"))
    spacer = " " * gap

    chart = Text(no_wrap=True, overflow="crop")
    for y in range(height, 0, -1):
        for i, level in enumerate(levels):
            if i:
                chart.append(spacer)
            chart.append(symbol * bar_width if level >= y else " " * bar_width, style=bar_color)
        chart.append("\n")

    chart.append(spacer.join(_fit(str(v), bar_width) for v in values), style=number_color)
    chart.append("\n")
    chart.append(spacer.join(_fit(str(label), bar_width) for label in labels))
    return chart


def plot_stacked_bars(
    series: Sequence[Sequence[int]],
    labels: Sequence[str],
    colors: Sequence[str],
    cfg: Optional[dict] = None,
) -> Text:
    """Generate a stacked ascii bar chart, series drawn bottom-up in order."""
    if len(series) == 0 or len(labels) == 0:
        return Text("")

    cfg = cfg or {}
    height = cfg.get("height", 8)
    bar_width = cfg.get("bar_width", 6)
    gap = cfg.get("gap", 1)
    symbol = cfg.get("symbol", "█")

    # totals per label; missing values in shorter series count as 0
    columns = len(labels)
    grid = [[(s[x] if x < len(s) else 0) for x in range(columns)] for s in series]
    totals = [sum(row[x] for row in grid) for x in range(columns)]
    top = max(totals, default=0)
    spacer = " " * gap

    # cells[x] holds the series index of each level, bottom first
    cells = []
    for x in range(columns):
        column = []
        running = 0
        for index, row in enumerate(grid):
            running += row[x]
            reached = int(ceil(running * height / top)) if top > 0 and running > 0 else 0
            column.extend([index] * (min(reached, height) - len(column)))
        cells.append(column)

    chart = Text(no_wrap=True, overflow="crop")
    for y in range(height, 0, -1):
        for x, column in enumerate(cells):
            if x:
                chart.append(spacer)
            if len(column) >= y:
                chart.append(symbol * bar_width, style=colors[column[y - 1]])
            else:
                chart.append(" " * bar_width)
        chart.append("\n")

    chart.append(spacer.join(_fit(str(total), bar_width) for total in totals))
    chart.append("\n")
    chart.append(spacer.join(_fit(str(label), bar_width) for label in labels))
    return chart
