"""Rich-based rendering surface for built widgets.

The surface only queues panels for the current draw pass; it never fetches or
validates widget data. ``flush`` hands the queued panels over and starts a new
pass.
"""

from __future__ import annotations

from typing import Mapping, Protocol

from blessed import Terminal
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .chart import plot_bars, plot_stacked_bars
from .colors import color_lookup
from .models import BarPrimitive, RenderPrimitive, StackedBarPrimitive, TablePrimitive, TextPrimitive
from .options import extract_int

# Presentation options read by the surface
OPTION_BORDER_COLOR = "border_color"
OPTION_TITLE_COLOR = "title_color"
OPTION_TEXT_COLOR = "text_color"
OPTION_BAR_COLOR = "bar_color"
OPTION_HEIGHT = "height"
OPTION_BAR_WIDTH = "bar_width"
OPTION_BAR_GAP = "bar_gap"

DEFAULT_CHART_HEIGHT = 8
DEFAULT_BAR_GAP = 1


class RenderSurface(Protocol):
    def draw(self, primitive: RenderPrimitive, title: str, options: Mapping[str, str]) -> None:
        """Queue ``primitive`` into the current draw pass."""


class RichSurface:
    """Collects widget panels for one draw pass."""

    def __init__(self, width: int | None = None):
        self._width = width
        self._panels: list[Panel] = []

    @property
    def width(self) -> int:
        if self._width is not None:
            return self._width
        try:
            return Terminal().width or 120
        except Exception:
            return 120

    def draw(self, primitive: RenderPrimitive, title: str, options: Mapping[str, str]) -> None:
        if isinstance(primitive, TextPrimitive):
            body = Text(primitive.text, style=f"bold {color_lookup(options.get(OPTION_TEXT_COLOR, 'yellow'))}")
        elif isinstance(primitive, BarPrimitive):
            body = plot_bars(primitive.values, primitive.labels, self._chart_config(options, len(primitive.labels)))
        elif isinstance(primitive, StackedBarPrimitive):
            body = plot_stacked_bars(
                [values for _, values in primitive.series],
                primitive.labels,
                primitive.colors,
                self._chart_config(options, len(primitive.labels)),
            )
        elif isinstance(primitive, TablePrimitive):
            body = self._table(primitive, options)
        else:
            raise TypeError(f"cannot draw {type(primitive).__name__}")

        self._panels.append(self._panel(body, title, options))

    def draw_error(self, kind: str, error: BaseException) -> None:
        """Queue a red panel in place of a widget that failed to build."""
        self._panels.append(
            Panel(
                Text(f"{type(error).__name__}: {error}", style="red"),
                title=kind,
                border_style="red",
                padding=(0, 1),
            )
        )

    def flush(self) -> Group:
        """Return every queued panel and clear the pass."""
        group = Group(*self._panels)
        self._panels = []
        return group

    def __len__(self) -> int:
        return len(self._panels)

    def _panel(self, body, title: str, options: Mapping[str, str]) -> Panel:
        title_style = color_lookup(options.get(OPTION_TITLE_COLOR, "magenta"))
        return Panel(
            body,
            title=Text(title, style=f"bold {title_style}") if title else None,
            border_style=color_lookup(options.get(OPTION_BORDER_COLOR, "cyan")),
            padding=(0, 1),
        )

    def _table(self, primitive: TablePrimitive, options: Mapping[str, str]) -> Table:
        table = Table(
            show_header=True,
            header_style="bold magenta",
            border_style=color_lookup(options.get(OPTION_BORDER_COLOR, "bright_blue")),
            box=None,
            padding=(0, 1),
        )
        for index, header in enumerate(primitive.header):
            if index == 0:
                table.add_column(header, style="cyan", no_wrap=True)
            else:
                table.add_column(header, justify="right", style="yellow", no_wrap=True)
        for row in primitive.body:
            table.add_row(*row)
        return table

    def _chart_config(self, options: Mapping[str, str], bars: int) -> dict:
        gap = extract_int(options, OPTION_BAR_GAP, DEFAULT_BAR_GAP)
        # Fit every bar in the panel: borders and padding take 4 columns.
        fitted = (self.width - 4) // max(bars, 1) - gap
        return {
            "height": extract_int(options, OPTION_HEIGHT, DEFAULT_CHART_HEIGHT),
            "bar_width": extract_int(options, OPTION_BAR_WIDTH, max(3, min(8, fitted))),
            "gap": gap,
            "bar_color": color_lookup(options.get(OPTION_BAR_COLOR, "blue")),
        }
