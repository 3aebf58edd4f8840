"""Interfaces the widget handlers fetch through."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

# Hint telling an analytics provider how to label the x axis of a bar chart.
X_HEADER_TIME = "time"
X_HEADER_OTHER_DIM = "other_dimension"


@dataclass(frozen=True, slots=True)
class AnalyticsQuery:
    """Resolved options of one analytics fetch."""

    view_id: str
    start_date: str
    end_date: str
    metrics: tuple[str, ...]
    dimensions: tuple[str, ...] = ()
    filters: tuple[str, ...] = ()
    orders: tuple[str, ...] = ()
    time_period: str = "day"
    global_: bool = False
    row_limit: int | None = None
    x_header: str = X_HEADER_TIME


class AnalyticsProvider(Protocol):
    """Web analytics source (Google Analytics style reporting API)."""

    def realtime_users(self, view_id: str) -> str:
        """Point-in-time count of active users."""

    def simple_metric(self, query: AnalyticsQuery) -> str:
        """Total of ``query.metrics[0]`` over the range."""

    def bar_metric(self, query: AnalyticsQuery) -> tuple[Sequence[str], Sequence[int]]:
        """Axis labels and one value per label."""

    def table(
        self, query: AnalyticsQuery, first_header: str
    ) -> tuple[Sequence[str], Sequence[str], Sequence[Sequence[str]]]:
        """Header labels, one dimension label per row and the metric value grid."""

    def stacked_bar(self, query: AnalyticsQuery) -> tuple[Sequence[str], Mapping[str, Sequence[int]]]:
        """Shared axis labels and the values of each named series."""


class HostProvider(Protocol):
    """Stats of a host, local or remote."""

    def uptime(self) -> float:
        """Seconds since boot."""

    def memory(self, metrics: Sequence[str], unit: str) -> list[int]:
        """``/proc/meminfo`` style figures, one per metric, in ``unit``."""
