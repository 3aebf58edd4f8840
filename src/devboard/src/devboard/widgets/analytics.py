"""Analytics widgets (``ga.*`` kinds).

Every bar variant goes through :class:`BarHandler` and every table through
:class:`TableHandler`; variants only differ by the options they force before
delegating.
"""

from __future__ import annotations

from typing import Mapping

from loguru import logger

from ..errors import MissingRequiredOption
from ..models import DeferredRenderAction, TextPrimitive, WidgetSpec
from ..options import (
    DEFAULT_CHAR_LIMIT,
    DEFAULT_ROW_LIMIT,
    OPTION_CHAR_LIMIT,
    OPTION_DIMENSION,
    OPTION_DIMENSIONS,
    OPTION_FILTERS,
    OPTION_GLOBAL,
    OPTION_METRIC,
    OPTION_METRICS,
    OPTION_ROW_LIMIT,
    extract_bool,
    extract_colors,
    extract_dimensions,
    extract_filters,
    extract_int,
    extract_list,
    extract_metric,
    extract_orders,
    extract_time_period,
    extract_time_range,
    extract_title,
    overlay,
)
from ..providers.base import X_HEADER_OTHER_DIM, X_HEADER_TIME, AnalyticsProvider, AnalyticsQuery
from ..shaping import bar_title, shape_bar, shape_stacked_bar, shape_table
from ..timer_logger import FetchTimer
from .registry import BuildContext, WidgetHandler

GA_BOX_REALTIME = "ga.box_real_time"
GA_BOX_TOTAL = "ga.box_total"
GA_BAR = "ga.bar"
GA_BAR_SESSIONS = "ga.bar_sessions"
GA_BAR_BOUNCES = "ga.bar_bounces"
GA_BAR_USERS = "ga.bar_users"
GA_BAR_RETURNING = "ga.bar_returning"
GA_BAR_NEW_RETURNING = "ga.bar_new_returning"
GA_BAR_PAGES = "ga.bar_pages"
GA_BAR_COUNTRIES = "ga.bar_countries"
GA_BAR_DEVICES = "ga.bar_devices"
GA_TABLE_PAGES = "ga.table_pages"
GA_TABLE_TRAFFIC_SOURCES = "ga.table_traffic_sources"
GA_TABLE = "ga.table"

DEFAULT_TABLE_DIMENSION = "page_path"
DEFAULT_TABLE_METRICS = ("sessions", "page_views", "entrances", "unique_page_views")


class AnalyticsHandler(WidgetHandler):
    def __init__(self, kind: str, provider: AnalyticsProvider, view_id: str):
        self.kind = kind
        self.provider = provider
        self.view_id = view_id


class RealtimeUsersHandler(AnalyticsHandler):
    """Point-in-time active users; no date range."""

    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        title = extract_title(spec.options, "Real time users")

        with FetchTimer(self.kind, {"view_id": self.view_id}):
            users = self.provider.realtime_users(self.view_id)

        return context.action(self.kind, TextPrimitive(str(users)), title, spec.options)


class TotalMetricHandler(AnalyticsHandler):
    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        options = spec.options
        date_range = extract_time_range(context.today, options)
        metric = extract_metric(options)
        global_ = extract_bool(options, OPTION_GLOBAL)
        title = extract_title(options, f"Total {metric} from {date_range.start_iso} to {date_range.end_iso}")

        query = AnalyticsQuery(
            view_id=self.view_id,
            start_date=date_range.start_iso,
            end_date=date_range.end_iso,
            metrics=(metric,),
            global_=global_,
        )
        with FetchTimer(self.kind, {"start": query.start_date, "end": query.end_date}):
            total = self.provider.simple_metric(query)

        return context.action(self.kind, TextPrimitive(str(total)), title, options)


class BarHandler(AnalyticsHandler):
    """Single series bar chart shared by every ``ga.bar*`` kind.

    Args:
        kind: Widget kind handled.
        provider: Analytics provider.
        view_id: Analytics view queried.
        forced: Options replacing the caller's before anything is resolved.
        required: Option that must be present and non-empty.
        required_hint: Explanation appended to the missing option error.
        default_title: Title used instead of ``"<Metric> per <period>"``.
        title_option: Option whose value becomes the default title when present.
        x_header: Axis hint forwarded to the provider.
    """

    def __init__(
        self,
        kind: str,
        provider: AnalyticsProvider,
        view_id: str,
        *,
        forced: Mapping[str, str] | None = None,
        required: str | None = None,
        required_hint: str = "",
        default_title: str | None = None,
        title_option: str | None = None,
        x_header: str = X_HEADER_TIME,
    ):
        super().__init__(kind, provider, view_id)
        self.forced = dict(forced or {})
        self.required = required
        self.required_hint = required_hint
        self.default_title = default_title
        self.title_option = title_option
        self.x_header = x_header

    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        options = overlay(spec.options, self.forced)
        if self.required and not options.get(self.required, "").strip():
            raise MissingRequiredOption(self.kind, self.required, self.required_hint)

        global_ = extract_bool(options, OPTION_GLOBAL)
        date_range = extract_time_range(context.today, options)
        filters = extract_filters(options)
        time_period = extract_time_period(options)
        metric = extract_metric(options)
        title = extract_title(options, self._default_title(options, metric, time_period))

        query = AnalyticsQuery(
            view_id=self.view_id,
            start_date=date_range.start_iso,
            end_date=date_range.end_iso,
            time_period=time_period,
            global_=global_,
            metrics=(metric,),
            dimensions=tuple(extract_dimensions(options)),
            filters=tuple(filters),
            x_header=self.x_header,
        )
        logger.debug(f"Fetching {self.kind} ({metric}) from {query.start_date} to {query.end_date}")
        with FetchTimer(self.kind, {"metric": metric, "start": query.start_date, "end": query.end_date}):
            labels, values = self.provider.bar_metric(query)

        return context.action(self.kind, shape_bar(labels, values), title, options)

    def _default_title(self, options: Mapping[str, str], metric: str, time_period: str) -> str:
        if self.title_option and options.get(self.title_option):
            return options[self.title_option]
        if self.default_title is not None:
            return self.default_title
        return bar_title(metric, time_period)


class TableHandler(AnalyticsHandler):
    """Top rows of one dimension with several metric columns.

    ``first_header`` labels the dimension column; when ``None`` the resolved
    dimension name is used.
    """

    def __init__(
        self,
        kind: str,
        provider: AnalyticsProvider,
        view_id: str,
        *,
        first_header: str | None = None,
        forced: Mapping[str, str] | None = None,
    ):
        super().__init__(kind, provider, view_id)
        self.first_header = first_header
        self.forced = dict(forced or {})

    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        options = overlay(spec.options, self.forced)

        global_ = extract_bool(options, OPTION_GLOBAL)
        dimension = options.get(OPTION_DIMENSION, "").strip() or DEFAULT_TABLE_DIMENSION
        metrics = extract_list(options, OPTION_METRICS, default=DEFAULT_TABLE_METRICS)
        orders = extract_orders(options, metrics[0])
        date_range = extract_time_range(context.today, options)
        filters = extract_filters(options)
        row_limit = extract_int(options, OPTION_ROW_LIMIT, DEFAULT_ROW_LIMIT)
        char_limit = extract_int(options, OPTION_CHAR_LIMIT, DEFAULT_CHAR_LIMIT)

        first_header = self.first_header or dimension
        title = extract_title(options, f"{first_header} from {date_range.start_iso} to {date_range.end_iso}")

        query = AnalyticsQuery(
            view_id=self.view_id,
            start_date=date_range.start_iso,
            end_date=date_range.end_iso,
            global_=global_,
            metrics=tuple(metrics),
            dimensions=(dimension,),
            filters=tuple(filters),
            orders=tuple(orders),
            row_limit=row_limit,
        )
        logger.debug(f"Fetching {self.kind} ({dimension} x {metrics}) from {query.start_date} to {query.end_date}")
        with FetchTimer(self.kind, {"dimension": dimension, "start": query.start_date, "end": query.end_date}):
            headers, labels, values = self.provider.table(query, first_header)

        table = shape_table(row_limit, labels, values, char_limit, headers)
        return context.action(self.kind, table, title, options)


class StackedBarHandler(AnalyticsHandler):
    """One bar per label, stacked by the series of the forced dimension."""

    def __init__(self, kind: str, provider: AnalyticsProvider, view_id: str, *, forced: Mapping[str, str]):
        super().__init__(kind, provider, view_id)
        self.forced = dict(forced)

    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        options = overlay(spec.options, self.forced)

        date_range = extract_time_range(context.today, options)
        time_period = extract_time_period(options)
        metric = extract_metric(options)
        palette = extract_colors(options)

        query = AnalyticsQuery(
            view_id=self.view_id,
            start_date=date_range.start_iso,
            end_date=date_range.end_iso,
            time_period=time_period,
            metrics=(metric,),
            dimensions=tuple(extract_dimensions(options)),
        )
        with FetchTimer(self.kind, {"metric": metric, "start": query.start_date, "end": query.end_date}):
            labels, series = self.provider.stacked_bar(query)

        primitive, default_title = shape_stacked_bar(metric, series, labels, palette)
        title = extract_title(options, default_title)
        return context.action(self.kind, primitive, title, options)


def analytics_handlers(provider: AnalyticsProvider, view_id: str) -> list[WidgetHandler]:
    """Every ``ga.*`` handler bound to ``provider`` and ``view_id``."""
    return [
        RealtimeUsersHandler(GA_BOX_REALTIME, provider, view_id),
        TotalMetricHandler(GA_BOX_TOTAL, provider, view_id),
        BarHandler(GA_BAR, provider, view_id),
        BarHandler(GA_BAR_SESSIONS, provider, view_id),
        BarHandler(GA_BAR_USERS, provider, view_id, forced={OPTION_METRIC: "users"}),
        BarHandler(
            GA_BAR_RETURNING,
            provider,
            view_id,
            forced={OPTION_METRIC: "users", OPTION_DIMENSIONS: "user_type"},
            default_title="Returning users",
        ),
        BarHandler(
            GA_BAR_PAGES,
            provider,
            view_id,
            forced={OPTION_DIMENSIONS: "page_path", OPTION_METRIC: "page_views"},
            required=OPTION_FILTERS,
            required_hint="relative url of your page, i.e '/my-super-page/'",
            title_option=OPTION_FILTERS,
        ),
        BarHandler(
            GA_BAR_COUNTRIES,
            provider,
            view_id,
            forced={OPTION_DIMENSIONS: "country", OPTION_METRIC: "sessions"},
            title_option=OPTION_FILTERS,
            x_header=X_HEADER_OTHER_DIM,
        ),
        BarHandler(GA_BAR_BOUNCES, provider, view_id, forced={OPTION_METRIC: "bounces"}, default_title="Bounces"),
        TableHandler(GA_TABLE, provider, view_id),
        TableHandler(GA_TABLE_PAGES, provider, view_id, first_header="Page"),
        TableHandler(
            GA_TABLE_TRAFFIC_SOURCES,
            provider,
            view_id,
            first_header="Source",
            forced={OPTION_DIMENSION: "traffic_source"},
        ),
        StackedBarHandler(GA_BAR_NEW_RETURNING, provider, view_id, forced={OPTION_DIMENSIONS: "user_type"}),
        StackedBarHandler(GA_BAR_DEVICES, provider, view_id, forced={OPTION_DIMENSIONS: "device_category"}),
    ]
