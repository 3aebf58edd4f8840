"""
Terminal dashboards bound to pluggable data providers.

Widget declarations are dispatched by kind into deferred render actions: the
data is fetched and shaped when the action is built, and drawn later when the
action is called. See ``devboard.widgets.build_dispatcher``.
"""

from .dates import resolve
from .errors import (
    DevboardError,
    InvalidDateExpression,
    InvalidOptionValue,
    MissingRequiredOption,
    ProviderFetchError,
    UnknownWidgetKind,
)
from .models import DateRange, DeferredRenderAction, WidgetSpec
from .widgets import Dispatcher, build_dispatcher

__all__ = [
    "DateRange",
    "DeferredRenderAction",
    "DevboardError",
    "Dispatcher",
    "InvalidDateExpression",
    "InvalidOptionValue",
    "MissingRequiredOption",
    "ProviderFetchError",
    "UnknownWidgetKind",
    "WidgetSpec",
    "build_dispatcher",
    "resolve",
]
