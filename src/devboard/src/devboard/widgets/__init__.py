"""Widget handlers and the dispatcher that selects them by kind."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable

from loguru import logger

from ..providers.base import AnalyticsProvider, HostProvider
from .analytics import analytics_handlers
from .host import host_handlers
from .registry import BuildContext, Dispatcher, WidgetHandler

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from ..surface import RenderSurface

__all__ = ["BuildContext", "Dispatcher", "WidgetHandler", "build_dispatcher"]


def build_dispatcher(
    surface: "RenderSurface",
    *,
    analytics: AnalyticsProvider | None = None,
    view_id: str = "",
    host: HostProvider | None = None,
    clock: Callable[[], date] = date.today,
) -> Dispatcher:
    """Register the handlers of every configured provider.

    Kinds of a provider that is not configured stay unregistered, so
    dispatching them raises ``UnknownWidgetKind``.
    """
    dispatcher = Dispatcher(surface, clock=clock)
    if analytics is not None:
        for handler in analytics_handlers(analytics, view_id):
            dispatcher.register(handler)
    if host is not None:
        for handler in host_handlers(host):
            dispatcher.register(handler)

    logger.info(f"Dispatcher ready with {len(dispatcher.kinds)} widget kinds: {', '.join(dispatcher.kinds)}")
    return dispatcher
