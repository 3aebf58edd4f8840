"""Host widgets (``rh.*`` kinds)."""

from __future__ import annotations

from ..models import DeferredRenderAction, TextPrimitive, WidgetSpec
from ..options import OPTION_METRICS, OPTION_UNIT, extract_list, extract_title
from ..providers.base import HostProvider
from ..shaping import format_uptime, shape_bar
from ..timer_logger import FetchTimer
from .registry import BuildContext, WidgetHandler

RH_UPTIME = "rh.box_uptime"
RH_MEMORY = "rh.bar_memory"

DEFAULT_MEMORY_METRICS = ("MemTotal", "MemFree", "MemAvailable")
DEFAULT_MEMORY_UNIT = "kb"


class HostHandler(WidgetHandler):
    def __init__(self, kind: str, provider: HostProvider):
        self.kind = kind
        self.provider = provider


class UptimeHandler(HostHandler):
    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        title = extract_title(spec.options, "Uptime")

        with FetchTimer(self.kind):
            uptime = self.provider.uptime()

        return context.action(self.kind, TextPrimitive(format_uptime(uptime)), title, spec.options)


class MemoryHandler(HostHandler):
    """One bar per ``/proc/meminfo`` figure."""

    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        options = spec.options
        title = extract_title(options, "Memory")
        metrics = extract_list(options, OPTION_METRICS, default=DEFAULT_MEMORY_METRICS)
        unit = options.get(OPTION_UNIT, DEFAULT_MEMORY_UNIT)

        with FetchTimer(self.kind, {"metrics": metrics, "unit": unit}):
            values = self.provider.memory(metrics, unit)

        return context.action(self.kind, shape_bar(metrics, values), title, options)


def host_handlers(provider: HostProvider) -> list[WidgetHandler]:
    return [UptimeHandler(RH_UPTIME, provider), MemoryHandler(RH_MEMORY, provider)]
