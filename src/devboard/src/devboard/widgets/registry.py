"""Kind -> handler dispatch for widget declarations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Callable, Iterable, Mapping

from loguru import logger

from ..errors import UnknownWidgetKind
from ..metrics import WIDGET_FAILURES, WIDGETS_DISPATCHED, provider_of
from ..models import DeferredRenderAction, RenderPrimitive, WidgetSpec

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from ..surface import RenderSurface


@dataclass(frozen=True, slots=True)
class BuildContext:
    """What a handler needs besides the widget itself."""

    surface: "RenderSurface"
    today: date

    def action(
        self, kind: str, primitive: RenderPrimitive, title: str, options: Mapping[str, str]
    ) -> DeferredRenderAction:
        return DeferredRenderAction(surface=self.surface, kind=kind, primitive=primitive, title=title, options=options)


class WidgetHandler(ABC):
    """Builds the deferred action of one widget kind.

    ``build`` runs the fetch eagerly; the returned action only draws.
    """

    kind: str

    @abstractmethod
    def build(self, spec: WidgetSpec, context: BuildContext) -> DeferredRenderAction:
        ...


class Dispatcher:
    """Turns widget declarations into deferred render actions."""

    def __init__(
        self,
        surface: "RenderSurface",
        handlers: Iterable[WidgetHandler] = (),
        clock: Callable[[], date] = date.today,
    ):
        self._surface = surface
        self._clock = clock
        self._handlers: dict[str, WidgetHandler] = {}
        for handler in handlers:
            self.register(handler)

    def register(self, handler: WidgetHandler) -> None:
        if handler.kind in self._handlers:
            raise ValueError(f"a handler is already registered for {handler.kind}")
        self._handlers[handler.kind] = handler

    @property
    def kinds(self) -> list[str]:
        return sorted(self._handlers)

    def dispatch(self, spec: WidgetSpec) -> DeferredRenderAction:
        """Fetch and shape the data of ``spec`` and return the action that draws it.

        Raises:
            UnknownWidgetKind: No handler is registered for ``spec.kind``.
        """
        handler = self._handlers.get(spec.kind)
        if handler is None:
            WIDGET_FAILURES.labels(provider=provider_of(spec.kind), kind=spec.kind).inc()
            logger.warning(f"Widget {spec.kind} failed: no handler registered for this kind")
            raise UnknownWidgetKind(spec.kind)

        context = BuildContext(surface=self._surface, today=self._clock())
        try:
            action = handler.build(spec, context)
        except Exception as e:
            WIDGET_FAILURES.labels(provider=provider_of(spec.kind), kind=spec.kind).inc()
            logger.warning(f"Widget {spec.kind} failed: {type(e).__name__}: {e}")
            raise

        WIDGETS_DISPATCHED.labels(provider=provider_of(spec.kind), kind=spec.kind).inc()
        return action

    def dispatch_all(self, specs: Iterable[WidgetSpec]) -> list[DeferredRenderAction]:
        """Dispatch every widget, stopping at the first failure."""
        return [self.dispatch(spec) for spec in specs]
