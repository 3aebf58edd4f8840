"""Data models shared by the widget pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Union

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from .surface import RenderSurface

STACKED_BAR_CAPACITY = 8


def freeze_options(options: Mapping[str, str] | None) -> Mapping[str, str]:
    """Return a read-only copy of ``options``."""
    return MappingProxyType(dict(options or {}))


@dataclass(frozen=True, slots=True)
class WidgetSpec:
    """One declared widget: its kind and its raw string options."""

    kind: str
    options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", freeze_options(self.options))

    @classmethod
    def from_declaration(cls, declaration: Mapping[str, object]) -> "WidgetSpec":
        """Build a spec from a ``{"name": ..., "options": {...}}`` declaration."""
        raw_options = declaration.get("options") or {}
        if not isinstance(raw_options, Mapping):
            raise TypeError(f"options of widget {declaration.get('name')!r} must be a mapping")
        options = {str(key): str(value) for key, value in raw_options.items()}
        return cls(kind=str(declaration["name"]), options=options)


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive calendar range. ``start > end`` is allowed and passed through."""

    start: date
    end: date

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()


@dataclass(frozen=True, slots=True)
class TextPrimitive:
    text: str


@dataclass(frozen=True, slots=True)
class BarPrimitive:
    values: tuple[int, ...]
    labels: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class StackedBarPrimitive:
    """Up to ``STACKED_BAR_CAPACITY`` named series sharing one set of labels.

    ``colors`` is aligned with ``series``.
    """

    series: tuple[tuple[str, tuple[int, ...]], ...]
    labels: tuple[str, ...]
    colors: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.series) > STACKED_BAR_CAPACITY:
            raise ValueError(f"a stacked bar holds at most {STACKED_BAR_CAPACITY} series")
        if len(self.colors) != len(self.series):
            raise ValueError("colors must be aligned with series")


@dataclass(frozen=True, slots=True)
class TablePrimitive:
    """Table rows, row 0 being the header."""

    rows: tuple[tuple[str, ...], ...]

    @property
    def header(self) -> tuple[str, ...]:
        return self.rows[0]

    @property
    def body(self) -> tuple[tuple[str, ...], ...]:
        return self.rows[1:]


RenderPrimitive = Union[TextPrimitive, BarPrimitive, StackedBarPrimitive, TablePrimitive]


@dataclass(frozen=True, slots=True)
class DeferredRenderAction:
    """Already-fetched widget data waiting for the draw pass.

    Calling the action queues the primitive on the surface. It never fetches.
    """

    surface: "RenderSurface"
    kind: str
    primitive: RenderPrimitive
    title: str
    options: Mapping[str, str] = field(default_factory=dict)

    def __call__(self) -> None:
        self.surface.draw(self.primitive, self.title, self.options)
