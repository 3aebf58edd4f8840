"""Errors raised while building dashboard widgets."""

from __future__ import annotations

__all__ = [
    "DevboardError",
    "InvalidDateExpression",
    "InvalidOptionValue",
    "MissingRequiredOption",
    "ProviderFetchError",
    "UnknownWidgetKind",
]


class DevboardError(Exception):
    """Base class for every error surfaced by ``Dispatcher.dispatch``."""


class InvalidDateExpression(DevboardError):
    """A start/end date expression is neither relative nor a YYYY-MM-DD date."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"{expression!r} {reason}")


class InvalidOptionValue(DevboardError):
    """A present widget option could not be coerced to the expected type."""

    def __init__(self, option: str, value: str, expected: str):
        self.option = option
        self.value = value
        self.expected = expected
        super().__init__(f"option {option!r} must be {expected}, got {value!r}")


class MissingRequiredOption(DevboardError):
    def __init__(self, kind: str, option: str, hint: str = ""):
        self.kind = kind
        self.option = option
        message = f"the widget {kind} requires the option {option!r}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class UnknownWidgetKind(DevboardError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"can't find the widget {kind}")


class ProviderFetchError(DevboardError):
    """Opaque failure from a data provider. Never retried."""
