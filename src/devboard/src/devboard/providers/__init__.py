"""Data providers the widgets fetch from."""

from .base import X_HEADER_OTHER_DIM, X_HEADER_TIME, AnalyticsProvider, AnalyticsQuery, HostProvider
from .host import LocalHostProvider

__all__ = [
    "AnalyticsProvider",
    "AnalyticsQuery",
    "HostProvider",
    "LocalHostProvider",
    "X_HEADER_OTHER_DIM",
    "X_HEADER_TIME",
]
