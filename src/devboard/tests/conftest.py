from datetime import date

import pytest

from devboard.widgets import build_dispatcher

TODAY = date(2019, 1, 15)


class FakeAnalytics:
    """Analytics provider returning canned results and recording every call."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.realtime = "42"
        self.total = "1234"
        self.bar = (["01 Jan", "02 Jan", "03 Jan"], [10, 20, 30])
        self.table_result = (
            ["Page", "Sessions", "Page views"],
            ["/a/", "/b/", "/c/", "/d/", "/e/"],
            [["5", "6"], ["4", "5"], ["3", "4"], ["2", "3"], ["1", "2"]],
        )
        self.stacked = (
            ["01 Jan", "02 Jan"],
            {"New Visitor": [1, 2], "Returning Visitor": [3, 4]},
        )

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.error is not None:
            raise self.error

    def realtime_users(self, view_id):
        self._record("realtime_users", view_id)
        return self.realtime

    def simple_metric(self, query):
        self._record("simple_metric", query)
        return self.total

    def bar_metric(self, query):
        self._record("bar_metric", query)
        return self.bar

    def table(self, query, first_header):
        self._record("table", query, first_header)
        return self.table_result

    def stacked_bar(self, query):
        self._record("stacked_bar", query)
        return self.stacked


class FakeHost:
    def __init__(self, uptime=90061.0, memory=None):
        self.calls = []
        self._uptime = uptime
        self._memory = memory

    def uptime(self):
        self.calls.append(("uptime",))
        return self._uptime

    def memory(self, metrics, unit):
        self.calls.append(("memory", list(metrics), unit))
        if self._memory is not None:
            return self._memory
        return [1000 * (index + 1) for index, _ in enumerate(metrics)]


class RecordingSurface:
    def __init__(self):
        self.draws = []

    def draw(self, primitive, title, options):
        self.draws.append((primitive, title, dict(options)))


@pytest.fixture
def analytics():
    return FakeAnalytics()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def dispatcher(surface, analytics, host):
    return build_dispatcher(surface, analytics=analytics, view_id="ga:123", host=host, clock=lambda: TODAY)
