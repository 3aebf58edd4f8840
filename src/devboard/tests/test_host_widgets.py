from types import SimpleNamespace

import psutil
import pytest

from devboard.errors import ProviderFetchError
from devboard.models import BarPrimitive, TextPrimitive, WidgetSpec
from devboard.providers import LocalHostProvider

GIB = 1024**3


@pytest.fixture
def fake_psutil(monkeypatch):
    monkeypatch.setattr(psutil, "boot_time", lambda: 1000.0)
    monkeypatch.setattr(
        psutil,
        "virtual_memory",
        lambda: SimpleNamespace(total=16 * GIB, free=2 * GIB, available=8 * GIB),
    )
    monkeypatch.setattr(psutil, "swap_memory", lambda: SimpleNamespace(total=4 * GIB, free=3 * GIB))


def test_uptime_widget(dispatcher, host):
    action = dispatcher.dispatch(WidgetSpec("rh.box_uptime", {}))

    assert action.primitive == TextPrimitive("1d 1h 1m 1s")
    assert action.title == "Uptime"
    assert host.calls == [("uptime",)]


def test_memory_widget_defaults(dispatcher, host):
    action = dispatcher.dispatch(WidgetSpec("rh.bar_memory", {}))

    assert action.title == "Memory"
    assert action.primitive == BarPrimitive(values=(1000, 2000, 3000), labels=("MemTotal", "MemFree", "MemAvailable"))
    assert host.calls == [("memory", ["MemTotal", "MemFree", "MemAvailable"], "kb")]


def test_memory_widget_options(dispatcher, host):
    action = dispatcher.dispatch(
        WidgetSpec("rh.bar_memory", {"metrics": "SwapTotal, SwapFree", "unit": "mb", "title": "Swap"})
    )

    assert action.title == "Swap"
    assert action.primitive.labels == ("SwapTotal", "SwapFree")
    assert host.calls == [("memory", ["SwapTotal", "SwapFree"], "mb")]


def test_local_uptime(fake_psutil):
    provider = LocalHostProvider(clock=lambda: 91061.0)
    assert provider.uptime() == 90061.0


def test_local_uptime_never_negative(fake_psutil):
    provider = LocalHostProvider(clock=lambda: 10.0)
    assert provider.uptime() == 0.0


def test_local_uptime_failure(monkeypatch):
    def broken():
        raise OSError("no /proc")

    monkeypatch.setattr(psutil, "boot_time", broken)
    with pytest.raises(ProviderFetchError) as excinfo:
        LocalHostProvider().uptime()
    assert isinstance(excinfo.value.__cause__, OSError)


def test_local_memory_units(fake_psutil):
    provider = LocalHostProvider()

    assert provider.memory(["MemTotal", "MemAvailable"], "gb") == [16, 8]
    assert provider.memory(["SwapFree"], "MB") == [3 * 1024]
    assert provider.memory(["MemFree"], "kb") == [2 * 1024 * 1024]


def test_local_memory_missing_field_reads_zero(fake_psutil):
    assert LocalHostProvider().memory(["Buffers"], "b") == [0]


def test_local_memory_rejects_unknown_unit(fake_psutil):
    with pytest.raises(ProviderFetchError):
        LocalHostProvider().memory(["MemTotal"], "tb")


def test_local_memory_rejects_unknown_metric(fake_psutil):
    with pytest.raises(ProviderFetchError) as excinfo:
        LocalHostProvider().memory(["MemTotal", "HugePages"], "kb")
    assert "HugePages" in str(excinfo.value)
