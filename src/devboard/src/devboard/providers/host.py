"""Host provider backed by psutil for the machine running the dashboard."""

from __future__ import annotations

import time
from typing import Callable, Sequence

import psutil
from loguru import logger

from ..errors import ProviderFetchError

UNITS = {
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
}

# /proc/meminfo names -> (psutil accessor, attribute)
_VIRTUAL = "virtual"
_SWAP = "swap"
MEMINFO_FIELDS = {
    "MemTotal": (_VIRTUAL, "total"),
    "MemFree": (_VIRTUAL, "free"),
    "MemAvailable": (_VIRTUAL, "available"),
    "Buffers": (_VIRTUAL, "buffers"),
    "Cached": (_VIRTUAL, "cached"),
    "Active": (_VIRTUAL, "active"),
    "Inactive": (_VIRTUAL, "inactive"),
    "Shmem": (_VIRTUAL, "shared"),
    "SwapTotal": (_SWAP, "total"),
    "SwapFree": (_SWAP, "free"),
}


class LocalHostProvider:
    """Uptime and memory of the local host."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def uptime(self) -> float:
        try:
            boot_time = psutil.boot_time()
        except (psutil.Error, OSError) as exc:
            raise ProviderFetchError(f"could not read boot time: {exc}") from exc
        return max(self._clock() - boot_time, 0.0)

    def memory(self, metrics: Sequence[str], unit: str) -> list[int]:
        divisor = UNITS.get(unit.strip().lower())
        if divisor is None:
            raise ProviderFetchError(f"unknown memory unit {unit!r}, expected one of {', '.join(UNITS)}")

        unknown = [metric for metric in metrics if metric not in MEMINFO_FIELDS]
        if unknown:
            raise ProviderFetchError(f"unknown memory metrics {unknown}, expected any of {', '.join(MEMINFO_FIELDS)}")

        try:
            sources = {_VIRTUAL: psutil.virtual_memory(), _SWAP: psutil.swap_memory()}
        except (psutil.Error, OSError) as exc:
            raise ProviderFetchError(f"could not read memory stats: {exc}") from exc

        values = []
        for metric in metrics:
            source, attribute = MEMINFO_FIELDS[metric]
            raw = getattr(sources[source], attribute, None)
            if raw is None:
                # Not every platform exposes buffers/cached/shared.
                logger.debug(f"Memory field {metric} not available on this platform, reporting 0")
                raw = 0
            values.append(int(raw // divisor))
        return values
