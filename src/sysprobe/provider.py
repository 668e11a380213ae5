"""Metrics provider interface and its psutil implementation."""

import platform
import threading
from typing import Optional, Protocol, Tuple

from .collectors import (
    collect_host_info,
    collect_cpu_percent,
    collect_load_average,
    collect_memory,
    collect_disk_usage,
    collect_net_counters,
)
from .collectors.disks import DiskUsage
from .collectors.heartbeat import MemoryUsage
from .collectors.identity import HostInfo
from .collectors.network import NetCounters

# Platforms without a load average concept. psutil emulates one on
# Windows, but it is not comparable to the Unix figure.
NO_LOAD_AVERAGE_SYSTEMS = frozenset({"Windows"})


class MetricsProvider(Protocol):
    """Source of raw host counters. Every call may raise."""

    system: str

    def host_info(self) -> HostInfo:
        ...

    def cpu_percent(self, interval: float, stop_event: Optional[threading.Event] = None) -> float:
        ...

    def load_average(self) -> Tuple[float, float, float]:
        ...

    def memory(self) -> MemoryUsage:
        ...

    def disk_usage(self, path: str) -> DiskUsage:
        ...

    def net_io(self) -> NetCounters:
        ...


def supports_load_average(system: str) -> bool:
    return system not in NO_LOAD_AVERAGE_SYSTEMS


class PsutilProvider:
    """MetricsProvider reading the local host through psutil."""

    def __init__(self, system: Optional[str] = None):
        self.system = system or platform.system()

    def host_info(self) -> HostInfo:
        return collect_host_info()

    def cpu_percent(self, interval: float, stop_event: Optional[threading.Event] = None) -> float:
        return collect_cpu_percent(interval, stop_event)

    def load_average(self) -> Tuple[float, float, float]:
        return collect_load_average()

    def memory(self) -> MemoryUsage:
        return collect_memory()

    def disk_usage(self, path: str) -> DiskUsage:
        return collect_disk_usage(path)

    def net_io(self) -> NetCounters:
        return collect_net_counters()
