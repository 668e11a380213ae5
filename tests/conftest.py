import threading
import time
from typing import Callable, Dict, Iterable, List, Optional

import pytest

from sysprobe.collectors.disks import DiskUsage
from sysprobe.collectors.heartbeat import MemoryUsage
from sysprobe.collectors.identity import HostInfo
from sysprobe.collectors.network import NetCounters

GB = 1024 ** 3

PROBES = ("host", "cpu", "load", "memory", "disk", "network")


class FakeProvider:
    """MetricsProvider returning fixed values, with per-probe failures and hooks."""

    def __init__(
        self,
        system: str = "Linux",
        fail: Iterable[str] = (),
        hooks: Optional[Dict[str, Callable[[], None]]] = None,
    ):
        self.system = system
        self.fail = set(fail)
        self.hooks = hooks or {}
        self.calls: List[str] = []
        self.builds: List[float] = []
        self.disk_paths: List[str] = []

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name == "host":
            self.builds.append(time.monotonic())
        if name in self.hooks:
            self.hooks[name]()
        if name in self.fail:
            raise OSError(f"{name} unavailable")

    def host_info(self) -> HostInfo:
        self._call("host")
        return HostInfo(hostname="web-1", os="Ubuntu 22.04", uptime_seconds=3600)

    def cpu_percent(self, interval: float, stop_event: Optional[threading.Event] = None) -> float:
        self._call("cpu")
        return 12.5

    def load_average(self):
        self._call("load")
        return 0.5, 0.75, 1.0

    def memory(self) -> MemoryUsage:
        self._call("memory")
        return MemoryUsage(total=8 * GB, used=2 * GB, percent=25.0)

    def disk_usage(self, path: str) -> DiskUsage:
        self._call("disk")
        self.disk_paths.append(path)
        return DiskUsage(path=path, total=100 * GB, used=40 * GB, percent=40.0)

    def net_io(self) -> NetCounters:
        self._call("network")
        return NetCounters(bytes_recv=123456, bytes_sent=654321)


@pytest.fixture
def provider():
    return FakeProvider()
