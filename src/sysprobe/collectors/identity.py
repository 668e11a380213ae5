"""Host identity collector."""

import platform
import socket
import time
from typing import NamedTuple

import distro
import psutil


class HostInfo(NamedTuple):
    hostname: str
    os: str
    uptime_seconds: int


def collect_host_info() -> HostInfo:
    """
    Collect hostname, OS description and uptime.

    The OS is the distribution name and version where distro knows it
    (e.g. "Ubuntu 22.04"), otherwise the platform system and release.
    """
    hostname = socket.gethostname()

    os_name = distro.name() or platform.system()
    os_version = distro.version() or platform.release()
    os_desc = f"{os_name} {os_version}".strip()

    # Clock adjustments can put boot time in the future
    uptime_seconds = max(0, int(time.time() - psutil.boot_time()))

    return HostInfo(hostname=hostname, os=os_desc, uptime_seconds=uptime_seconds)
