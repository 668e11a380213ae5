"""Disk usage collector."""

from typing import NamedTuple

import psutil


class DiskUsage(NamedTuple):
    path: str
    total: int
    used: int
    percent: float


def collect_disk_usage(path: str) -> DiskUsage:
    """
    Collect usage of the filesystem mounted at ``path``.

    Raises whatever psutil raises for missing or inaccessible paths
    (FileNotFoundError, PermissionError, ...).
    """
    usage = psutil.disk_usage(path)

    return DiskUsage(
        path=path,
        total=int(usage.total),
        used=int(usage.used),
        percent=float(usage.percent),
    )
