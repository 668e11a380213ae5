"""Metrics collectors backed by psutil."""

from .identity import collect_host_info
from .heartbeat import collect_cpu_percent, collect_load_average, collect_memory
from .disks import collect_disk_usage
from .network import collect_net_counters

__all__ = [
    "collect_host_info",
    "collect_cpu_percent",
    "collect_load_average",
    "collect_memory",
    "collect_disk_usage",
    "collect_net_counters",
]
