"""CPU, load and memory collectors."""

import threading
from typing import NamedTuple, Optional, Tuple

import psutil


class MemoryUsage(NamedTuple):
    total: int
    used: int
    percent: float


def collect_cpu_percent(interval: float, stop_event: Optional[threading.Event] = None) -> float:
    """
    Measure system-wide CPU utilization over ``interval`` seconds.

    psutil.cpu_percent(interval=None) compares against the previous call, so
    the counter is primed first and read again after the window. The window
    waits on ``stop_event`` when one is given, so a shutdown request does not
    have to sit out the full window.
    """
    if stop_event is None:
        return float(psutil.cpu_percent(interval=interval))

    psutil.cpu_percent(interval=None)
    stop_event.wait(interval)
    return float(psutil.cpu_percent(interval=None))


def collect_load_average() -> Tuple[float, float, float]:
    """Return the 1, 5 and 15 minute load averages."""
    load1, load5, load15 = psutil.getloadavg()
    return float(load1), float(load5), float(load15)


def collect_memory() -> MemoryUsage:
    """Return virtual memory totals in bytes."""
    mem = psutil.virtual_memory()
    return MemoryUsage(total=int(mem.total), used=int(mem.used), percent=float(mem.percent))
