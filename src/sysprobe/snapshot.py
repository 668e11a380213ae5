"""Snapshot data model and builder."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import SnapshotError
from .paths import resolve_root_path
from .provider import MetricsProvider, supports_load_average

logger = logging.getLogger(__name__)

CPU_SAMPLE_INTERVAL = 0.2  # seconds

MB = 1024 ** 2
GB = 1024 ** 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Snapshot:
    """
    One point-in-time set of host metrics.

    Numeric fields default to zero so a snapshot is complete even when every
    probe failed. Load averages are None where they are not available, which
    keeps "unsupported" apart from "idle".
    """

    timestamp: datetime = field(default_factory=_utcnow)
    host: str = ""
    os: str = ""
    uptime_seconds: int = 0
    cpu_percent: float = 0.0
    load1: Optional[float] = None
    load5: Optional[float] = None
    load15: Optional[float] = None
    mem_used_mb: int = 0
    mem_total_mb: int = 0
    mem_used_percent: float = 0.0
    disk_path: str = ""
    disk_used_gb: float = 0.0
    disk_total_gb: float = 0.0
    disk_used_percent: float = 0.0
    net_bytes_in: int = 0
    net_bytes_out: int = 0

    @property
    def has_load_average(self) -> bool:
        return self.load1 is not None


def _percent(value: Any) -> float:
    return min(100.0, max(0.0, float(value)))


def _cancelled(stop_event: Optional[threading.Event]) -> bool:
    return stop_event is not None and stop_event.is_set()


def _probe_host(provider: MetricsProvider) -> Dict[str, Any]:
    info = provider.host_info()
    return {
        "host": info.hostname or "",
        "os": info.os or "",
        "uptime_seconds": max(0, int(info.uptime_seconds or 0)),
    }


def _probe_load(provider: MetricsProvider) -> Dict[str, Any]:
    load1, load5, load15 = provider.load_average()
    return {"load1": float(load1), "load5": float(load5), "load15": float(load15)}


def _probe_memory(provider: MetricsProvider) -> Dict[str, Any]:
    mem = provider.memory()
    return {
        "mem_used_mb": int(mem.used) // MB,
        "mem_total_mb": int(mem.total) // MB,
        "mem_used_percent": _percent(mem.percent),
    }


def _probe_disk(provider: MetricsProvider, path: str) -> Dict[str, Any]:
    usage = provider.disk_usage(path)
    return {
        "disk_used_gb": int(usage.used) / GB,
        "disk_total_gb": int(usage.total) / GB,
        "disk_used_percent": _percent(usage.percent),
    }


def _probe_network(provider: MetricsProvider) -> Dict[str, Any]:
    counters = provider.net_io()
    return {
        "net_bytes_in": int(counters.bytes_recv),
        "net_bytes_out": int(counters.bytes_sent),
    }


def build_snapshot(
    provider: MetricsProvider,
    stop_event: Optional[threading.Event] = None,
    root_path: Optional[str] = None,
    cpu_interval: float = CPU_SAMPLE_INTERVAL,
) -> Snapshot:
    """
    Build a snapshot from independent provider probes.

    A failing probe leaves its fields at their defaults and is logged at
    DEBUG; it never fails the build. When ``stop_event`` is set the probe in
    flight is dropped and the remaining probes are skipped, and whatever was
    gathered so far is returned.

    Raises:
        SnapshotError: the snapshot could not be prepared or assembled.
    """
    try:
        timestamp = _utcnow()
        system = provider.system
        disk_path = root_path or resolve_root_path(system)
    except Exception as e:
        raise SnapshotError(f"Cannot prepare snapshot: {e}") from e

    probes: List[Tuple[str, Callable[[], Dict[str, Any]]]] = [
        ("host", lambda: _probe_host(provider)),
        ("cpu", lambda: {"cpu_percent": _percent(provider.cpu_percent(cpu_interval, stop_event))}),
    ]
    if supports_load_average(system):
        probes.append(("load", lambda: _probe_load(provider)))
    probes.extend([
        ("memory", lambda: _probe_memory(provider)),
        ("disk", lambda: _probe_disk(provider, disk_path)),
        ("network", lambda: _probe_network(provider)),
    ])

    values: Dict[str, Any] = {"timestamp": timestamp, "disk_path": disk_path}

    for name, probe in probes:
        if _cancelled(stop_event):
            logger.debug(f"Snapshot cancelled before {name} probe")
            break

        try:
            result = probe()
        except Exception as e:
            logger.debug(f"{name} probe failed: {e}")
            continue

        if _cancelled(stop_event):
            logger.debug(f"Snapshot cancelled during {name} probe")
            break

        values.update(result)

    try:
        return Snapshot(**values)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Cannot assemble snapshot: {e}") from e
