"""Snapshot rendering: JSON records and fixed-width table rows."""

import json
from datetime import timezone
from typing import Any, Dict, Optional, Protocol

from .snapshot import Snapshot

ROW_FORMAT = "{:<8}  {:>6}  {:>6}  {:>18}  {:>6}  {:>6}  {:>27}  {}"

HEADER_COLUMNS = (
    "TIME",
    "CPU%",
    "Load1",
    "MEM_USED/TOTAL(MB)",
    "MEM%",
    "DISK%",
    "NET_IN/NET_OUT(B)",
    "HOST",
)

NO_VALUE = "-"


class Formatter(Protocol):
    def header(self) -> Optional[str]:
        ...

    def format(self, snapshot: Snapshot) -> str:
        ...


def format_timestamp(snapshot: Snapshot) -> str:
    """ISO 8601 UTC with millisecond precision and a Z suffix."""
    ts = snapshot.timestamp.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def snapshot_to_record(snapshot: Snapshot) -> Dict[str, Any]:
    """
    Convert a snapshot to its structured record.

    Key names are stable. ``load1``/``load5``/``load15`` are left out when
    the host has no load average. ``mem_free_pct`` holds the used
    percentage; the name is kept for existing consumers.
    """
    record: Dict[str, Any] = {
        "ts": format_timestamp(snapshot),
        "host": snapshot.host,
        "os": snapshot.os,
        "uptime_sec": snapshot.uptime_seconds,
        "cpu_percent": snapshot.cpu_percent,
    }

    if snapshot.load1 is not None:
        record["load1"] = snapshot.load1
    if snapshot.load5 is not None:
        record["load5"] = snapshot.load5
    if snapshot.load15 is not None:
        record["load15"] = snapshot.load15

    record.update({
        "mem_used_mb": snapshot.mem_used_mb,
        "mem_total_mb": snapshot.mem_total_mb,
        "mem_free_pct": snapshot.mem_used_percent,
        "disk_path": snapshot.disk_path,
        "disk_used_gb": snapshot.disk_used_gb,
        "disk_total_gb": snapshot.disk_total_gb,
        "disk_used_pct": snapshot.disk_used_percent,
        "net_bytes_in": snapshot.net_bytes_in,
        "net_bytes_out": snapshot.net_bytes_out,
    })

    return record


class JsonFormatter:
    """Render snapshots as JSON, indented or one compact record per line."""

    def __init__(self, pretty: bool = False):
        self.pretty = pretty

    def header(self) -> Optional[str]:
        return None

    def format(self, snapshot: Snapshot) -> str:
        record = snapshot_to_record(snapshot)
        if self.pretty:
            return json.dumps(record, indent=2)
        return json.dumps(record, separators=(",", ":"))


class TableFormatter:
    """Render snapshots as fixed-width rows for terminals."""

    def header(self) -> Optional[str]:
        return ROW_FORMAT.format(*HEADER_COLUMNS)

    def format(self, snapshot: Snapshot) -> str:
        load1 = NO_VALUE if snapshot.load1 is None else f"{snapshot.load1:.2f}"

        return ROW_FORMAT.format(
            snapshot.timestamp.astimezone().strftime("%H:%M:%S"),
            f"{snapshot.cpu_percent:.1f}",
            load1,
            f"{snapshot.mem_used_mb}/{snapshot.mem_total_mb}",
            f"{snapshot.mem_used_percent:.1f}",
            f"{snapshot.disk_used_percent:.1f}",
            f"{snapshot.net_bytes_in}/{snapshot.net_bytes_out}",
            snapshot.host,
        )


def get_formatter(json_output: bool, streaming: bool) -> Formatter:
    """Pick the formatter for a run. JSON is indented only for single shots."""
    if json_output:
        return JsonFormatter(pretty=not streaming)
    return TableFormatter()
