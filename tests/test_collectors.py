import platform
import threading

import pytest

from sysprobe.collectors import (
    collect_cpu_percent,
    collect_disk_usage,
    collect_host_info,
    collect_load_average,
    collect_memory,
    collect_net_counters,
)
from sysprobe.paths import resolve_root_path
from sysprobe.provider import PsutilProvider, supports_load_average


def test_host_info():
    info = collect_host_info()
    assert info.hostname
    assert info.os
    assert info.uptime_seconds >= 0


def test_cpu_percent_in_range():
    assert 0.0 <= collect_cpu_percent(0.05) <= 100.0


def test_cpu_percent_with_stop_event():
    stop = threading.Event()
    assert 0.0 <= collect_cpu_percent(0.05, stop) <= 100.0


def test_cpu_window_ends_early_when_stopped():
    stop = threading.Event()
    stop.set()
    # returns without waiting out the window
    assert 0.0 <= collect_cpu_percent(60, stop) <= 100.0


@pytest.mark.skipif(platform.system() == "Windows", reason="no load average on Windows")
def test_load_average():
    load = collect_load_average()
    assert len(load) == 3
    assert all(value >= 0 for value in load)


def test_memory():
    mem = collect_memory()
    assert mem.total > 0
    assert 0 <= mem.used <= mem.total
    assert 0.0 <= mem.percent <= 100.0


def test_disk_usage_of_root():
    root = resolve_root_path()
    usage = collect_disk_usage(root)
    assert usage.path == root
    assert usage.total > 0


def test_disk_usage_missing_path(tmp_path):
    with pytest.raises(OSError):
        collect_disk_usage(str(tmp_path / "missing"))


def test_net_counters():
    counters = collect_net_counters()
    assert counters.bytes_recv >= 0
    assert counters.bytes_sent >= 0


def test_psutil_provider_system():
    assert PsutilProvider().system == platform.system()
    assert PsutilProvider(system="Windows").system == "Windows"


def test_supports_load_average():
    assert supports_load_average("Linux")
    assert supports_load_average("Darwin")
    assert not supports_load_average("Windows")
