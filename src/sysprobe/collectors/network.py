"""Network counters collector."""

from typing import NamedTuple

import psutil


class NetCounters(NamedTuple):
    bytes_recv: int
    bytes_sent: int


def collect_net_counters() -> NetCounters:
    """
    Collect byte counters summed over all network interfaces.

    Loopback is included; psutil's aggregate view does not separate it.
    """
    counters = psutil.net_io_counters(pernic=False)
    if counters is None:
        # psutil returns None on hosts without any interface
        raise RuntimeError("no network interfaces found")

    return NetCounters(bytes_recv=int(counters.bytes_recv), bytes_sent=int(counters.bytes_sent))
