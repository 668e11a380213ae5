"""Single-shot and streaming sampling loop."""

import enum
import logging
import sys
import threading
import time
from typing import Callable, Optional, TextIO

from .provider import MetricsProvider
from .render import Formatter
from .snapshot import CPU_SAMPLE_INTERVAL, Snapshot, build_snapshot

logger = logging.getLogger(__name__)


class SamplerState(enum.Enum):
    IDLE = "idle"
    SINGLE_SHOT = "single_shot"
    STREAMING = "streaming"
    STOPPED = "stopped"
    EXHAUSTED = "exhausted"


class Sampler:
    """
    Drive snapshot collection and write rendered output.

    With ``interval <= 0`` a single snapshot is built and written. Otherwise
    one snapshot is written per tick of a fixed-period timer, starting one
    full interval after ``run()`` is called, until ``count`` samples have
    been written (``count <= 0`` is unbounded) or ``stop_event`` is set.

    Errors raised by the snapshot builder are not caught here; they end
    the run in either mode.
    """

    def __init__(
        self,
        provider: MetricsProvider,
        formatter: Formatter,
        interval: float = 0.0,
        count: int = 0,
        stop_event: Optional[threading.Event] = None,
        out: Optional[TextIO] = None,
        root_path: Optional[str] = None,
        cpu_interval: float = CPU_SAMPLE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.provider = provider
        self.formatter = formatter
        self.interval = interval
        self.count = count
        self.stop_event = stop_event or threading.Event()
        self.out = out or sys.stdout
        self.root_path = root_path
        self.cpu_interval = cpu_interval
        self.clock = clock
        self.state = SamplerState.IDLE
        self.emitted = 0

    @property
    def streaming(self) -> bool:
        return self.interval > 0

    def run(self) -> SamplerState:
        """Run to completion and return the final state."""
        if self.state is not SamplerState.IDLE:
            raise RuntimeError(f"Sampler already ran (state: {self.state.value})")

        if self.streaming:
            return self._stream()
        return self._single_shot()

    def _build(self) -> Snapshot:
        return build_snapshot(
            self.provider,
            stop_event=self.stop_event,
            root_path=self.root_path,
            cpu_interval=self.cpu_interval,
        )

    def _write(self, line: str) -> None:
        self.out.write(line + "\n")
        self.out.flush()

    def _emit(self, snapshot: Snapshot) -> None:
        self._write(self.formatter.format(snapshot))
        self.emitted += 1

    def _write_header(self) -> None:
        header = self.formatter.header()
        if header is not None:
            self._write(header)

    def _single_shot(self) -> SamplerState:
        self.state = SamplerState.SINGLE_SHOT

        snapshot = self._build()
        if self.stop_event.is_set():
            logger.info("Interrupted before the snapshot completed")
            return self.state

        self._write_header()
        self._emit(snapshot)
        return self.state

    def _stream(self) -> SamplerState:
        self.state = SamplerState.STREAMING
        logger.info(f"Streaming every {self.interval}s" + (f", {self.count} samples" if self.count > 0 else ""))

        self._write_header()
        next_tick = self.clock() + self.interval

        while True:
            # wait() returns True as soon as the event is set, so a pending
            # stop always wins over a tick that is due
            if self.stop_event.wait(max(0.0, next_tick - self.clock())):
                self.state = SamplerState.STOPPED
                break

            snapshot = self._build()
            if self.stop_event.is_set():
                self.state = SamplerState.STOPPED
                break

            self._emit(snapshot)
            if 0 < self.count <= self.emitted:
                self.state = SamplerState.EXHAUSTED
                break

            next_tick = self._next_tick(next_tick)

        logger.info(f"Sampling {self.state.value} after {self.emitted} samples")
        return self.state

    def _next_tick(self, previous: float) -> float:
        """Advance to the next tick in the future, dropping ticks a slow build overran."""
        next_tick = previous + self.interval
        now = self.clock()
        if next_tick <= now:
            missed = int((now - next_tick) // self.interval) + 1
            logger.debug(f"Dropped {missed} tick(s)")
            next_tick += missed * self.interval
        return next_tick
