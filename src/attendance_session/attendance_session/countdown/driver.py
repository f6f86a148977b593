from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from ..common.datetime_utils import now_ms
from ..core.constants import COUNTDOWN_TICK_SECONDS
from ..session.model import remaining_seconds

logger = logging.getLogger(__name__)

TickListener = Callable[[int], None]
Clock = Callable[[], int]


class CountdownHandle:
    """One running countdown towards a fixed end timestamp.

    Ticks are delivered on a daemon thread: once immediately, then every
    `interval` seconds, ending with a single 0. `cancel()` returns only after
    any in-flight delivery has finished, and nothing is delivered afterwards.
    """

    def __init__(self, shift_end_at: int, on_tick: TickListener, *, clock: Clock, interval: float):
        self.shift_end_at = int(shift_end_at)
        self._on_tick = on_tick
        self._clock = clock
        self._interval = float(interval)
        self._cancelled = threading.Event()
        self._finished = threading.Event()
        self._delivery = threading.RLock()
        self._thread = threading.Thread(target=self._run, name="countdown", daemon=True)

    @property
    def running(self) -> bool:
        return not self._cancelled.is_set() and not self._finished.is_set()

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    def start(self) -> "CountdownHandle":
        self._thread.start()
        return self

    def cancel(self, timeout: Optional[float] = 1.0) -> None:
        self._cancelled.set()
        # Wait out a delivery that was already past the cancellation check.
        with self._delivery:
            pass
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def join(self, timeout: Optional[float] = None) -> bool:
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        try:
            while True:
                remaining = remaining_seconds(self.shift_end_at, self._clock())
                if not self._deliver(remaining):
                    return
                if remaining == 0:
                    return
                if self._cancelled.wait(self._interval):
                    return
        finally:
            self._finished.set()

    def _deliver(self, remaining: int) -> bool:
        with self._delivery:
            if self._cancelled.is_set():
                return False
            try:
                self._on_tick(remaining)
            except Exception:
                logger.exception("Countdown listener failed")
            return True


class CountdownDriver:
    """Owns at most one countdown at a time."""

    def __init__(self, *, clock: Clock = now_ms, interval: float = COUNTDOWN_TICK_SECONDS):
        self._clock = clock
        self._interval = interval
        self._lock = threading.Lock()
        self._handle: Optional[CountdownHandle] = None

    @property
    def active(self) -> bool:
        handle = self._handle
        return handle is not None and handle.running

    @property
    def handle(self) -> Optional[CountdownHandle]:
        return self._handle

    def start(self, shift_end_at: int, on_tick: TickListener) -> CountdownHandle:
        with self._lock:
            self._stop_locked()
            handle = CountdownHandle(shift_end_at, on_tick, clock=self._clock, interval=self._interval)
            self._handle = handle
            return handle.start()

    def stop(self) -> None:
        with self._lock:
            self._stop_locked()

    def _stop_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @contextmanager
    def running(self, shift_end_at: int, on_tick: TickListener) -> Iterator[CountdownHandle]:
        handle = self.start(shift_end_at, on_tick)
        try:
            yield handle
        finally:
            with self._lock:
                if self._handle is handle:
                    self._stop_locked()
                else:
                    handle.cancel()
