from __future__ import annotations

import threading
import time

from src.attendance_session.attendance_session.countdown.driver import CountdownDriver

START = 1_700_000_000_000


class StepClock:
    """Moves forward `step` ms every time it is read."""

    def __init__(self, start: int, step: int):
        self.now = start
        self.step = step
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            value = self.now
            self.now += self.step
            return value


def test_ticks_down_to_zero_then_stops():
    ticks = []
    driver = CountdownDriver(clock=StepClock(START, 1000), interval=0.001)

    handle = driver.start(START + 3000, ticks.append)

    assert handle.join(timeout=2)
    assert ticks == [3, 2, 1, 0]
    assert handle.finished
    assert not driver.active


def test_past_end_time_emits_single_zero():
    ticks = []
    driver = CountdownDriver(clock=StepClock(START, 0), interval=0.001)

    handle = driver.start(START - 60_000, ticks.append)

    assert handle.join(timeout=2)
    assert ticks == [0]


def test_partial_seconds_round_down_and_never_go_negative():
    ticks = []
    driver = CountdownDriver(clock=StepClock(START, 700), interval=0.001)

    handle = driver.start(START + 1500, ticks.append)

    assert handle.join(timeout=2)
    assert ticks == [1, 0]
    assert min(ticks) == 0


def test_restart_stops_previous_countdown_first():
    first, second = [], []
    driver = CountdownDriver(clock=StepClock(START, 0), interval=0.005)

    first_handle = driver.start(START + 3_600_000, first.append)
    second_handle = driver.start(START + 60_000, second.append)

    assert first_handle.join(timeout=1)
    assert not first_handle.running
    assert driver.handle is second_handle
    delivered = len(first)
    time.sleep(0.05)

    assert len(first) == delivered
    assert first == [3600] * delivered
    assert second and set(second) == {60}
    driver.stop()


def test_no_tick_after_stop():
    ticks = []
    driver = CountdownDriver(clock=StepClock(START, 0), interval=0.002)

    handle = driver.start(START + 10_000, ticks.append)
    time.sleep(0.02)
    driver.stop()
    delivered = len(ticks)
    time.sleep(0.03)

    assert len(ticks) == delivered
    assert not handle.running
    assert not driver.active


def test_running_context_releases_countdown():
    driver = CountdownDriver(clock=StepClock(START, 0), interval=0.005)

    with driver.running(START + 10_000, lambda remaining: None) as handle:
        assert driver.active

    assert not handle.running
    assert not driver.active


def test_listener_errors_do_not_kill_the_countdown(caplog):
    ticks = []

    def on_tick(remaining):
        ticks.append(remaining)
        if remaining == 2:
            raise RuntimeError("render failed")

    driver = CountdownDriver(clock=StepClock(START, 1000), interval=0.001)
    handle = driver.start(START + 2000, on_tick)

    assert handle.join(timeout=2)
    assert ticks == [2, 1, 0]
    assert "Countdown listener failed" in caplog.text
