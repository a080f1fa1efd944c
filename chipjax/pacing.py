"""Real-time pacing of the CPU.

``PacingController`` runs one CPU cycle per ``1 / instructions_per_second``
seconds and counts the timers down on an independent wall-clock schedule.
``EmulatorThread`` runs a controller off the main thread so the window can
keep its own cadence; the two sides only meet in a ``FrameSlot`` (frames out)
and a ``KeyEventQueue`` (keys in).
"""

import threading
import time
from typing import Callable, Iterable, Optional

import jax.numpy as jnp

from chipjax.decode import disassemble
from chipjax.emulator import fetch, step, tick_timers
from chipjax.keypad import KeyEvent, apply_key_events
from chipjax.logging import ConsoleLogger
from chipjax.state import EmulatorState


class FrameSlot:
    """Holds the most recent framebuffer snapshot for the presentation side.

    Snapshots are immutable JAX arrays, so the lock only guards the swap.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._frame = None
        self._fresh = False

    def publish(self, frame: jnp.ndarray) -> None:
        with self._lock:
            self._frame = frame
            self._fresh = True

    def take(self) -> Optional[jnp.ndarray]:
        """Return the latest frame if it has not been taken yet, else None."""
        with self._lock:
            if not self._fresh:
                return None
            self._fresh = False
            return self._frame


class PacingController:
    """Drives the fetch-decode-execute loop at a fixed instruction rate."""

    def __init__(
        self,
        state: EmulatorState,
        poll_input: Callable[[], Iterable[KeyEvent]] = lambda: (),
        present: Callable[[jnp.ndarray], None] = lambda frame: None,
        instructions_per_second: int = 840,
        timer_frequency: int = 60,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[ConsoleLogger] = None,
        trace: bool = False,
    ):
        self.state = state
        self.poll_input = poll_input
        self.present = present
        self.cycle_time = 1.0 / instructions_per_second
        self.timer_period = 1.0 / timer_frequency
        self.clock = clock
        self.sleep = sleep
        self.logger = logger or ConsoleLogger()
        self.trace = trace
        self.cycles = 0
        self._last_timer_tick = None
        self._deadline = None

    def run_cycle(self) -> None:
        """Poll input, execute one instruction, service timers and display, then sleep."""
        start = self.clock()
        if self._last_timer_tick is None:
            self._last_timer_tick = start
            self._deadline = start

        self.state = apply_key_events(self.state, self.poll_input())

        if self.trace:
            _, instruction = fetch(self.state)
            self.logger.debug(
                f"0x{int(self.state.pc):03X}: {int(instruction):04X}  {disassemble(instruction)}"
            )
        self.state = step(self.state)
        self.cycles += 1

        self._update_timers(start)

        if bool(self.state.display_dirty):
            self.present(self.state.display)
            self.state = self.state.replace(display_dirty=jnp.zeros((), dtype=jnp.bool_))

        # Cycles are scheduled against a deadline so sleep overshoot is paid
        # back on the next cycle; a deadline already missed is dropped.
        now = self.clock()
        self._deadline = max(self._deadline + self.cycle_time, now)
        remaining = self._deadline - now
        if remaining > 0:
            self.sleep(remaining)

    def _update_timers(self, now: float) -> None:
        ticks = int((now - self._last_timer_tick) / self.timer_period)
        if ticks > 0:
            self.state = tick_timers(self.state, ticks)
            self._last_timer_tick += ticks * self.timer_period

    def run(self, stop_event: threading.Event) -> EmulatorState:
        """Run cycles until ``stop_event`` is set; errors propagate."""
        self.logger.info(
            f"CPU running at {1.0 / self.cycle_time:.0f} instructions/s, "
            f"timers at {1.0 / self.timer_period:.0f} Hz"
        )
        started = self.clock()
        while not stop_event.is_set():
            self.run_cycle()

        elapsed = self.clock() - started
        rate = self.cycles / elapsed if elapsed > 0 else 0.0
        self.logger.info(f"CPU stopped after {self.cycles} cycles ({rate:.0f} instructions/s)")
        return self.state


class EmulatorThread(threading.Thread):
    """Runs a ``PacingController`` until the shared stop event is set.

    Whatever ends the loop, the stop event is set on the way out so the
    presentation side notices. An exception is kept in ``error`` for the
    thread that joins.
    """

    def __init__(self, controller: PacingController, stop_event: threading.Event):
        super().__init__(name="chipjax-cpu")
        self.controller = controller
        self.stop_event = stop_event
        self.error: Optional[BaseException] = None

    def run(self):
        try:
            self.controller.run(self.stop_event)
        except Exception as e:
            self.error = e
        finally:
            self.stop_event.set()
