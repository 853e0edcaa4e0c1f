"""Drive a :class:`~chipvm.machine.Chip8` from the two CHIP-8 clocks.

The instruction clock and the 60 Hz timer clock are independent. The
:class:`Scheduler` turns elapsed wall time into the right number of calls on
each clock, :class:`Waiter` paces a loop to a target period, and
:func:`run_headless` runs frame-locked as fast as possible.
"""

import time
from typing import Callable, Tuple

from chipvm.constants import TIMER_FREQUENCY
from chipvm.logging import get_logger, progress_bar
from chipvm.machine import Chip8

logger = get_logger("chipvm.driver")


class Waiter:
    """Sleeps away whatever is left of a fixed period after each cycle."""

    def __init__(
        self,
        period: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._start = clock()
        self._end = self._start

    def start(self):
        self._start = self._clock()

    def end(self):
        self._end = self._clock()

    def cycle(self):
        delta = self._end - self._start
        if self.period > delta:
            self._sleep(self.period - delta)


class Scheduler:
    """Dispatches instruction steps and timer ticks at their own rates.

    Fractions of a tick carry over between calls, so the long-run rates are
    exact whatever the call pattern.
    """

    def __init__(
        self,
        machine: Chip8,
        instruction_frequency: int = 700,
        timer_frequency: int = TIMER_FREQUENCY,
    ):
        if instruction_frequency <= 0 or timer_frequency <= 0:
            raise ValueError("Clock frequencies must be positive")
        self.machine = machine
        self.instruction_frequency = instruction_frequency
        self.timer_frequency = timer_frequency
        self._instruction_budget = 0.0
        self._timer_budget = 0.0

    def advance(self, elapsed: float) -> Tuple[int, int]:
        """Run everything due in ``elapsed`` seconds.

        Returns:
            Number of instruction steps attempted and timer ticks applied
        """
        self._instruction_budget += elapsed * self.instruction_frequency
        self._timer_budget += elapsed * self.timer_frequency

        steps = int(self._instruction_budget)
        ticks = int(self._timer_budget)
        self._instruction_budget -= steps
        self._timer_budget -= ticks

        for _ in range(steps):
            self.machine.step_instruction()
        for _ in range(ticks):
            self.machine.step_timer()
        return steps, ticks

    def run_for(
        self,
        seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Run in real time for ``seconds``, one timer period per loop.

        Returns:
            Number of timer periods run
        """
        waiter = Waiter(1.0 / self.timer_frequency, clock, sleep)
        frames = int(seconds * self.timer_frequency)
        for _ in range(frames):
            waiter.start()
            self.advance(waiter.period)
            waiter.end()
            waiter.cycle()
        return frames


def run_headless(
    machine: Chip8,
    frames: int,
    instructions_per_frame: int = 12,
    show_progress: bool = True,
) -> int:
    """Run ``frames`` frames without sleeping: N instructions, then one timer tick.

    Returns:
        Number of instructions actually executed
    """
    executed = 0
    with progress_bar(frames, desc="Emulating", enabled=show_progress) as bar:
        for _ in range(frames):
            executed += machine.run(instructions_per_frame)
            machine.step_timer()
            bar.update(1)
    logger.debug(f"Headless run finished after {executed} instructions")
    return executed
