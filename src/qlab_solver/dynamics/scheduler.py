"""
Playback scheduler for time-evolution animation.

The scheduler owns only the advancing simulated time. A display layer calls
tick() once per frame; while playing, each tick advances time by
time_step × speed and hands the new time to the callback (typically a
closure around evolve_frame). Stopping simply makes further ticks no-ops,
so there is never an in-flight computation to cancel.

The wall clock is injectable so playback can be driven deterministically.
"""

import time
from typing import Any, Callable, List, Optional

from qlab_solver.core.constants import DEFAULT_TIME_STEP
from qlab_solver.core.parameters import PlaybackParameters


class PlaybackScheduler:
    """
    Start/stop/tick driver for the time-evolution view.

    Attributes:
        callback: Called as callback(t) on every running tick; its return
            value is returned by tick().
        time_step: Simulated time advanced per tick at unit speed.
        speed: Playback speed multiplier.
        current_time: Current simulated time.
        ticks: Number of ticks that advanced time since the last reset.
    """

    def __init__(
        self,
        callback: Callable[[float], Any],
        time_step: float = DEFAULT_TIME_STEP,
        speed: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        start_time: float = 0.0,
        verbose: bool = False,
    ):
        """
        Initialize the scheduler (stopped).

        Args:
            callback: Function of the simulated time.
            time_step: Time advanced per tick (> 0).
            speed: Speed multiplier applied to time_step.
            clock: Wall-clock source, returning seconds.
            start_time: Initial simulated time.
            verbose: Print start/stop diagnostics.
        """
        if time_step <= 0:
            raise ValueError(f"time_step must be positive, got {time_step}")

        self.callback = callback
        self.time_step = time_step
        self.speed = speed
        self.clock = clock
        self.verbose = verbose

        self.current_time = float(start_time)
        self.ticks = 0
        self._running = False
        self._started_at: Optional[float] = None
        self._elapsed = 0.0

    @classmethod
    def from_parameters(
        cls,
        callback: Callable[[float], Any],
        params: PlaybackParameters,
        **kwargs,
    ) -> "PlaybackScheduler":
        """Build a scheduler from PlaybackParameters."""
        return cls(callback, time_step=params.time_step, speed=params.speed, **kwargs)

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Begin (or resume) playback. Starting twice is harmless."""
        if self._running:
            return
        self._running = True
        self._started_at = self.clock()
        if self.verbose:
            print(f"Playback started at t = {self.current_time:.2f}")

    def stop(self) -> None:
        """Halt playback; later ticks do nothing until start() is called."""
        if not self._running:
            return
        self._running = False
        self._elapsed += self.clock() - self._started_at
        self._started_at = None
        if self.verbose:
            print(f"Playback stopped at t = {self.current_time:.2f} after {self.ticks} ticks")

    def reset(self, start_time: float = 0.0) -> None:
        """Stop playback and rewind to start_time."""
        self.stop()
        self.current_time = float(start_time)
        self.ticks = 0
        self._elapsed = 0.0

    def tick(self) -> Any:
        """
        Advance one frame.

        Returns:
            The callback's result, or None if playback is stopped.
        """
        if not self._running:
            return None
        self.current_time += self.time_step * self.speed
        self.ticks += 1
        return self.callback(self.current_time)

    def seek(self, t: float) -> Any:
        """Jump to time t and evaluate the callback there, running or not."""
        self.current_time = float(t)
        return self.callback(self.current_time)

    def run(self, n_ticks: int) -> List[Any]:
        """Start, tick n_ticks times, stop; returns the callback results."""
        self.start()
        try:
            return [self.tick() for _ in range(n_ticks)]
        finally:
            self.stop()

    def elapsed_wall_time(self) -> float:
        """Wall-clock seconds spent playing, measured with the injected clock."""
        if self._running:
            return self._elapsed + (self.clock() - self._started_at)
        return self._elapsed
