"""Clock - fixed tick counter plus a wall-time backlog for real-time drivers."""

from typing import Callable

from delve.rng import DeterministicRandom
from delve.types import TickContext


class Clock:
    """Counts ticks at a fixed rate.

    Interactive drivers feed frame times into ``accumulate()`` and run the
    number of ticks it reports; headless callers just ``advance()``.
    """

    def __init__(self, tps: int, max_catch_up: int = 5) -> None:
        if tps <= 0:
            raise ValueError(f"tps must be positive, got {tps}")
        if max_catch_up < 1:
            raise ValueError(f"max_catch_up must be >= 1, got {max_catch_up}")
        self._tps = tps
        self._dt = 1.0 / tps
        self._max_catch_up = max_catch_up
        self._tick_number = 0
        self._backlog = 0.0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        """Simulated seconds covered by the ticks so far."""
        return self._tick_number * self._dt

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def accumulate(self, seconds: float) -> int:
        """Bank *seconds* of wall time and return how many ticks are now due.

        At most ``max_catch_up`` ticks are reported per call; a longer stall
        is dropped rather than replayed in a burst.
        """
        self._backlog += max(0.0, seconds)
        due = int(self._backlog / self._dt)
        if due > self._max_catch_up:
            self._backlog = 0.0
            return self._max_catch_up
        self._backlog -= due * self._dt
        return due

    def context(self, stop_fn: Callable[[], None], rng: DeterministicRandom) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self.elapsed,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self, tick_number: int = 0) -> None:
        self._tick_number = tick_number
        self._backlog = 0.0
