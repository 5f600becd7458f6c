"""Engine - tick loop, pacing, and lifecycle hooks around a WorldGrid."""

from typing import Any, Callable

from delve.clock import Clock
from delve.grid import WorldGrid
from delve.rng import DeterministicRandom
from delve.types import SnapshotError, System, TickContext

_SNAPSHOT_VERSION = 1


class Engine:
    def __init__(
        self,
        width: int,
        height: int,
        tps: int = 20,
        seed: int | str | None = None,
        viewport: tuple[int, int] | None = None,
    ) -> None:
        self._clock = Clock(tps)
        vw, vh = viewport if viewport is not None else (None, None)
        self._grid = WorldGrid(width, height, vw, vh)
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[WorldGrid, TickContext], None]] = []
        self._stop_hooks: list[Callable[[WorldGrid, TickContext], None]] = []
        self._stop_requested: bool = False
        self._rng = DeterministicRandom(seed)

    @property
    def grid(self) -> WorldGrid:
        return self._grid

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def random(self) -> DeterministicRandom:
        return self._rng

    @property
    def seed(self) -> int:
        return self._rng.seed

    def reseed(self, seed: int | str) -> None:
        self._rng.set_seed(seed)

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[WorldGrid, TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[WorldGrid, TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self) -> None:
        self._clock.advance()
        ctx = self._clock.context(self._request_stop, self._rng)
        for system in self._systems:
            system(self._grid, ctx)
            if self._stop_requested:
                break

    def step(self) -> None:
        self._stop_requested = False
        self._tick()

    def advance(self, seconds: float) -> int:
        """Run the ticks that *seconds* of wall time make due. Returns ticks run."""
        due = self._clock.accumulate(seconds)
        self._stop_requested = False
        for ran in range(due):
            self._tick()
            if self._stop_requested:
                return ran + 1
        return due

    def run(self, n: int) -> None:
        self._stop_requested = False
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._start_hooks:
            hook(self._grid, ctx)

        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break

        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._stop_hooks:
            hook(self._grid, ctx)

    def run_until(self, predicate: Callable[[], bool], max_ticks: int) -> int:
        """Step until *predicate* holds or *max_ticks* elapse. Returns ticks run."""
        self._stop_requested = False
        ran = 0
        while ran < max_ticks and not predicate():
            self._tick()
            ran += 1
            if self._stop_requested:
                break
        return ran

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "tick_number": self._clock.tick_number,
            "tps": self._clock.tps,
            "seed": self._rng.seed,
            "rng_state": self._rng.getstate(),
            "grid": self._grid.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )

        snap_tps = data.get("tps")
        if snap_tps != self._clock.tps:
            raise SnapshotError(
                f"TPS mismatch: snapshot has {snap_tps}, engine has {self._clock.tps}"
            )

        self._grid.restore(data["grid"])
        self._clock.reset(data["tick_number"])
        self._rng.set_seed(data["seed"])
        self._rng.setstate(data["rng_state"])
