"""Session - a generated world, an agent, and the machinery that moves it."""
from __future__ import annotations

import logging
from typing import Callable

from delve import Engine, Position, WorldGrid
from delve_gen import GenerationConfig, GenerationReport, WorldGenerator, resolve_seed
from delve_path import PathFinder

from delve_move.agent import Agent
from delve_move.controller import MovementController
from delve_move.roam import RoamDirector
from delve_move.systems import make_movement_system, make_roam_system
from delve_move.types import MovementConfig, NavigationResult, RoamConfig

logger = logging.getLogger(__name__)

ORIGIN = Position(0, 0)


class Session:
    """Wires generation, pathfinding and movement onto one Engine.

    Regeneration and reset always cancel movement first, so nothing queued
    against the old world runs against the new one.
    """

    def __init__(
        self,
        width: int,
        height: int,
        seed: int | str | None = None,
        tps: int = 20,
        viewport: tuple[int, int] | None = None,
        generation: GenerationConfig | None = None,
        movement: MovementConfig | None = None,
        roam: RoamConfig | None = None,
        on_seed: Callable[[int | str], None] | None = None,
        on_result: Callable[[NavigationResult], None] | None = None,
    ) -> None:
        seed = resolve_seed(seed)
        self.engine = Engine(width, height, tps=tps, seed=seed, viewport=viewport)
        self.generator = WorldGenerator(self.engine.grid, seed, config=generation, on_seed=on_seed)
        self.report: GenerationReport = self.generator.generate()

        self.pathfinder = PathFinder(self.engine.grid)
        self.agent = Agent(self.engine.grid, ORIGIN)
        self.controller = MovementController(
            self.engine.grid, self.agent, self.pathfinder, movement, on_result=on_result,
        )
        self.roam = RoamDirector(self.controller, self.engine.grid, self.engine.random, roam)
        self.engine.add_system(make_roam_system(self.roam))
        self.engine.add_system(make_movement_system(self.controller))

    @property
    def grid(self) -> WorldGrid:
        return self.engine.grid

    @property
    def seed(self) -> int | str:
        return self.generator.seed

    # --- World lifecycle ---

    def _halt(self) -> None:
        self.roam.disable()
        self.controller.cancel_all()

    def generate(self, seed: int | str | None = None) -> GenerationReport:
        """Build a new world; a missing or blank seed gets a fresh one."""
        return self._regenerate(resolve_seed(seed))

    def regenerate(self) -> GenerationReport:
        """Rebuild the current seed's world from scratch."""
        return self._regenerate(None)

    def _regenerate(self, seed: int | str | None) -> GenerationReport:
        self._halt()
        self.grid.reset_all()
        self.report = self.generator.generate(seed)
        self.engine.reseed(self.generator.seed)
        self.agent.respawn(ORIGIN)
        return self.report

    def reset(self) -> None:
        """Stop everything and put the agent back at the origin."""
        self._halt()
        self.agent.respawn(ORIGIN)

    # --- Movement ---

    def enqueue(self, pos: tuple[int, int]) -> bool:
        return self.controller.enqueue(pos)

    def remove(self, index: int) -> Position | None:
        return self.controller.remove(index)

    def cancel_all(self) -> None:
        self.controller.cancel_all()

    def toggle_roam(self) -> bool:
        return self.roam.toggle()

    # --- Ticking ---

    def step(self) -> None:
        self.engine.step()

    def advance(self, seconds: float) -> int:
        return self.engine.advance(seconds)

    def run(self, n: int) -> None:
        self.engine.run(n)

    def run_until_idle(self, max_ticks: int = 10_000) -> int:
        return self.engine.run_until(lambda: self.controller.idle, max_ticks)
