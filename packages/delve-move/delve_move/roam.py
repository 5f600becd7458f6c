"""RoamDirector - keeps the agent wandering to random open cells."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve_move.types import RoamConfig

if TYPE_CHECKING:
    from delve import DeterministicRandom, Position, WorldGrid

    from delve_move.controller import MovementController

logger = logging.getLogger(__name__)


class RoamDirector:
    """Picks destinations with the session's seeded RNG while enabled.

    A new pick is only made once the controller has nothing to do; the wait
    before it depends on how the previous trip ended.
    """

    def __init__(
        self,
        controller: MovementController,
        grid: WorldGrid,
        rng: DeterministicRandom,
        config: RoamConfig | None = None,
    ) -> None:
        self._controller = controller
        self._grid = grid
        self._rng = rng
        self._config = config if config is not None else RoamConfig()
        self._enabled = False
        self._countdown = 0
        self._awaiting: Position | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def countdown(self) -> int:
        return self._countdown

    @property
    def awaiting(self) -> Position | None:
        return self._awaiting

    def enable(self) -> None:
        if not self._enabled:
            self._enabled = True
            self._countdown = 0
            logger.debug("Roam mode on")

    def disable(self) -> None:
        """Stop roaming and revoke the pending pick."""
        self._enabled = False
        self._countdown = 0
        self._awaiting = None

    def toggle(self) -> bool:
        if self._enabled:
            self.disable()
        else:
            self.enable()
        return self._enabled

    def tick(self) -> None:
        if not self._enabled:
            return

        controller = self._controller
        if self._awaiting is not None:
            if not controller.idle:
                return
            result = controller.last_result
            arrived = result is not None and result.target == self._awaiting and result.status.arrived
            if arrived:
                lo, hi = self._config.success_delay
                self._countdown = self._rng.next_int(lo, hi)
            else:
                self._countdown = self._config.failure_delay
            self._awaiting = None

        if self._countdown > 0:
            self._countdown -= 1
            return

        if not controller.idle:
            self._countdown = self._config.busy_delay
            return

        target = self._grid.random_empty_position(self._rng)
        if target is None:
            self._countdown = self._config.empty_delay
            return
        if controller.enqueue(target):
            self._awaiting = target
        else:
            self._countdown = self._config.failure_delay
