"""System factories that plug movement into the Engine tick loop."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from delve import TickContext, WorldGrid

    from delve_move.controller import MovementController
    from delve_move.roam import RoamDirector


def make_movement_system(
    controller: MovementController,
) -> Callable[[WorldGrid, TickContext], None]:
    """Return a system that advances the controller once per tick."""

    def movement_system(grid: WorldGrid, ctx: TickContext) -> None:
        controller.tick()

    return movement_system


def make_roam_system(
    director: RoamDirector,
) -> Callable[[WorldGrid, TickContext], None]:
    """Return a system that lets the roam director pick destinations."""

    def roam_system(grid: WorldGrid, ctx: TickContext) -> None:
        director.tick()

    return roam_system
