"""Decoration openings and the forced-open start area."""
from __future__ import annotations

from typing import TYPE_CHECKING

from delve import CellState

from delve_gen.config import GenerationConfig

if TYPE_CHECKING:
    from delve import DeterministicRandom, WorldGrid


def scatter_openings(
    grid: WorldGrid,
    rng: DeterministicRandom,
    config: GenerationConfig,
) -> int:
    """Open random wall cells to break up uniform rock.

    Returns the number of clear operations, diagonal buddies included.
    """
    attempts = int(grid.width * grid.height * config.decoration_ratio)
    opened = 0
    for _ in range(attempts):
        x = rng.next_int(0, grid.width - 1)
        y = rng.next_int(0, grid.height - 1)
        if grid.state_at((x, y)) is not CellState.WALL:
            continue
        grid.clear((x, y))
        opened += 1
        if rng.next_bool(config.decoration_cluster):
            dx = 1 if rng.next_bool() else -1
            dy = 1 if rng.next_bool() else -1
            if grid.clear((x + dx, y + dy)):
                opened += 1
    return opened


def clear_start_area(grid: WorldGrid, config: GenerationConfig) -> None:
    """Force the square anchored at the origin open."""
    for y in range(config.start_clear):
        for x in range(config.start_clear):
            grid.clear((x, y))
