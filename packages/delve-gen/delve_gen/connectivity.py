"""Reachability from the origin, repair corridors, and sealing of dead pockets."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve import CellState, Position

from delve_gen.config import GenerationConfig

if TYPE_CHECKING:
    from delve import DeterministicRandom, WorldGrid

logger = logging.getLogger(__name__)

# Right, Left, Down, Up: the order repair picks index into, and the order the
# flood fill visits in.
_REPAIR_DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass
class ConnectivityResult:
    reachable: int
    total: int
    repaired: bool
    repair_paths: int
    sealed: int

    @property
    def ratio(self) -> float:
        return self.reachable / self.total if self.total else 0.0


def flood_fill(grid: WorldGrid, origin: tuple[int, int] = (0, 0)) -> list[Position]:
    """Every non-wall cell 4-connected to *origin*, in depth-first visit order.

    Uses an explicit stack. Neighbours are pushed in reverse so the visit
    order matches a recursive right/left/down/up traversal.
    """
    visited: set[tuple[int, int]] = set()
    order: list[Position] = []
    stack: list[tuple[int, int]] = [tuple(origin)]
    while stack:
        x, y = stack.pop()
        if (x, y) in visited:
            continue
        state = grid.state_at((x, y))
        if state is None or state is CellState.WALL:
            continue
        visited.add((x, y))
        order.append(Position(x, y))
        for dx, dy in reversed(_REPAIR_DIRECTIONS):
            stack.append((x + dx, y + dy))
    return order


def carve_repair_paths(
    grid: WorldGrid,
    rng: DeterministicRandom,
    reachable: list[Position],
    config: GenerationConfig,
) -> int:
    """Drive straight corridors out of random reachable cells. Returns corridor count."""
    budget = min(config.max_repair_paths, len(reachable) // config.repair_budget_divisor)
    lo, hi = config.repair_length
    for _ in range(budget):
        start = reachable[rng.next_int(0, len(reachable) - 1)]
        dx, dy = _REPAIR_DIRECTIONS[rng.next_int(0, len(_REPAIR_DIRECTIONS) - 1)]
        length = rng.next_int(lo, hi)

        x, y = start
        for _ in range(length):
            x += dx
            y += dy
            if not grid.in_bounds((x, y)):
                break
            grid.clear((x, y))
            if rng.next_bool(config.repair_widen):
                # perpendicular offset
                grid.clear((x + dy, y + dx))
    return budget


def seal_unreachable(grid: WorldGrid, reachable: set[tuple[int, int]]) -> int:
    """Wall off every EMPTY cell outside *reachable*. Returns cells sealed."""
    sealed = 0
    for pos in grid.positions_with(CellState.EMPTY):
        if pos not in reachable:
            grid.set_state(pos, CellState.WALL)
            sealed += 1
    return sealed


def ensure_connectivity(
    grid: WorldGrid,
    rng: DeterministicRandom,
    config: GenerationConfig,
    origin: tuple[int, int] = (0, 0),
) -> ConnectivityResult:
    """Guarantee every EMPTY cell is reachable from *origin*.

    Repair runs at most once and only when too little of the map is
    reachable. The reachable set is taken before repair, so sealing prunes
    anything the corridors opened that was not already connected.
    """
    reachable = flood_fill(grid, origin)
    total = grid.width * grid.height
    ratio = len(reachable) / total
    logger.info(
        "Reachable: %d cells (%.1f%% of map)", len(reachable), ratio * 100,
    )

    repair_paths = 0
    repaired = ratio < config.min_reachable_ratio
    if repaired:
        logger.info("Map has poor connectivity, adding repair corridors")
        repair_paths = carve_repair_paths(grid, rng, reachable, config)

    sealed = seal_unreachable(grid, set(reachable))
    logger.debug("Sealed %d unreachable cells", sealed)
    return ConnectivityResult(
        reachable=len(reachable),
        total=total,
        repaired=repaired,
        repair_paths=repair_paths,
        sealed=sealed,
    )
