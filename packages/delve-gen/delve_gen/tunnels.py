"""Tunnel carving and cave-graph connection."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve import Position

from delve_gen.config import GenerationConfig

if TYPE_CHECKING:
    from delve import DeterministicRandom, WorldGrid

    from delve_gen.caves import Cave

logger = logging.getLogger(__name__)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _widen(
    grid: WorldGrid,
    rng: DeterministicRandom,
    x: int,
    y: int,
) -> None:
    side_x = 1 if rng.next() < 0.5 else -1
    side_y = 1 if rng.next() < 0.5 else -1
    if rng.next() < 0.5:
        grid.clear((x + side_x, y))
        grid.clear((x, y + side_y))
    elif rng.next() < 0.5:
        grid.clear((x + side_x, y))
    else:
        grid.clear((x, y + side_y))


def carve_tunnel(
    grid: WorldGrid,
    rng: DeterministicRandom,
    start: tuple[int, int],
    end: tuple[int, int],
    config: GenerationConfig,
) -> int:
    """Carve a wandering corridor from *start* to *end*. Returns steps taken.

    Each step advances one axis toward the target: usually whichever axis
    shortens the Manhattan distance more, sometimes the other one. Picking an
    axis that is already aligned wastes the step in place, so the count can
    exceed the Manhattan distance.
    """
    x, y = start
    ex, ey = end
    steps = 0
    while x != ex or y != ey:
        dist_if_x = abs(ex - (x + _sign(ex - x))) + abs(ey - y)
        dist_if_y = abs(ex - x) + abs(ey - (y + _sign(ey - y)))

        if rng.next() < config.tunnel_greedy:
            move_x = dist_if_x <= dist_if_y
        else:
            move_x = dist_if_x > dist_if_y

        if move_x and x != ex:
            x += _sign(ex - x)
        elif y != ey:
            y += _sign(ey - y)

        grid.clear((x, y))
        steps += 1

        if rng.next() < config.tunnel_widen:
            _widen(grid, rng, x, y)
    return steps


def connect_caves(
    grid: WorldGrid,
    rng: DeterministicRandom,
    caves: list[Cave],
    config: GenerationConfig,
) -> int:
    """Link caves into a connected graph, then tie the nearest one to the origin.

    Returns the number of tunnels carved.
    """
    if len(caves) <= 1:
        logger.debug("Not enough caves to connect (%d)", len(caves))
        return 0

    tunnels = 0
    for current, following in zip(caves, caves[1:]):
        start = current[rng.next_int(0, len(current) - 1)]
        end = following[rng.next_int(0, len(following) - 1)]
        logger.debug("Tunnel (%d,%d) -> (%d,%d)", start.x, start.y, end.x, end.y)
        carve_tunnel(grid, rng, start, end, config)
        tunnels += 1

    extra = int(len(caves) * config.extra_connection_ratio)
    logger.debug("Adding %d extra cave connections", extra)
    for _ in range(extra):
        first = rng.next_int(0, len(caves) - 1)
        second = rng.next_int(0, len(caves) - 1)
        while second == first:
            second = rng.next_int(0, len(caves) - 1)
        cave_a, cave_b = caves[first], caves[second]
        start = cave_a[rng.next_int(0, len(cave_a) - 1)]
        end = cave_b[rng.next_int(0, len(cave_b) - 1)]
        carve_tunnel(grid, rng, start, end, config)
        tunnels += 1

    connect_to_start(grid, rng, caves, config)
    return tunnels + 1


def nearest_cave_point(caves: list[Cave], origin: tuple[int, int]) -> Position | None:
    """Closest cave cell to *origin* by Manhattan distance; first found wins ties."""
    best: Position | None = None
    best_dist = -1
    for cave in caves:
        for point in cave:
            dist = abs(point.x - origin[0]) + abs(point.y - origin[1])
            if best is None or dist < best_dist:
                best = point
                best_dist = dist
    return best


def connect_to_start(
    grid: WorldGrid,
    rng: DeterministicRandom,
    caves: list[Cave],
    config: GenerationConfig,
    origin: tuple[int, int] = (0, 0),
) -> Position | None:
    target = nearest_cave_point(caves, origin)
    if target is None:
        return None
    logger.debug("Connecting origin to cave at (%d,%d)", target.x, target.y)
    carve_tunnel(grid, rng, origin, target, config)
    return target
