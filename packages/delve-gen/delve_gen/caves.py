"""Cave placement and cellular-automaton smoothing."""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from delve import CellState, Position

from delve_gen.config import GenerationConfig

if TYPE_CHECKING:
    from delve import DeterministicRandom, WorldGrid

logger = logging.getLogger(__name__)

Cave = list[Position]


def cave_count(width: int, height: int, config: GenerationConfig) -> int:
    return max(config.min_caves, (width * height) // config.cells_per_cave)


def count_adjacent_walls(grid: WorldGrid, x: int, y: int) -> int:
    """Walled cells in the Moore neighbourhood; out of bounds counts as wall."""
    count = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            state = grid.state_at((x + dx, y + dy))
            if state is None or state is CellState.WALL:
                count += 1
    return count


def seed_cave(
    grid: WorldGrid,
    rng: DeterministicRandom,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    width: int,
    height: int,
    config: GenerationConfig,
) -> None:
    """Randomly open cells in ``[x0, x1) x [y0, y1)``, favouring the centre."""
    cx = x0 + width / 2
    cy = y0 + height / 2
    half_w = width / 2
    half_h = height / 2
    for y in range(y0, y1):
        for x in range(x0, x1):
            dist = abs(x - cx) / half_w + abs(y - cy) / half_h
            empty_prob = config.center_empty - config.edge_falloff * dist
            if rng.next() < empty_prob:
                grid.set_state((x, y), CellState.EMPTY)
            else:
                grid.set_state((x, y), CellState.WALL)


def smooth_cave(
    grid: WorldGrid,
    rng: DeterministicRandom,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    config: GenerationConfig,
) -> None:
    """Run the smoothing rounds over ``[x0, x1) x [y0, y1)``.

    Each round computes the next wall mask from the current grid, then writes
    it back in one go. Border cells are re-rolled every round.
    """
    for _ in range(config.smoothing_rounds):
        walls: list[list[bool]] = []
        for y in range(y0, y1):
            row: list[bool] = []
            for x in range(x0, x1):
                wall_count = count_adjacent_walls(grid, x, y)
                if x == x0 or y == y0 or x == x1 - 1 or y == y1 - 1:
                    row.append(rng.next() < config.border_wall_chance)
                elif grid.state_at((x, y)) is CellState.WALL:
                    row.append(wall_count >= config.wall_survive)
                else:
                    row.append(wall_count >= config.empty_collapse)
            walls.append(row)

        for y, row in zip(range(y0, y1), walls):
            for x, is_wall in zip(range(x0, x1), row):
                grid.set_state((x, y), CellState.WALL if is_wall else CellState.EMPTY)


def carve_cave(
    grid: WorldGrid,
    rng: DeterministicRandom,
    x0: int,
    y0: int,
    width: int,
    height: int,
    config: GenerationConfig,
) -> Cave:
    """Carve one organic cave and return its open cells, row-major."""
    x1 = min(x0 + width, grid.width - 1)
    y1 = min(y0 + height, grid.height - 1)

    seed_cave(grid, rng, x0, y0, x1, y1, width, height, config)
    smooth_cave(grid, rng, x0, y0, x1, y1, config)

    return [
        Position(x, y)
        for y in range(y0, y1)
        for x in range(x0, x1)
        if grid.state_at((x, y)) is CellState.EMPTY
    ]


def place_caves(
    grid: WorldGrid,
    rng: DeterministicRandom,
    config: GenerationConfig,
) -> list[Cave]:
    """Lay caves out on a near-square grid of regions, one per region.

    Regions whose cave would touch the world edge are skipped, as are caves
    that smoothing left without any open cell.
    """
    width, height = grid.width, grid.height
    num_caves = cave_count(width, height, config)
    divisions = math.ceil(math.sqrt(num_caves))
    div_w = width // divisions
    div_h = height // divisions
    cave_w = int(div_w * config.cave_fill)
    cave_h = int(div_h * config.cave_fill)
    logger.debug("Placing %d caves on a %dx%d region grid", num_caves, divisions, divisions)

    caves: list[Cave] = []
    for i in range(num_caves):
        div_x = i % divisions
        div_y = i // divisions
        cave_x = div_x * div_w + int(rng.next() * (div_w - cave_w) * config.cave_slack)
        cave_y = div_y * div_h + int(rng.next() * (div_h - cave_h) * config.cave_slack)

        if (
            cave_x > 0
            and cave_y > 0
            and cave_x + cave_w < width
            and cave_y + cave_h < height
        ):
            points = carve_cave(grid, rng, cave_x, cave_y, cave_w, cave_h, config)
            if points:
                caves.append(points)
                logger.debug(
                    "Cave at (%d,%d) size %dx%d: %d open cells",
                    cave_x, cave_y, cave_w, cave_h, len(points),
                )
    return caves
