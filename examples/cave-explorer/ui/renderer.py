"""Viewport rendering of the cave world."""
from __future__ import annotations

import pygame

from delve import CellState, WorldGrid

from ui.constants import GRID_H, GRID_W, TILE_SIZE

CELL_COLORS: dict[CellState, tuple[int, int, int]] = {
    CellState.EMPTY: (34, 32, 40),
    CellState.WALL: (92, 84, 74),
    CellState.PLAYER: (240, 210, 80),
    CellState.PLAYER_TRAIL: (150, 130, 60),
    CellState.PATH: (80, 200, 120),
    CellState.VISITED: (50, 70, 110),
    CellState.TARGET: (230, 80, 80),
    CellState.QUEUED_TARGET: (200, 120, 200),
}


def draw_world(surface: pygame.Surface, grid: WorldGrid) -> None:
    """Draw only the cells inside the viewport."""
    for pos in grid.visible_positions():
        local = grid.to_viewport(pos)
        if local is None:
            continue
        color = CELL_COLORS[grid.state_at(pos)]
        rect = pygame.Rect(local.x * TILE_SIZE, local.y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
        pygame.draw.rect(surface, color, rect)


def draw_hover(surface: pygame.Surface, grid: WorldGrid, mx: int, my: int) -> None:
    """Outline the tile under the cursor; red over rock."""
    if not (0 <= mx < GRID_W and 0 <= my < GRID_H):
        return
    tx, ty = mx // TILE_SIZE, my // TILE_SIZE
    walkable = grid.is_walkable(grid.to_world((tx, ty)))
    color = (255, 255, 255) if walkable else (255, 80, 80)
    rect = pygame.Rect(tx * TILE_SIZE, ty * TILE_SIZE, TILE_SIZE, TILE_SIZE)
    pygame.draw.rect(surface, color, rect, 1)
