"""Screen layout and timing."""

WORLD_W = 120
WORLD_H = 80

VIEW_W = 60
VIEW_H = 40
TILE_SIZE = 12

GRID_W = VIEW_W * TILE_SIZE
GRID_H = VIEW_H * TILE_SIZE
STATUS_H = 28

SCREEN_W = GRID_W
SCREEN_H = GRID_H + STATUS_H

FPS = 60
TPS = 20

SCROLL_STEP = 5
