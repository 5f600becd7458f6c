"""Cave Explorer -- click to send the explorer through a generated cave.

Controls:
- Left click: queue a destination
- Right click: drop the newest queued destination
- C: cancel everything
- M: toggle roam mode
- R: reset the explorer to the entrance
- G: generate a new world (Shift+G replays the current seed)
- Arrow keys: scroll the view
"""
from __future__ import annotations

import logging
import sys

import pygame

from delve_move import NavigationResult, NavStatus, Session

from ui.constants import (
    FPS, GRID_H, GRID_W, SCREEN_H, SCREEN_W, SCROLL_STEP,
    TILE_SIZE, TPS, VIEW_H, VIEW_W, WORLD_H, WORLD_W,
)
from ui.renderer import draw_hover, draw_world
from ui.status import BAD, GOOD, INFO, WARN, StatusBar

SCROLL_KEYS = {
    pygame.K_LEFT: (-SCROLL_STEP, 0),
    pygame.K_RIGHT: (SCROLL_STEP, 0),
    pygame.K_UP: (0, -SCROLL_STEP),
    pygame.K_DOWN: (0, SCROLL_STEP),
}


class ExplorerState:
    """Holds the session and the status bar it reports into."""

    def __init__(self, seed: str | None = None) -> None:
        self.status = StatusBar()

        def on_seed(seed: int | str) -> None:
            self.status.seed = str(seed)
            pygame.display.set_caption(f"Cave Explorer - {seed}")

        def on_result(result: NavigationResult) -> None:
            x, y = result.target
            if result.status is NavStatus.COMPLETED:
                self.status.say(f"Arrived at ({x}, {y}) in {len(result.path) - 1} steps", GOOD)
            elif result.status is NavStatus.ALREADY_THERE:
                self.status.say(f"Already at ({x}, {y})")
            elif result.status is NavStatus.NO_PATH:
                self.status.say(f"No path to ({x}, {y})", BAD)
            else:
                self.status.say(f"Trip to ({x}, {y}) cancelled", WARN)

        self.session = Session(
            WORLD_W,
            WORLD_H,
            seed=seed,
            tps=TPS,
            viewport=(VIEW_W, VIEW_H),
            on_seed=on_seed,
            on_result=on_result,
        )
        self.report_generation()

    def report_generation(self) -> None:
        report = self.session.report
        self.status.say(
            f"{report.caves} caves, {report.reachable_ratio:.0%} open, {report.runtime_ms} ms"
        )

    def click(self, button: int, px: int, py: int) -> None:
        if not (0 <= px < GRID_W and 0 <= py < GRID_H):
            return
        grid = self.session.grid
        target = grid.to_world((px // TILE_SIZE, py // TILE_SIZE))
        if button == 1:
            if not self.session.enqueue(target):
                self.status.say(f"Cannot go to ({target.x}, {target.y})", BAD)
        elif button == 3:
            queued = self.session.controller.queued
            if queued:
                self.session.remove(len(queued) - 1)

    def key(self, key: int, mods: int) -> None:
        session = self.session
        if key == pygame.K_c:
            session.cancel_all()
        elif key == pygame.K_m:
            on = session.toggle_roam()
            self.status.say("Roam mode on" if on else "Roam mode off", WARN if on else INFO)
        elif key == pygame.K_r:
            session.reset()
            self.status.say("Explorer reset")
        elif key == pygame.K_g:
            if mods & pygame.KMOD_SHIFT:
                session.regenerate()
            else:
                session.generate()
            self.report_generation()
        elif key in SCROLL_KEYS:
            session.grid.move_viewport(*SCROLL_KEYS[key])


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s: %(message)s")
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Cave Explorer")
    clock = pygame.time.Clock()

    state = ExplorerState(sys.argv[1] if len(sys.argv) > 1 else None)

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    state.key(event.key, event.mod)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                state.click(event.button, *event.pos)

        state.session.advance(dt)

        state.status.roaming = state.session.roam.enabled
        state.status.queued = len(state.session.controller.queued)

        screen.fill((10, 10, 14))
        draw_world(screen, state.session.grid)
        draw_hover(screen, state.session.grid, *pygame.mouse.get_pos())
        state.status.draw(screen)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
