"""Bottom status bar: latest message on the left, seed and mode on the right."""
from __future__ import annotations

import pygame

from ui.constants import GRID_H, SCREEN_W, STATUS_H

INFO = (200, 200, 200)
GOOD = (100, 255, 100)
WARN = (255, 180, 80)
BAD = (255, 80, 80)


class StatusBar:
    def __init__(self) -> None:
        self.message = ""
        self.color = INFO
        self.seed = ""
        self.roaming = False
        self.queued = 0
        self._font: pygame.font.Font | None = None

    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 14)
        return self._font

    def say(self, message: str, color: tuple[int, int, int] = INFO) -> None:
        self.message = message
        self.color = color

    def draw(self, surface: pygame.Surface) -> None:
        pygame.draw.rect(surface, (24, 22, 30), pygame.Rect(0, GRID_H, SCREEN_W, STATUS_H))
        font = self.font()
        if self.message:
            surface.blit(font.render(self.message, True, self.color), (8, GRID_H + 7))

        mode = "roam" if self.roaming else "manual"
        info = font.render(f"seed {self.seed}  {mode}  queued {self.queued}", True, INFO)
        surface.blit(info, (SCREEN_W - info.get_width() - 8, GRID_H + 7))
