"""PathFinder - grid-bound entry point for staged and one-shot searches."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve_path.search import PathSearch

if TYPE_CHECKING:
    from delve import Position, WorldGrid

logger = logging.getLogger(__name__)


class PathFinder:
    """Binds a grid to A*. Searches annotate VISITED cells unless disabled."""

    def __init__(self, grid: WorldGrid, annotate: bool = True) -> None:
        self._grid = grid
        self._annotate = annotate

    @property
    def grid(self) -> WorldGrid:
        return self._grid

    def search(self, start: tuple[int, int], goal: tuple[int, int]) -> PathSearch:
        """Begin a staged search; drive it with ``step()``."""
        return PathSearch(self._grid, start, goal, annotate=self._annotate)

    def find_path(
        self, start: tuple[int, int], goal: tuple[int, int]
    ) -> list[Position] | None:
        search = self.search(start, goal)
        path = search.run()
        if path is None:
            logger.debug(
                "No path from %s to %s after %d nodes", tuple(start), tuple(goal), search.expanded,
            )
        return path
