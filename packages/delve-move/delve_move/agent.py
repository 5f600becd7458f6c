"""Agent - the walker that replays paths on the grid."""
from __future__ import annotations

from typing import TYPE_CHECKING

from delve import CellState, Position

if TYPE_CHECKING:
    from delve import WorldGrid


class Agent:
    """Occupies one PLAYER cell and leaves a PLAYER_TRAIL behind when moving.

    The viewport follows the agent when *follow* is set.
    """

    def __init__(
        self,
        grid: WorldGrid,
        start: tuple[int, int] = (0, 0),
        follow: bool = True,
    ) -> None:
        self._grid = grid
        self._follow = follow
        self._position = Position(*start)
        self._trail: list[Position] = []
        self._place(self._position)

    @property
    def position(self) -> Position:
        return self._position

    @property
    def trail(self) -> tuple[Position, ...]:
        return tuple(self._trail)

    def _place(self, pos: Position) -> None:
        self._grid.set_state(pos, CellState.PLAYER)
        if self._follow:
            self._grid.center_on(pos)

    def move_to(self, pos: tuple[int, int]) -> None:
        if self._grid.state_at(self._position) is CellState.PLAYER:
            self._grid.set_state(self._position, CellState.PLAYER_TRAIL)
            self._trail.append(self._position)
        self._position = Position(*pos)
        self._place(self._position)

    def clear_trail(self) -> int:
        cleared = 0
        for pos in self._trail:
            if self._grid.state_at(pos) is CellState.PLAYER_TRAIL:
                self._grid.clear(pos)
                cleared += 1
        self._trail.clear()
        return cleared

    def respawn(self, pos: tuple[int, int] = (0, 0)) -> None:
        """Drop the trail and reappear at *pos*."""
        if self._grid.state_at(self._position) is CellState.PLAYER:
            self._grid.clear(self._position)
        self.clear_trail()
        self._position = Position(*pos)
        self._place(self._position)
