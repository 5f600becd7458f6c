"""WorldGrid - dense 2D cell storage with a clamped viewport."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from delve.types import (
    TRANSIENT_STATES,
    CellState,
    Position,
    SnapshotError,
)

if TYPE_CHECKING:
    from delve.rng import DeterministicRandom

# North, East, South, West. Pathfinding tie-breaks depend on this order.
DIRECTIONS_4: tuple[tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

SYMBOLS: dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.WALL: "#",
    CellState.PLAYER: "@",
    CellState.PLAYER_TRAIL: "~",
    CellState.PATH: "*",
    CellState.VISITED: "o",
    CellState.TARGET: "X",
    CellState.QUEUED_TARGET: "q",
}
_STATES_BY_SYMBOL = {symbol: state for state, symbol in SYMBOLS.items()}


class Cell:
    __slots__ = ("position", "state")

    def __init__(self, position: Position, state: CellState = CellState.EMPTY) -> None:
        self.position = position
        self.state = state

    def __repr__(self) -> str:
        return f"Cell({self.position.x}, {self.position.y}, {self.state.name})"

    def is_walkable(self) -> bool:
        return self.state is not CellState.WALL

    def set(self, state: CellState) -> None:
        self.state = state

    def reset(self) -> None:
        self.state = CellState.EMPTY


@dataclass
class Viewport:
    """Window into the world, in world coordinates."""

    offset_x: int
    offset_y: int
    width: int
    height: int

    def contains(self, pos: tuple[int, int]) -> bool:
        x, y = pos
        return (
            self.offset_x <= x < self.offset_x + self.width
            and self.offset_y <= y < self.offset_y + self.height
        )


class WorldGrid:
    def __init__(
        self,
        width: int,
        height: int,
        viewport_width: int | None = None,
        viewport_height: int | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"World dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: list[list[Cell]] = [
            [Cell(Position(x, y)) for x in range(width)] for y in range(height)
        ]
        self._viewport = Viewport(
            0,
            0,
            min(width, viewport_width or width),
            min(height, viewport_height or height),
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return self._width * self._height

    # --- Single-cell queries ---

    def in_bounds(self, pos: tuple[int, int]) -> bool:
        x, y = pos
        return 0 <= x < self._width and 0 <= y < self._height

    def cell_at(self, pos: tuple[int, int]) -> Cell | None:
        x, y = pos
        if 0 <= x < self._width and 0 <= y < self._height:
            return self._cells[y][x]
        return None

    def state_at(self, pos: tuple[int, int]) -> CellState | None:
        cell = self.cell_at(pos)
        return cell.state if cell is not None else None

    def is_walkable(self, pos: tuple[int, int]) -> bool:
        cell = self.cell_at(pos)
        return cell is not None and cell.is_walkable()

    def neighbors4(self, pos: tuple[int, int]) -> list[Cell]:
        """Walkable in-bounds neighbours in N, E, S, W order."""
        x, y = pos
        result: list[Cell] = []
        for dx, dy in DIRECTIONS_4:
            cell = self.cell_at((x + dx, y + dy))
            if cell is not None and cell.is_walkable():
                result.append(cell)
        return result

    # --- Mutation ---

    def set_state(self, pos: tuple[int, int], state: CellState) -> bool:
        """Tag a cell. Returns False (and does nothing) when out of bounds."""
        cell = self.cell_at(pos)
        if cell is None:
            return False
        cell.set(state)
        return True

    def clear(self, pos: tuple[int, int]) -> bool:
        return self.set_state(pos, CellState.EMPTY)

    def annotate(self, pos: tuple[int, int], state: CellState) -> bool:
        """Layer a transient tag over an empty-ish cell. Walls are never annotated."""
        cell = self.cell_at(pos)
        if cell is None or cell.state is CellState.WALL:
            return False
        cell.set(state)
        return True

    def fill(self, state: CellState) -> None:
        for row in self._cells:
            for cell in row:
                cell.state = state

    def reset_all(self) -> None:
        self.fill(CellState.EMPTY)

    def reset_transient(self, states: Iterable[CellState] = TRANSIENT_STATES) -> int:
        """Reset cells carrying any of *states* to EMPTY. Returns the count.

        Only transient tags can be cleared this way; WALL and PLAYER are kept.
        """
        targets = frozenset(states) & TRANSIENT_STATES
        cleared = 0
        for row in self._cells:
            for cell in row:
                if cell.state in targets:
                    cell.state = CellState.EMPTY
                    cleared += 1
        return cleared

    # --- Multi-cell queries ---

    def positions(self) -> Iterator[Position]:
        """All positions, row-major."""
        for row in self._cells:
            for cell in row:
                yield cell.position

    def positions_with(self, state: CellState) -> list[Position]:
        return [
            cell.position for row in self._cells for cell in row if cell.state is state
        ]

    def count(self, state: CellState) -> int:
        return sum(1 for row in self._cells for cell in row if cell.state is state)

    def random_empty_position(self, rng: DeterministicRandom) -> Position | None:
        """Pick uniformly among EMPTY cells using the caller's seeded RNG."""
        empty = self.positions_with(CellState.EMPTY)
        if not empty:
            return None
        return empty[rng.next_int(0, len(empty) - 1)]

    # --- Viewport ---

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def _clamp_viewport(self, offset_x: int, offset_y: int) -> None:
        vp = self._viewport
        max_x = max(0, self._width - vp.width)
        max_y = max(0, self._height - vp.height)
        vp.offset_x = min(max(0, offset_x), max_x)
        vp.offset_y = min(max(0, offset_y), max_y)

    def resize_viewport(self, width: int, height: int) -> None:
        vp = self._viewport
        vp.width = max(1, min(width, self._width))
        vp.height = max(1, min(height, self._height))
        self._clamp_viewport(vp.offset_x, vp.offset_y)

    def move_viewport(self, dx: int, dy: int) -> None:
        vp = self._viewport
        self._clamp_viewport(vp.offset_x + dx, vp.offset_y + dy)

    def center_on(self, pos: tuple[int, int]) -> None:
        vp = self._viewport
        self._clamp_viewport(pos[0] - vp.width // 2, pos[1] - vp.height // 2)

    def to_viewport(self, pos: tuple[int, int]) -> Position | None:
        """World -> viewport-relative coordinates, or None if not visible."""
        if not self._viewport.contains(pos):
            return None
        return Position(pos[0] - self._viewport.offset_x, pos[1] - self._viewport.offset_y)

    def to_world(self, pos: tuple[int, int]) -> Position:
        return Position(pos[0] + self._viewport.offset_x, pos[1] + self._viewport.offset_y)

    def visible_positions(self) -> list[Position]:
        vp = self._viewport
        return [
            Position(x, y)
            for y in range(vp.offset_y, vp.offset_y + vp.height)
            for x in range(vp.offset_x, vp.offset_x + vp.width)
        ]

    # --- Snapshot / Restore ---

    def render(self) -> str:
        """ASCII picture of the world, one line per row."""
        return "\n".join(
            "".join(SYMBOLS[cell.state] for cell in row) for row in self._cells
        )

    def snapshot(self) -> dict[str, Any]:
        return {
            "width": self._width,
            "height": self._height,
            "rows": self.render().split("\n"),
        }

    def restore(self, data: dict[str, Any]) -> None:
        if data.get("width") != self._width or data.get("height") != self._height:
            raise SnapshotError(
                f"Dimension mismatch: snapshot is {data.get('width')}x{data.get('height')}, "
                f"grid is {self._width}x{self._height}"
            )
        rows = data["rows"]
        if len(rows) != self._height or any(len(r) != self._width for r in rows):
            raise SnapshotError("Snapshot rows do not match grid dimensions")
        states: list[list[CellState]] = []
        for row in rows:
            try:
                states.append([_STATES_BY_SYMBOL[ch] for ch in row])
            except KeyError as exc:
                raise SnapshotError(f"Unknown cell symbol {exc.args[0]!r}") from None
        for y, row_states in enumerate(states):
            for x, state in enumerate(row_states):
                self._cells[y][x].state = state
