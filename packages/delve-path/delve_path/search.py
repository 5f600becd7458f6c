"""A* search over a WorldGrid, runnable one node at a time."""
from __future__ import annotations

import heapq
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from delve import CellState, Position

if TYPE_CHECKING:
    from delve import WorldGrid


class SearchStatus(Enum):
    SEARCHING = "searching"
    FOUND = "found"
    NO_PATH = "no_path"
    CANCELLED = "cancelled"


# Tags the visited overlay must not paint over.
_PROTECTED = frozenset({
    CellState.WALL,
    CellState.PLAYER,
    CellState.TARGET,
    CellState.QUEUED_TARGET,
})


def manhattan(a: tuple[int, int], b: tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class SearchNode:
    position: Position
    g: int
    h: int
    parent: SearchNode | None = None

    @property
    def f(self) -> int:
        return self.g + self.h


class PathSearch:
    """One A* run from *start* to *goal* with unit step cost.

    ``step()`` finalizes a single node and returns the new status, so callers
    can interleave the search with animation. When *annotate* is set, every
    finalized node other than start and goal is tagged VISITED on the grid.

    Ties on f resolve to the node discovered first; a g-score improvement
    keeps the node's original discovery order.
    """

    def __init__(
        self,
        grid: WorldGrid,
        start: tuple[int, int],
        goal: tuple[int, int],
        annotate: bool = False,
    ) -> None:
        self._grid = grid
        self._start = Position(*start)
        self._goal = Position(*goal)
        self._annotate = annotate
        self._status = SearchStatus.SEARCHING
        self._path: list[Position] | None = None
        self._expanded = 0

        root = SearchNode(self._start, 0, manhattan(self._start, self._goal))
        self._nodes: dict[Position, SearchNode] = {self._start: root}
        self._order: dict[Position, int] = {self._start: 0}
        self._open: list[tuple[int, int, Position]] = [(root.f, 0, self._start)]
        self._closed: set[Position] = set()

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def start(self) -> Position:
        return self._start

    @property
    def goal(self) -> Position:
        return self._goal

    @property
    def path(self) -> list[Position] | None:
        return self._path

    @property
    def expanded(self) -> int:
        """Nodes finalized so far."""
        return self._expanded

    @property
    def done(self) -> bool:
        return self._status is not SearchStatus.SEARCHING

    def cancel(self) -> None:
        if self._status is SearchStatus.SEARCHING:
            self._status = SearchStatus.CANCELLED
            self._open.clear()

    def _pop(self) -> SearchNode | None:
        while self._open:
            f, _, pos = heapq.heappop(self._open)
            node = self._nodes[pos]
            if pos in self._closed or f != node.f:
                continue
            return node
        return None

    def step(self) -> SearchStatus:
        if self._status is not SearchStatus.SEARCHING:
            return self._status

        current = self._pop()
        if current is None:
            self._status = SearchStatus.NO_PATH
            return self._status

        if current.position == self._goal:
            self._path = _reconstruct(current)
            self._status = SearchStatus.FOUND
            return self._status

        self._closed.add(current.position)
        self._expanded += 1
        if self._annotate and current.position != self._start:
            state = self._grid.state_at(current.position)
            if state is not None and state not in _PROTECTED:
                self._grid.set_state(current.position, CellState.VISITED)

        for cell in self._grid.neighbors4(current.position):
            pos = cell.position
            if pos in self._closed:
                continue
            g = current.g + 1
            existing = self._nodes.get(pos)
            if existing is not None and g >= existing.g:
                continue
            if existing is None:
                node = SearchNode(pos, g, manhattan(pos, self._goal), current)
                self._nodes[pos] = node
                self._order[pos] = len(self._order)
            else:
                node = existing
                node.g = g
                node.parent = current
            heapq.heappush(self._open, (node.f, self._order[pos], pos))
        return self._status

    def run(self) -> list[Position] | None:
        """Step to completion. Returns the path, or None if there is none."""
        while self.step() is SearchStatus.SEARCHING:
            pass
        return self._path


def _reconstruct(node: SearchNode) -> list[Position]:
    path: list[Position] = []
    current: SearchNode | None = node
    while current is not None:
        path.append(current.position)
        current = current.parent
    path.reverse()
    return path


def find_path(
    grid: WorldGrid,
    start: tuple[int, int],
    goal: tuple[int, int],
    annotate: bool = False,
) -> list[Position] | None:
    """Shortest 4-connected path from *start* to *goal*, both inclusive."""
    return PathSearch(grid, start, goal, annotate=annotate).run()
