"""MovementController - one navigation at a time, driven by ticks.

A navigation runs ``IDLE -> SEARCHING -> REVEALED -> REPLAYING -> DONE``.
Each ``tick()`` performs at most one transition's worth of work: a batch of
search nodes, one countdown decrement, or one agent step. ``cancel_all()``
may be called between any two ticks; it stops the search, drops the queue,
revokes any scheduled cleanup and leaves the agent where it stands.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from delve import CellState, Position

from delve_move.queue import DestinationQueue
from delve_move.types import (
    SEARCH_MARKS,
    MovementConfig,
    NavigationResult,
    NavState,
    NavStatus,
)
from delve_path import PathFinder, SearchStatus

if TYPE_CHECKING:
    from delve import WorldGrid
    from delve_path import PathSearch

    from delve_move.agent import Agent

logger = logging.getLogger(__name__)


@dataclass
class _Cleanup:
    """Deferred reset of a TARGET tag left behind by a failed search."""

    position: Position
    remaining: int


class MovementController:
    def __init__(
        self,
        grid: WorldGrid,
        agent: Agent,
        pathfinder: PathFinder | None = None,
        config: MovementConfig | None = None,
        on_result: Callable[[NavigationResult], None] | None = None,
    ) -> None:
        self._grid = grid
        self._agent = agent
        self._pathfinder = pathfinder if pathfinder is not None else PathFinder(grid)
        self._config = config if config is not None else MovementConfig()
        self._on_result = on_result
        self._queue = DestinationQueue()

        self._state = NavState.IDLE
        self._current: Position | None = None
        self._search: PathSearch | None = None
        self._path: list[Position] | None = None
        self._step_index = 0
        self._countdown = 0
        self._cleanup: _Cleanup | None = None
        self._last_result: NavigationResult | None = None

    # --- Queries ---

    @property
    def state(self) -> NavState:
        return self._state

    @property
    def current(self) -> Position | None:
        return self._current

    @property
    def queued(self) -> tuple[Position, ...]:
        return tuple(self._queue)

    @property
    def busy(self) -> bool:
        return self._current is not None

    @property
    def idle(self) -> bool:
        return self._current is None and not self._queue

    @property
    def search(self) -> PathSearch | None:
        return self._search

    @property
    def path(self) -> list[Position] | None:
        return self._path

    @property
    def last_result(self) -> NavigationResult | None:
        return self._last_result

    @property
    def cleanup_pending(self) -> bool:
        return self._cleanup is not None

    # --- Requests ---

    def enqueue(self, pos: tuple[int, int]) -> bool:
        """Queue a destination. Walls, the agent's cell and off-map points are refused."""
        state = self._grid.state_at(pos)
        if state is None or state is CellState.WALL or state is CellState.PLAYER:
            return False
        position = self._queue.enqueue(pos)
        self._grid.annotate(position, CellState.QUEUED_TARGET)
        return True

    def remove(self, index: int) -> Position | None:
        """Drop a queued (not yet started) destination and clear its marker."""
        pos = self._queue.remove(index)
        if pos is not None:
            self._clear_queued_marker(pos)
        return pos

    def _clear_queued_marker(self, pos: Position) -> None:
        # Another queued entry may still point at the same cell.
        if pos in self._queue:
            return
        if self._grid.state_at(pos) is CellState.QUEUED_TARGET:
            self._grid.clear(pos)

    def cancel_all(self) -> None:
        """Abandon the current navigation and every queued one. Safe at any time."""
        if self._search is not None:
            self._search.cancel()
        self._cleanup = None
        for pos in self._queue.clear():
            if self._grid.state_at(pos) is CellState.QUEUED_TARGET:
                self._grid.clear(pos)

        target = self._current
        self._grid.reset_transient(SEARCH_MARKS)
        self._agent.clear_trail()
        self._current = None
        self._search = None
        self._path = None
        self._countdown = 0

        if target is not None:
            logger.info("Navigation to (%d,%d) cancelled", target.x, target.y)
            self._state = NavState.CANCELLED
            self._emit(NavigationResult(target, NavStatus.CANCELLED))
        else:
            self._state = NavState.IDLE

    # --- Tick ---

    def tick(self) -> None:
        self._tick_cleanup()

        if self._state in (NavState.DONE, NavState.CANCELLED):
            self._state = NavState.IDLE

        if self._state is NavState.IDLE:
            self._start_next()
        elif self._state is NavState.SEARCHING:
            self._advance_search()
        elif self._state is NavState.REVEALED:
            self._countdown -= 1
            if self._countdown <= 0:
                self._state = NavState.REPLAYING
                self._step_index = 1
                self._countdown = self._config.step_ticks
        elif self._state is NavState.REPLAYING:
            self._advance_replay()

    def _tick_cleanup(self) -> None:
        cleanup = self._cleanup
        if cleanup is None:
            return
        cleanup.remaining -= 1
        if cleanup.remaining > 0:
            return
        self._cleanup = None
        if (
            cleanup.position != self._current
            and self._grid.state_at(cleanup.position) is CellState.TARGET
        ):
            self._grid.clear(cleanup.position)

    def _start_next(self) -> None:
        target = self._queue.pop_next()
        if target is None:
            return
        self._current = target
        self._grid.reset_transient(SEARCH_MARKS)

        start = self._agent.position
        if target == start:
            self._finish(NavStatus.ALREADY_THERE, [start])
            return

        self._grid.annotate(target, CellState.TARGET)
        self._search = self._pathfinder.search(start, target)
        self._state = NavState.SEARCHING
        logger.debug(
            "Navigating (%d,%d) -> (%d,%d)", start.x, start.y, target.x, target.y,
        )

    def _advance_search(self) -> None:
        assert self._search is not None and self._current is not None
        status = self._search.status
        for _ in range(self._config.nodes_per_tick):
            status = self._search.step()
            if status is not SearchStatus.SEARCHING:
                break

        if status is SearchStatus.FOUND:
            path = self._search.path
            assert path is not None
            self._search = None
            if len(path) <= 1:
                self._finish(NavStatus.ALREADY_THERE, path)
                return
            self._path = path
            for pos in path[1:-1]:
                if self._grid.state_at(pos) is not CellState.QUEUED_TARGET:
                    self._grid.annotate(pos, CellState.PATH)
            self._countdown = self._config.reveal_ticks
            self._state = NavState.REVEALED
        elif status is SearchStatus.NO_PATH:
            target = self._current
            logger.info("No path to (%d,%d)", target.x, target.y)
            self._search = None
            self._cleanup = _Cleanup(target, self._config.no_path_linger_ticks)
            self._current = None
            self._state = NavState.DONE
            self._emit(NavigationResult(target, NavStatus.NO_PATH))

    def _advance_replay(self) -> None:
        assert self._path is not None
        self._countdown -= 1
        if self._countdown > 0:
            return
        self._agent.move_to(self._path[self._step_index])
        self._step_index += 1
        if self._step_index >= len(self._path):
            self._finish(NavStatus.COMPLETED, self._path)
        else:
            self._countdown = self._config.step_ticks

    def _remark_queued(self) -> None:
        # Overlays and the agent's trail may have painted over queued markers.
        for pos in self._queue:
            if self._grid.state_at(pos) is CellState.EMPTY:
                self._grid.annotate(pos, CellState.QUEUED_TARGET)

    def _finish(self, status: NavStatus, path: list[Position]) -> None:
        target = self._current
        assert target is not None
        self._grid.reset_transient(SEARCH_MARKS)
        self._agent.clear_trail()
        self._remark_queued()
        self._current = None
        self._path = None
        self._state = NavState.DONE
        self._emit(NavigationResult(target, status, tuple(path)))

    def _emit(self, result: NavigationResult) -> None:
        self._last_result = result
        if self._on_result is not None:
            self._on_result(result)
