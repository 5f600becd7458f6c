"""Tests for MovementController staging, results, and cancellation."""

import pytest

from delve import CellState, Position, WorldGrid
from delve_move import (
    Agent,
    MovementConfig,
    MovementController,
    NavState,
    NavStatus,
)

FAST = MovementConfig(nodes_per_tick=100, reveal_ticks=1, step_ticks=1, no_path_linger_ticks=3)


def _from_rows(rows):
    grid = WorldGrid(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == "#":
                grid.set_state((x, y), CellState.WALL)
    return grid


@pytest.fixture
def results():
    return []


def _setup(grid, results, config=FAST, start=(0, 0)):
    agent = Agent(grid, start)
    controller = MovementController(grid, agent, config=config, on_result=results.append)
    return agent, controller


def _drive(controller, max_ticks=5000):
    ticks = 0
    while not controller.idle and ticks < max_ticks:
        controller.tick()
        ticks += 1
    return ticks


class TestStaging:
    def test_exact_timeline(self, results):
        grid = WorldGrid(5, 1)
        agent, controller = _setup(grid, results)
        controller.enqueue((3, 0))

        controller.tick()
        assert controller.state is NavState.SEARCHING
        assert grid.state_at((3, 0)) is CellState.TARGET

        controller.tick()
        assert controller.state is NavState.REVEALED
        assert grid.state_at((1, 0)) is CellState.PATH
        assert grid.state_at((2, 0)) is CellState.PATH

        controller.tick()
        assert controller.state is NavState.REPLAYING

        controller.tick()
        assert agent.position == (1, 0)
        assert grid.state_at((0, 0)) is CellState.PLAYER_TRAIL
        controller.tick()
        assert agent.position == (2, 0)
        controller.tick()
        assert agent.position == (3, 0)
        assert controller.state is NavState.DONE
        assert controller.idle

        controller.tick()
        assert controller.state is NavState.IDLE

    def test_one_node_per_tick_by_default(self, results):
        grid = WorldGrid(10, 1)
        _, controller = _setup(grid, results, config=MovementConfig())
        controller.enqueue((9, 0))
        controller.tick()
        controller.tick()
        controller.tick()
        assert controller.state is NavState.SEARCHING
        assert controller.search.expanded == 2

    def test_default_pacing(self, results):
        grid = WorldGrid(5, 1)
        _, controller = _setup(grid, results, config=MovementConfig())
        controller.enqueue((3, 0))
        # 1 to start, 4 search steps, 10 reveal, 3 moves of 4 ticks
        assert _drive(controller) == 1 + 4 + 10 + 12


class TestCompletion:
    def test_arrives_and_cleans_up(self, results):
        grid = WorldGrid(8, 8)
        agent, controller = _setup(grid, results)
        controller.enqueue((6, 5))
        _drive(controller)

        assert agent.position == (6, 5)
        assert grid.state_at((6, 5)) is CellState.PLAYER
        assert grid.count(CellState.PLAYER) == 1
        for state in (CellState.PATH, CellState.VISITED, CellState.TARGET, CellState.PLAYER_TRAIL):
            assert grid.count(state) == 0

        assert len(results) == 1
        result = results[0]
        assert result.status is NavStatus.COMPLETED
        assert result.status.arrived
        assert result.target == (6, 5)
        assert result.path[0] == (0, 0)
        assert result.path[-1] == (6, 5)
        assert len(result.path) == 12
        assert controller.last_result is result

    def test_fifo_order(self, results):
        grid = WorldGrid(6, 6)
        _, controller = _setup(grid, results)
        targets = [Position(5, 0), Position(5, 5), Position(0, 5)]
        for t in targets:
            controller.enqueue(t)
        _drive(controller)
        assert [r.target for r in results] == targets
        assert all(r.status is NavStatus.COMPLETED for r in results)

    def test_already_there(self, results):
        grid = WorldGrid(6, 1)
        agent, controller = _setup(grid, results)
        controller.enqueue((3, 0))
        controller.enqueue((3, 0))
        _drive(controller)
        assert [r.status for r in results] == [NavStatus.COMPLETED, NavStatus.ALREADY_THERE]
        assert results[1].path == ((3, 0),)
        assert agent.position == (3, 0)

    def test_queued_marker_survives_passing_agent(self, results):
        grid = WorldGrid(6, 1)
        _, controller = _setup(grid, results)
        controller.enqueue((5, 0))
        controller.enqueue((2, 0))
        while not results:
            controller.tick()
        assert grid.state_at((2, 0)) is CellState.QUEUED_TARGET
        _drive(controller)
        assert results[-1].target == (2, 0)

    def test_route_does_not_hide_queued_marker(self, results):
        grid = WorldGrid(6, 1)
        slow = MovementConfig(nodes_per_tick=100, reveal_ticks=3, step_ticks=3)
        agent, controller = _setup(grid, results, config=slow)
        controller.enqueue((5, 0))
        controller.enqueue((2, 0))
        for _ in range(50):
            controller.tick()
            if controller.state is NavState.REVEALED:
                break
        assert controller.state is NavState.REVEALED
        assert [grid.state_at((x, 0)) for x in range(1, 5)] == [
            CellState.PATH, CellState.QUEUED_TARGET, CellState.PATH, CellState.PATH,
        ]
        while agent.position.x < 2 and not results:
            assert grid.state_at((2, 0)) is CellState.QUEUED_TARGET
            controller.tick()
        assert controller.state is NavState.REPLAYING

    def test_enqueue_while_busy(self, results):
        grid = WorldGrid(6, 6)
        agent, controller = _setup(grid, results)
        controller.enqueue((5, 5))
        for _ in range(4):
            controller.tick()
        assert controller.busy
        assert controller.enqueue((0, 5))
        _drive(controller)
        assert agent.position == (0, 5)


class TestNoPath:
    ROWS = [
        "....#.",
        "....#.",
        "....##",
    ]

    def test_reports_no_path(self, results):
        grid = _from_rows(self.ROWS)
        agent, controller = _setup(grid, results)
        controller.enqueue((5, 0))
        _drive(controller)
        assert results[-1].status is NavStatus.NO_PATH
        assert not results[-1].status.arrived
        assert agent.position == (0, 0)

    def test_target_lingers_then_clears(self, results):
        grid = _from_rows(self.ROWS)
        _, controller = _setup(grid, results)
        controller.enqueue((5, 0))
        _drive(controller)
        assert grid.state_at((5, 0)) is CellState.TARGET
        assert controller.cleanup_pending
        for _ in range(3):
            controller.tick()
        assert grid.state_at((5, 0)) is CellState.EMPTY
        assert not controller.cleanup_pending

    def test_next_navigation_proceeds(self, results):
        grid = _from_rows(self.ROWS)
        agent, controller = _setup(grid, results)
        controller.enqueue((5, 0))
        controller.enqueue((3, 2))
        _drive(controller)
        assert [r.status for r in results] == [NavStatus.NO_PATH, NavStatus.COMPLETED]
        assert agent.position == (3, 2)
        assert grid.count(CellState.TARGET) == 0

    def test_cancel_revokes_linger(self, results):
        grid = _from_rows(self.ROWS)
        _, controller = _setup(grid, results)
        controller.enqueue((5, 0))
        _drive(controller)
        controller.cancel_all()
        assert not controller.cleanup_pending
        assert grid.state_at((5, 0)) is CellState.EMPTY


class TestCancel:
    def test_cancel_mid_search(self, results):
        grid = WorldGrid(20, 20)
        agent, controller = _setup(grid, results, config=MovementConfig())
        controller.enqueue((19, 19))
        controller.enqueue((5, 5))
        for _ in range(6):
            controller.tick()
        assert controller.state is NavState.SEARCHING
        search = controller.search

        controller.cancel_all()
        assert controller.state is NavState.CANCELLED
        assert search.status.value == "cancelled"
        assert results[-1].status is NavStatus.CANCELLED
        assert results[-1].target == (19, 19)
        assert controller.queued == ()
        assert controller.idle
        for state in (CellState.PATH, CellState.VISITED, CellState.TARGET, CellState.QUEUED_TARGET):
            assert grid.count(state) == 0
        assert agent.position == (0, 0)

    def test_cancel_mid_replay(self, results):
        grid = WorldGrid(10, 1)
        agent, controller = _setup(grid, results)
        controller.enqueue((9, 0))
        for _ in range(6):
            controller.tick()
        assert controller.state is NavState.REPLAYING
        stopped_at = agent.position
        assert stopped_at != (0, 0)

        controller.cancel_all()
        assert agent.position == stopped_at
        assert grid.positions_with(CellState.PLAYER) == [stopped_at]
        assert grid.count(CellState.PLAYER_TRAIL) == 0
        assert grid.count(CellState.PATH) == 0

        controller.tick()
        assert controller.state is NavState.IDLE
        assert len(results) == 1

    def test_cancel_when_idle(self, results):
        grid = WorldGrid(4, 4)
        _, controller = _setup(grid, results)
        controller.cancel_all()
        assert controller.state is NavState.IDLE
        assert results == []

    def test_cancel_only_queued(self, results):
        grid = WorldGrid(4, 4)
        _, controller = _setup(grid, results)
        controller.enqueue((3, 3))
        controller.cancel_all()
        assert results == []
        assert grid.state_at((3, 3)) is CellState.EMPTY

    def test_usable_after_cancel(self, results):
        grid = WorldGrid(6, 6)
        agent, controller = _setup(grid, results)
        controller.enqueue((5, 5))
        controller.tick()
        controller.cancel_all()
        controller.enqueue((2, 0))
        _drive(controller)
        assert agent.position == (2, 0)
        assert results[-1].status is NavStatus.COMPLETED


class TestConfig:
    def test_rejects_zero_values(self):
        with pytest.raises(ValueError):
            MovementConfig(nodes_per_tick=0)
        with pytest.raises(ValueError):
            MovementConfig(step_ticks=0)
