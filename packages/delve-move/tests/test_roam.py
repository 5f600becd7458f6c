"""Tests for RoamDirector picks, delays, and revocation."""

import pytest

from delve import CellState, DeterministicRandom, Engine, WorldGrid
from delve_move import (
    Agent,
    MovementConfig,
    MovementController,
    NavStatus,
    RoamConfig,
    RoamDirector,
    make_movement_system,
    make_roam_system,
)

FAST = MovementConfig(nodes_per_tick=500, reveal_ticks=1, step_ticks=1)


def _setup(grid, seed=1, config=None, results=None):
    agent = Agent(grid, (0, 0))
    controller = MovementController(
        grid, agent, config=FAST, on_result=results.append if results is not None else None,
    )
    director = RoamDirector(controller, grid, DeterministicRandom(seed), config)
    return agent, controller, director


def _tick(director, controller, n):
    for _ in range(n):
        director.tick()
        controller.tick()


class TestToggle:
    def test_starts_disabled(self):
        _, controller, director = _setup(WorldGrid(8, 8))
        assert not director.enabled
        director.tick()
        assert controller.queued == ()

    def test_toggle(self):
        _, _, director = _setup(WorldGrid(8, 8))
        assert director.toggle() is True
        assert director.toggle() is False

    def test_disable_revokes_pending_pick(self):
        _, controller, director = _setup(WorldGrid(8, 8))
        director.enable()
        director.tick()
        assert director.awaiting is not None
        director.disable()
        assert director.awaiting is None
        assert director.countdown == 0


class TestPicks:
    def test_first_pick_is_immediate_and_empty(self):
        grid = WorldGrid(8, 8)
        grid.set_state((4, 4), CellState.WALL)
        _, controller, director = _setup(grid)
        director.enable()
        director.tick()
        (target,) = controller.queued
        assert director.awaiting == target
        assert target != (4, 4)
        assert target != (0, 0)

    def test_success_delay(self):
        grid = WorldGrid(8, 8)
        results = []
        _, controller, director = _setup(grid, results=results)
        director.enable()
        director.tick()
        while not results:
            controller.tick()
        assert results[0].status is NavStatus.COMPLETED
        director.tick()
        assert 19 <= director.countdown <= 59
        assert director.awaiting is None

    def test_failure_delay(self):
        grid = WorldGrid(6, 3)
        for y in range(3):
            grid.set_state((3, y), CellState.WALL)
        results = []
        _, controller, director = _setup(grid, seed=5, config=RoamConfig(failure_delay=7), results=results)
        director.enable()
        for _ in range(5000):
            _tick(director, controller, 1)
            if any(r.status is NavStatus.NO_PATH for r in results):
                break
        assert results[-1].status is NavStatus.NO_PATH
        _tick(director, controller, 1)
        assert director.countdown in (6, 7)

    def test_busy_controller_delays(self):
        grid = WorldGrid(8, 8)
        _, controller, director = _setup(grid, config=RoamConfig(busy_delay=4))
        controller.enqueue((7, 7))
        director.enable()
        director.tick()
        assert director.countdown == 4
        assert director.awaiting is None
        assert controller.queued == ((7, 7),)

    def test_no_empty_cells(self):
        grid = WorldGrid(2, 1)
        grid.set_state((1, 0), CellState.WALL)
        _, controller, director = _setup(grid, config=RoamConfig(empty_delay=9))
        director.enable()
        director.tick()
        assert director.countdown == 9
        assert controller.queued == ()

    def test_same_seed_same_wandering(self):
        positions = []
        for _ in range(2):
            grid = WorldGrid(12, 12)
            agent, controller, director = _setup(grid, seed="roam")
            director.enable()
            _tick(director, controller, 400)
            positions.append(agent.position)
        assert positions[0] == positions[1]

    def test_agent_only_visits_open_cells(self):
        grid = WorldGrid(10, 10)
        for x in range(2, 8):
            grid.set_state((x, 5), CellState.WALL)
        results = []
        agent, controller, director = _setup(grid, seed=3, results=results)
        director.enable()
        _tick(director, controller, 600)
        assert results
        assert grid.state_at(agent.position) is CellState.PLAYER
        assert grid.count(CellState.WALL) == 6


class TestSystems:
    def test_registered_on_engine(self):
        engine = Engine(8, 8, seed=4)
        agent = Agent(engine.grid, (0, 0))
        controller = MovementController(engine.grid, agent, config=FAST)
        director = RoamDirector(controller, engine.grid, engine.random)
        engine.add_system(make_roam_system(director))
        engine.add_system(make_movement_system(controller))
        director.enable()
        engine.run(200)
        assert controller.last_result is not None
        assert controller.last_result.status is NavStatus.COMPLETED


class TestRoamConfig:
    def test_rejects_inverted_delay(self):
        with pytest.raises(ValueError):
            RoamConfig(success_delay=(10, 5))

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            RoamConfig(busy_delay=-1)
