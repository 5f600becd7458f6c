"""Tests for WorldGenerator determinism, connectivity and seed handling."""

import pytest

from delve import CellState, WorldGrid
from delve_gen import GenerationConfig, WorldGenerator, flood_fill, resolve_seed

SEEDS = ["abc123", "hello", "Z", 7, 123456789, "a much longer seed string"]


def _generate(seed, width=40, height=30):
    grid = WorldGrid(width, height)
    WorldGenerator(grid, seed).generate()
    return grid


class TestDeterminism:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_same_seed_same_world(self, seed):
        assert _generate(seed).render() == _generate(seed).render()

    def test_different_seeds_differ(self):
        assert _generate("abc123").render() != _generate("abc124").render()

    def test_replay_without_seed(self):
        grid = WorldGrid(40, 30)
        gen = WorldGenerator(grid, "replay")
        gen.generate()
        first = grid.render()
        grid.reset_all()
        gen.generate()
        assert grid.render() == first

    def test_generate_with_new_seed_switches(self):
        grid = WorldGrid(40, 30)
        gen = WorldGenerator(grid, "one")
        gen.generate("two")
        assert gen.seed == "two"
        assert grid.render() == _generate("two").render()

    def test_string_and_int_seeds_are_distinct(self):
        assert _generate("123").render() != _generate(123).render()

    def test_known_world(self):
        assert _generate("abc123", 20, 20).render() == ABC123_20X20


ABC123_20X20 = "\n".join([
    "...###.#############",
    ".....#..############",
    ".........###########",
    ".##......###########",
    "##.......###########",
    "..#......###########",
    "#........###########",
    "###.#.....##########",
    "#####..#.###########",
    "######..############",
    "#####...##..###.####",
    "###....####.....####",
    "#.#.....##......####",
    "#................###",
    "#................###",
    "#...............####",
    ".......###..#.######",
    ".#.......#.#########",
    "####..##############",
    "####################",
])


class TestConnectivity:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_every_empty_cell_reachable(self, seed):
        grid = _generate(seed)
        reachable = set(flood_fill(grid, (0, 0)))
        for pos in grid.positions_with(CellState.EMPTY):
            assert pos in reachable

    @pytest.mark.parametrize("size", [(1, 1), (3, 3), (5, 40), (64, 48)])
    def test_odd_sizes(self, size):
        grid = _generate("sizes", *size)
        reachable = set(flood_fill(grid, (0, 0)))
        assert set(grid.positions_with(CellState.EMPTY)) <= reachable

    def test_only_structural_states(self):
        grid = _generate("abc123")
        assert grid.count(CellState.EMPTY) + grid.count(CellState.WALL) == grid.size


class TestStartArea:
    def test_start_block_open(self):
        grid = _generate("abc123", 20, 20)
        for y in range(3):
            for x in range(3):
                assert grid.state_at((x, y)) is CellState.EMPTY

    def test_custom_start_clear(self):
        grid = WorldGrid(30, 30)
        WorldGenerator(grid, "big", config=GenerationConfig(start_clear=5)).generate()
        for y in range(5):
            for x in range(5):
                assert grid.state_at((x, y)) is CellState.EMPTY

    def test_tiny_world_start_clamped(self):
        grid = _generate("tiny", 2, 2)
        assert grid.count(CellState.EMPTY) == 4


class TestReport:
    def test_report_fields(self):
        grid = WorldGrid(40, 30)
        report = WorldGenerator(grid, "abc123").generate()
        assert report.seed == "abc123"
        assert (report.width, report.height) == (40, 30)
        assert report.reachable >= 9
        assert report.reachable == len(flood_fill(grid, (0, 0)))
        assert 0.0 < report.reachable_ratio <= 1.0
        assert set(report.phase_ms) == {
            "fill", "caves", "tunnels", "scatter", "start_area", "connectivity",
        }

    def test_report_is_deterministic(self):
        a = WorldGenerator(WorldGrid(40, 30), "same").generate()
        b = WorldGenerator(WorldGrid(40, 30), "same").generate()
        assert (a.caves, a.tunnels, a.openings, a.reachable, a.sealed) == (
            b.caves, b.tunnels, b.openings, b.reachable, b.sealed,
        )


class TestSeeds:
    def test_resolve_strips(self):
        assert resolve_seed("  abc  ") == "abc"

    def test_resolve_blank_synthesizes(self):
        seed = resolve_seed("   ")
        assert isinstance(seed, str) and len(seed) == 8

    def test_resolve_none_synthesizes(self):
        assert len(resolve_seed(None)) == 8

    def test_resolve_keeps_ints(self):
        assert resolve_seed(42) == 42

    def test_unseeded_generator_gets_seed(self):
        gen = WorldGenerator(WorldGrid(10, 10))
        assert isinstance(gen.seed, str) and gen.seed

    def test_on_seed_callback(self):
        seen = []
        gen = WorldGenerator(WorldGrid(10, 10), "cb", on_seed=seen.append)
        gen.generate()
        gen.generate("next")
        assert seen == ["cb", "next"]

    def test_seed_string(self):
        assert WorldGenerator(WorldGrid(4, 4), 99).seed_string == "99"
