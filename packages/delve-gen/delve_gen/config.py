"""Tunable constants for cave world generation."""
from __future__ import annotations

from dataclasses import dataclass


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class GenerationConfig:
    """Every knob the generation stages read.

    Attributes:
        cells_per_cave: World cells per cave when sizing the cave count.
        min_caves: Lower bound on the cave count.
        cave_fill: Fraction of a region's width/height the cave occupies.
        cave_slack: Fraction of the leftover region space used for the random offset.
        center_empty: Probability a cave's centre cell starts open.
        edge_falloff: Drop in open probability per unit of normalised
            Manhattan distance from the centre.
        smoothing_rounds: Cellular-automaton iterations per cave.
        border_wall_chance: Per-round probability a cave border cell is wall.
        wall_survive: Walled Moore neighbours a wall needs to stay wall.
        empty_collapse: Walled Moore neighbours that turn an open cell to wall.
        extra_connection_ratio: Extra random cave links, as a fraction of caves.
        tunnel_greedy: Probability a tunnel step takes the closer axis.
        tunnel_widen: Probability a tunnel step also clears side cells.
        decoration_ratio: Scatter attempts, as a fraction of all cells.
        decoration_cluster: Probability a scattered opening gets a diagonal buddy.
        start_clear: Side of the square forced open at the origin.
        min_reachable_ratio: Reachable fraction below which repair runs.
        repair_budget_divisor: One repair corridor per this many reachable cells.
        max_repair_paths: Upper bound on repair corridors.
        repair_length: Inclusive corridor length range.
        repair_widen: Probability a repair step clears a side cell.
    """

    cells_per_cave: int = 150
    min_caves: int = 4
    cave_fill: float = 0.7
    cave_slack: float = 0.8
    center_empty: float = 0.9
    edge_falloff: float = 0.2
    smoothing_rounds: int = 3
    border_wall_chance: float = 0.5
    wall_survive: int = 5
    empty_collapse: int = 6
    extra_connection_ratio: float = 0.7
    tunnel_greedy: float = 0.8
    tunnel_widen: float = 0.7
    decoration_ratio: float = 0.15
    decoration_cluster: float = 0.3
    start_clear: int = 3
    min_reachable_ratio: float = 0.25
    repair_budget_divisor: int = 20
    max_repair_paths: int = 10
    repair_length: tuple[int, int] = (5, 15)
    repair_widen: float = 0.4

    def __post_init__(self) -> None:
        if self.cells_per_cave < 1:
            raise ValueError(f"cells_per_cave must be >= 1, got {self.cells_per_cave}")
        if self.min_caves < 0:
            raise ValueError(f"min_caves must be >= 0, got {self.min_caves}")
        if self.smoothing_rounds < 0:
            raise ValueError(f"smoothing_rounds must be >= 0, got {self.smoothing_rounds}")
        if self.repair_budget_divisor < 1:
            raise ValueError(
                f"repair_budget_divisor must be >= 1, got {self.repair_budget_divisor}"
            )
        if self.start_clear < 1:
            raise ValueError(f"start_clear must be >= 1, got {self.start_clear}")
        lo, hi = self.repair_length
        if lo < 1 or hi < lo:
            raise ValueError(f"repair_length must satisfy 1 <= min <= max, got {self.repair_length}")
        for name in (
            "cave_fill",
            "cave_slack",
            "center_empty",
            "border_wall_chance",
            "extra_connection_ratio",
            "tunnel_greedy",
            "tunnel_widen",
            "decoration_ratio",
            "decoration_cluster",
            "min_reachable_ratio",
            "repair_widen",
        ):
            _check_probability(name, getattr(self, name))
