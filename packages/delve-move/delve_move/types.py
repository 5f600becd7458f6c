"""Navigation states, results, and pacing configuration."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from delve import CellState, Position

# Tags one navigation paints; cleared before the next one starts.
SEARCH_MARKS = frozenset({CellState.PATH, CellState.VISITED, CellState.TARGET})


class NavState(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    REVEALED = "revealed"
    REPLAYING = "replaying"
    DONE = "done"
    CANCELLED = "cancelled"


class NavStatus(Enum):
    COMPLETED = "completed"
    ALREADY_THERE = "already_there"
    NO_PATH = "no_path"
    CANCELLED = "cancelled"

    @property
    def arrived(self) -> bool:
        return self in (NavStatus.COMPLETED, NavStatus.ALREADY_THERE)


@dataclass(frozen=True)
class NavigationResult:
    target: Position
    status: NavStatus
    path: tuple[Position, ...] | None = None


@dataclass(frozen=True)
class MovementConfig:
    """Pacing, in ticks. Defaults assume 20 ticks per second."""

    nodes_per_tick: int = 1
    reveal_ticks: int = 10
    step_ticks: int = 4
    no_path_linger_ticks: int = 40

    def __post_init__(self) -> None:
        if self.nodes_per_tick < 1:
            raise ValueError(f"nodes_per_tick must be >= 1, got {self.nodes_per_tick}")
        for name in ("reveal_ticks", "step_ticks", "no_path_linger_ticks"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")


@dataclass(frozen=True)
class RoamConfig:
    """Delays between roam picks, in ticks."""

    success_delay: tuple[int, int] = (20, 60)
    failure_delay: int = 10
    empty_delay: int = 20
    busy_delay: int = 10

    def __post_init__(self) -> None:
        lo, hi = self.success_delay
        if lo < 0 or hi < lo:
            raise ValueError(f"success_delay must satisfy 0 <= min <= max, got {self.success_delay}")
        for name in ("failure_delay", "empty_delay", "busy_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
