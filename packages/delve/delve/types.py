"""Shared value types, cell tags, and errors for the delve engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, NamedTuple

if TYPE_CHECKING:
    from delve.grid import WorldGrid
    from delve.rng import DeterministicRandom


class Position(NamedTuple):
    """World coordinate. Compares equal to a plain ``(x, y)`` tuple."""

    x: int
    y: int


class CellState(Enum):
    EMPTY = "empty"
    WALL = "wall"
    PLAYER = "player"
    PLAYER_TRAIL = "playerTrail"
    PATH = "path"
    VISITED = "visited"
    TARGET = "target"
    QUEUED_TARGET = "queuedTarget"

    @property
    def structural(self) -> bool:
        return self in STRUCTURAL_STATES


STRUCTURAL_STATES = frozenset({CellState.EMPTY, CellState.WALL, CellState.PLAYER})

# Annotations layered over EMPTY; clearing them never loses structure.
TRANSIENT_STATES = frozenset({
    CellState.PATH,
    CellState.VISITED,
    CellState.TARGET,
    CellState.QUEUED_TARGET,
    CellState.PLAYER_TRAIL,
})


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: DeterministicRandom


class InvalidRange(ValueError):
    """Raised when an integer range is requested with ``low > high``."""

    def __init__(self, low: int, high: int) -> None:
        self.low = low
        self.high = high
        super().__init__(f"Invalid range: min {low} is greater than max {high}")


class SnapshotError(Exception):
    """Raised on restore failures (version, dimension or symbol mismatch)."""


System = Callable[["WorldGrid", TickContext], None]
