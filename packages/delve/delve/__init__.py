"""delve - seeded cave worlds on a fixed-timestep tick loop."""

from delve.clock import Clock
from delve.engine import Engine
from delve.grid import DIRECTIONS_4, Cell, Viewport, WorldGrid
from delve.rng import DeterministicRandom, generate_seed_string, hash_seed
from delve.types import (
    STRUCTURAL_STATES,
    TRANSIENT_STATES,
    CellState,
    InvalidRange,
    Position,
    SnapshotError,
    TickContext,
)

__all__ = [
    "Engine",
    "Clock",
    "TickContext",
    "WorldGrid",
    "Cell",
    "Viewport",
    "DIRECTIONS_4",
    "Position",
    "CellState",
    "STRUCTURAL_STATES",
    "TRANSIENT_STATES",
    "DeterministicRandom",
    "hash_seed",
    "generate_seed_string",
    "InvalidRange",
    "SnapshotError",
]
