"""delve-move - Queued, cancellable agent movement for the delve engine."""
from __future__ import annotations

from delve_move.agent import Agent
from delve_move.controller import MovementController
from delve_move.queue import DestinationQueue
from delve_move.roam import RoamDirector
from delve_move.session import ORIGIN, Session
from delve_move.systems import make_movement_system, make_roam_system
from delve_move.types import (
    SEARCH_MARKS,
    MovementConfig,
    NavigationResult,
    NavState,
    NavStatus,
    RoamConfig,
)

__all__ = [
    "Agent",
    "DestinationQueue",
    "MovementController",
    "MovementConfig",
    "NavState",
    "NavStatus",
    "NavigationResult",
    "RoamDirector",
    "RoamConfig",
    "SEARCH_MARKS",
    "Session",
    "ORIGIN",
    "make_movement_system",
    "make_roam_system",
]
