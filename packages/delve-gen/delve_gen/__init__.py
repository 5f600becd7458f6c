"""delve-gen - Procedural cave worlds for the delve engine."""
from __future__ import annotations

from delve_gen.caves import carve_cave, count_adjacent_walls, place_caves
from delve_gen.config import GenerationConfig
from delve_gen.connectivity import (
    ConnectivityResult,
    ensure_connectivity,
    flood_fill,
    seal_unreachable,
)
from delve_gen.generator import WorldGenerator, resolve_seed
from delve_gen.metrics import GenerationReport
from delve_gen.scatter import clear_start_area, scatter_openings
from delve_gen.tunnels import carve_tunnel, connect_caves

__all__ = [
    "WorldGenerator",
    "GenerationConfig",
    "GenerationReport",
    "ConnectivityResult",
    "resolve_seed",
    "place_caves",
    "carve_cave",
    "count_adjacent_walls",
    "carve_tunnel",
    "connect_caves",
    "scatter_openings",
    "clear_start_area",
    "flood_fill",
    "ensure_connectivity",
    "seal_unreachable",
]
