"""delve-path - A* pathfinding for the delve engine."""
from __future__ import annotations

from delve_path.finder import PathFinder
from delve_path.search import PathSearch, SearchNode, SearchStatus, find_path, manhattan

__all__ = [
    "PathFinder",
    "PathSearch",
    "SearchNode",
    "SearchStatus",
    "find_path",
    "manhattan",
]
