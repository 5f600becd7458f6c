"""GenerationReport - what one generate() call produced."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GenerationReport:
    seed: int | str
    width: int
    height: int
    caves: int = 0
    tunnels: int = 0
    openings: int = 0
    reachable: int = 0
    repaired: bool = False
    repair_paths: int = 0
    sealed: int = 0
    phase_ms: dict[str, int] = field(default_factory=dict)
    runtime_ms: int = 0

    @property
    def reachable_ratio(self) -> float:
        total = self.width * self.height
        return self.reachable / total if total else 0.0
