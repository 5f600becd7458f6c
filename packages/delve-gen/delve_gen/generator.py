"""WorldGenerator - ordered generation stages over a WorldGrid.

Stage order is fixed and later stages may overwrite earlier ones:

1. fill with rock
2. carve caves
3. connect caves with tunnels (and tie the nearest cave to the origin)
4. scatter decorative openings
5. force the start area open
6. guarantee connectivity from the origin

After ``generate`` returns, every EMPTY cell is 4-connected to the origin.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable

from delve import CellState, DeterministicRandom, generate_seed_string

from delve_gen.caves import place_caves
from delve_gen.config import GenerationConfig
from delve_gen.connectivity import ensure_connectivity
from delve_gen.metrics import GenerationReport
from delve_gen.scatter import clear_start_area, scatter_openings
from delve_gen.tunnels import connect_caves

if TYPE_CHECKING:
    from delve import WorldGrid

logger = logging.getLogger(__name__)

Seed = int | str


def resolve_seed(seed: Seed | None) -> Seed:
    """Normalise a user-supplied seed; synthesize one when absent or blank."""
    if seed is None:
        return generate_seed_string()
    if isinstance(seed, str):
        seed = seed.strip()
        if not seed:
            return generate_seed_string()
    return seed


class WorldGenerator:
    def __init__(
        self,
        grid: WorldGrid,
        seed: Seed | None = None,
        config: GenerationConfig | None = None,
        on_seed: Callable[[Seed], None] | None = None,
    ) -> None:
        self._grid = grid
        self._config = config if config is not None else GenerationConfig()
        self._on_seed = on_seed
        self._seed: Seed = resolve_seed(seed)
        self._rng = DeterministicRandom(self._seed)

    @property
    def seed(self) -> Seed:
        return self._seed

    @property
    def seed_string(self) -> str:
        return str(self._seed)

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def random(self) -> DeterministicRandom:
        return self._rng

    def set_seed(self, seed: Seed) -> None:
        self._seed = seed
        self._rng = DeterministicRandom(seed)

    def generate(self, seed: Seed | None = None) -> GenerationReport:
        """Overwrite the whole grid with a fresh world.

        With *seed* omitted the current seed is replayed from the start, so
        repeated calls rebuild the same world. A blank string seed is
        replaced by a synthesized one.
        """
        if seed is not None:
            self.set_seed(resolve_seed(seed))
        else:
            self._rng.reset()
        if self._on_seed is not None:
            self._on_seed(self._seed)

        grid, rng, config = self._grid, self._rng, self._config
        report = GenerationReport(seed=self._seed, width=grid.width, height=grid.height)
        logger.info(
            "Generating %dx%d world with seed %r", grid.width, grid.height, self._seed,
        )

        start = time.perf_counter()

        def _phase(label: str, fn: Callable[..., Any], *args: Any) -> Any:
            ps = time.perf_counter()
            result = fn(*args)
            report.phase_ms[label] = int((time.perf_counter() - ps) * 1000)
            return result

        _phase("fill", grid.fill, CellState.WALL)
        caves = _phase("caves", place_caves, grid, rng, config)
        report.caves = len(caves)
        logger.info("Carved %d caves", report.caves)
        report.tunnels = _phase("tunnels", connect_caves, grid, rng, caves, config)
        report.openings = _phase("scatter", scatter_openings, grid, rng, config)
        _phase("start_area", clear_start_area, grid, config)
        result = _phase("connectivity", ensure_connectivity, grid, rng, config)

        report.reachable = result.reachable
        report.repaired = result.repaired
        report.repair_paths = result.repair_paths
        report.sealed = result.sealed
        report.runtime_ms = int((time.perf_counter() - start) * 1000)
        logger.info("World generation complete in %d ms", report.runtime_ms)
        return report
