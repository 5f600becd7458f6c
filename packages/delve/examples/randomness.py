"""Deterministic randomness -- same seed, same results.

Demonstrates:
- Using ctx.random for stochastic behavior
- String seeds and their numeric hash
- Proving determinism and divergence across seeds

Run: python packages/delve/examples/randomness.py
"""

from delve import CellState, Engine, WorldGrid, hash_seed
from delve.types import TickContext


def drip_system(grid: WorldGrid, ctx: TickContext) -> None:
    """Each tick, turn one random cell into rock."""
    x = ctx.random.next_int(0, grid.width - 1)
    y = ctx.random.next_int(0, grid.height - 1)
    grid.set_state((x, y), CellState.WALL)


def run_simulation(seed: int | str, ticks: int = 30) -> str:
    engine = Engine(16, 6, seed=seed)
    engine.add_system(drip_system)
    engine.run(ticks)
    return engine.grid.render()


def main() -> None:
    print("=== Deterministic Randomness ===\n")
    print(f"hash_seed('abc123') = {hash_seed('abc123')}\n")

    run_a = run_simulation("abc123")
    run_b = run_simulation("abc123")
    run_c = run_simulation("xyz789")

    print("Run A (seed='abc123'):")
    print(run_a, "\n")
    print("Run C (seed='xyz789'):")
    print(run_c, "\n")

    assert run_a == run_b, "Same seed must produce identical output"
    print("A == B: same seed, same world.")
    print(f"A == C: {run_a == run_c}")


if __name__ == "__main__":
    main()
