"""
Performance Benchmark
=====================

Measures headless tick throughput, with and without rasterizing each frame,
to check how much of the 16 ms tick budget the simulation uses.

Usage:
    python -m tools.benchmark_speed [--ticks N] [--seed S]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional

import numpy as np

from dodge.core.config_loader import load_config
from dodge.core.game_loop import GameLoop
from dodge.core.render_solid import SolidRenderer
from dodge.core.world import World


class ArraySurface:
    """Drawing surface backed by a numpy frame buffer."""

    def __init__(self, width: int, height: int):
        self._canvas = np.zeros((height, width, 3), dtype=np.uint8)
        self.posted = 0

    def lock_canvas(self) -> Optional[np.ndarray]:
        return self._canvas

    def unlock_canvas_and_post(self, canvas: np.ndarray) -> None:
        self.posted += 1


def _wander(rng: np.random.Generator, world: World) -> tuple:
    """Random pointer target inside the playfield."""
    return (
        float(rng.uniform(0, world.playfield_width)),
        float(rng.uniform(0, world.playfield_height)),
    )


def benchmark_world(
    num_ticks: int = 10000,
    seed: int = 42
) -> dict:
    """
    Benchmark World.update alone.

    Args:
        num_ticks: Number of ticks to run.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    world = World(config=config, seed=seed)
    rng = np.random.default_rng(seed)

    # Warmup
    for _ in range(100):
        world.update(config.loop.tick_interval)

    start = time.perf_counter()
    for i in range(num_ticks):
        if i % 10 == 0:
            world.set_player_position(*_wander(rng, world))
        world.update(config.loop.tick_interval)
    elapsed = time.perf_counter() - start

    return {
        "mode": "world",
        "num_ticks": num_ticks,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_ticks,
        "collisions": world.collisions,
    }


def benchmark_loop(
    num_ticks: int = 2000,
    seed: int = 42
) -> dict:
    """
    Benchmark GameLoop.step with numpy rasterization of every frame.

    Args:
        num_ticks: Number of iterations.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    world = World(config=config, seed=seed)
    loop = GameLoop(world, SolidRenderer(config), config)
    surface = ArraySurface(config.playfield.width, config.playfield.height)
    rng = np.random.default_rng(seed)

    for _ in range(20):
        loop.step(surface)

    start = time.perf_counter()
    for i in range(num_ticks):
        if i % 10 == 0:
            loop.input.pointer_move(*_wander(rng, world))
        loop.step(surface)
    elapsed = time.perf_counter() - start

    return {
        "mode": "loop+render",
        "num_ticks": num_ticks,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_ticks,
        "collisions": world.collisions,
    }


def run_all_benchmarks(ticks: int = 10000, seed: int = 42) -> list:
    """Run both benchmarks and print a summary."""
    config = load_config()
    budget_ms = config.loop.tick_interval_ms

    print("=" * 60)
    print("DODGE TICK BENCHMARK")
    print("=" * 60)
    print()

    results = []

    print("Benchmarking World.update...")
    results.append(benchmark_world(num_ticks=ticks, seed=seed))
    print(f"  Ticks/sec: {results[-1]['ticks_per_second']:.1f}")
    print()

    print("Benchmarking GameLoop.step + SolidRenderer...")
    results.append(benchmark_loop(num_ticks=max(1, ticks // 5), seed=seed))
    print(f"  Ticks/sec: {results[-1]['ticks_per_second']:.1f}")
    print()

    print(f"{'Mode':<16} {'Ticks/s':>12} {'ms/tick':>10} {'Budget %':>10}")
    print("-" * 50)
    for r in results:
        share = r["ms_per_tick"] / budget_ms * 100
        print(f"{r['mode']:<16} {r['ticks_per_second']:>12.1f} {r['ms_per_tick']:>10.3f} {share:>9.1f}%")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Dodge tick throughput")
    parser.add_argument("--ticks", type=int, default=10000, help="Ticks per benchmark")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer ticks)")

    args = parser.parse_args()

    ticks = 1000 if args.quick else args.ticks
    run_all_benchmarks(ticks=ticks, seed=args.seed)

    return 0


if __name__ == "__main__":
    sys.exit(main())
