import sys
import os
import time
import argparse
import random

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_search.core.grid import Grid
from grid_search.core.engine import TraversalEngine, Mode, RunStatus
from grid_search.algo.solvers import shortest_distance

def scatter_obstacles(grid: Grid, density: float, rng: random.Random):
    for idx in range(len(grid.cells)):
        if rng.random() < density:
            grid.toggle_obstacle(*grid.coords(idx))

def run_comparison():
    parser = argparse.ArgumentParser(description="DFS vs BFS step comparison")
    parser.add_argument("--cols", type=int, default=25, help="Grid columns")
    parser.add_argument("--rows", type=int, default=25, help="Grid rows")
    parser.add_argument("--density", type=float, default=0.2, help="Obstacle density (0.0-1.0)")
    parser.add_argument("--trials", type=int, default=200, help="Number of random layouts")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    args = parser.parse_args()

    print(f"=== DFS vs BFS ===")
    print(f"Size: {args.cols}x{args.rows} | Density: {args.density} | Trials: {args.trials}")
    print("-" * 50)

    rng = random.Random(args.seed)
    totals = {mode: {"steps": 0, "found": 0, "visited": 0} for mode in Mode}
    reachable = 0
    t0 = time.time()

    for _ in range(args.trials):
        layout_seed = rng.randrange(1 << 30)
        grid = Grid(args.cols, args.rows)
        scatter_obstacles(grid, args.density, random.Random(layout_seed))
        target = grid.pick_random_free_cell(random.Random(layout_seed), excluding={grid.start})
        if shortest_distance(grid, grid.start, target) is not None:
            reachable += 1

        for mode in Mode:
            g = Grid(args.cols, args.rows)
            g.cells[:] = grid.cells
            engine = TraversalEngine(g, mode=mode, seed=layout_seed, target=target)
            status = engine.run_to_completion()
            totals[mode]["steps"] += engine.steps
            totals[mode]["visited"] += g.count(Grid.VISITED)
            if status == RunStatus.FOUND:
                totals[mode]["found"] += 1

    print(f"Reachable targets: {reachable}/{args.trials}")
    print(f"\n{'MODE':<6} | {'FOUND':<8} | {'AVG STEPS':<10} | {'AVG VISITED':<11}")
    print("-" * 50)
    for mode in Mode:
        t = totals[mode]
        print(f"{mode.name:<6} | {t['found']:<8} | {t['steps'] / args.trials:<10.1f} | {t['visited'] / args.trials:<11.1f}")
    print(f"\nTotal time: {time.time() - t0:.3f}s")

if __name__ == "__main__":
    run_comparison()
