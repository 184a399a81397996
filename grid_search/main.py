import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'grid_search' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_search.core.grid import Grid
from grid_search.core.engine import TraversalEngine, Mode

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid Search: step-by-step DFS / BFS on an editable grid")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play Command
    play_parser = subparsers.add_parser("play", help="Open the interactive window")
    play_parser.add_argument("--width", type=int, default=1000, help="Canvas width in pixels")
    play_parser.add_argument("--height", type=int, default=1000, help="Canvas height in pixels")
    play_parser.add_argument("--cell-size", type=int, default=40, help="Cell size in pixels")
    play_parser.add_argument("--fps", type=int, default=20, help="Traversal steps per second")
    play_parser.add_argument("--mode", type=str, default="dfs", choices=[m.value for m in Mode], help="Initial search mode")
    play_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    play_parser.add_argument("--record", action="store_true", help="Record video to recordings/")

    # Run Command
    run_parser = subparsers.add_parser("run", help="Run one search headless and print a summary")
    run_parser.add_argument("--cols", type=int, default=25, help="Grid columns")
    run_parser.add_argument("--rows", type=int, default=25, help="Grid rows")
    run_parser.add_argument("--mode", type=str, default="dfs", choices=[m.value for m in Mode], help="Search mode")
    run_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    run_parser.add_argument("--target", type=int, nargs=2, metavar=("X", "Y"), help="Fixed target cell")
    run_parser.add_argument("--obstacle", type=int, nargs=2, metavar=("X", "Y"), action="append", default=[],
                            help="Obstacle cell (repeatable)")
    run_parser.add_argument("--max-steps", type=int, default=10000, help="Step limit")

    return parser

def run_headless(args, parser) -> dict:
    try:
        grid = Grid(args.cols, args.rows)
    except ValueError as e:
        parser.error(str(e))

    # Obstacles go down before the target is placed so it avoids them
    for x, y in args.obstacle:
        grid.toggle_obstacle(x, y)

    target = tuple(args.target) if args.target else None
    try:
        engine = TraversalEngine(grid, mode=Mode(args.mode), seed=args.seed, target=target)
    except ValueError as e:
        parser.error(str(e))

    status = engine.run_to_completion(max_steps=args.max_steps)
    return {
        "mode": engine.mode.name,
        "status": status.value,
        "steps": engine.steps,
        "target": engine.target,
        "visited": grid.count(Grid.VISITED),
        "path_length": len(engine.final_path) if engine.final_path else 0,
    }

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("grid_search")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "play":
        try:
            grid = Grid.from_canvas(args.width, args.height, args.cell_size)
        except ValueError as e:
            parser.error(str(e))
        engine = TraversalEngine(grid, mode=Mode(args.mode), seed=args.seed)
        logger.info(f"Grid {grid.width}x{grid.height}, start {grid.start}, target {engine.target}")

        from grid_search.viz.renderer import Renderer
        renderer = Renderer(engine, cell_size=args.cell_size, fps=args.fps, record=args.record)
        if args.record:
            logger.info(f"Recording video to {renderer.recorder.output_file}")
        renderer.init_window()
        renderer.run_loop()

    elif args.command == "run":
        summary = run_headless(args, parser)
        print(f"Mode: {summary['mode']} | Status: {summary['status']} | Steps: {summary['steps']} | "
              f"Visited: {summary['visited']} | Path Length: {summary['path_length']}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
