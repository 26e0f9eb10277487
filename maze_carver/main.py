import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_carver' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.errors import MazeError

logger = logging.getLogger("maze_carver")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def parse_point(text: str):
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got '{text}'")
    return (x, y)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Carver: stepable backtracking generator and A* solver")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate (and optionally solve) a maze")
    gen_parser.add_argument("--width", type=int, default=20, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=10, help="Maze Height")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--start", type=parse_point, default=None, help="Start cell as X,Y (default 0,0)")
    gen_parser.add_argument("--end", type=parse_point, default=None, help="End cell as X,Y (default bottom-right)")
    gen_parser.add_argument("--solve", action="store_true", help="Solve with A* and draw the path")
    gen_parser.add_argument("--visual", action="store_true", help="Animate in a pygame window")
    gen_parser.add_argument("--delay", type=float, default=0.001, help="Seconds per step in visual mode")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving")
    bench_parser.add_argument("--size", type=int, default=100, help="Benchmark size")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")
    bench_parser.add_argument("--runs", type=int, default=3, help="Number of mazes")

    return parser


def cmd_generate(args) -> int:
    from maze_carver.algo.dfs import BacktrackingGenerator
    from maze_carver.algo.solvers import AStarSolver
    from maze_carver.core.complexity import calculate_stats
    from maze_carver.viz.text import render_text

    generator = BacktrackingGenerator(args.width, args.height, seed=args.seed)
    if args.start is not None:
        generator.set_start(args.start)
    if args.end is not None:
        generator.set_end(args.end)

    if args.visual:
        logger.info("Visual mode enabled - Opening window...")
        from maze_carver.viz.renderer import Renderer
        renderer = Renderer(generator, solve=args.solve, delay=args.delay)
        renderer.init_window()
        renderer.run_loop()
        return 0

    logger.info(f"Generating {args.width}x{args.height} maze...")
    grid = generator.generate()
    logger.info(f"Generation done in {generator.step_count} steps")
    logger.debug(f"Stats: {calculate_stats(grid)}")

    path = None
    if args.solve:
        solver = AStarSolver(grid)
        path = solver.solve()
        if path:
            logger.info(f"Solved: {len(path) - 1} moves, {solver.explored_count} cells explored")
        else:
            logger.info("No path found")

    print(render_text(grid, path))
    return 0


def cmd_benchmark(args) -> int:
    from maze_carver.algo.dfs import BacktrackingGenerator
    from maze_carver.algo.solvers import AStarSolver
    from maze_carver.core.complexity import bfs_distance

    logger.info(f"Running benchmark (Size: {args.size}x{args.size}, runs: {args.runs})...")

    print(f"\n{'RUN':<5} | {'GEN (s)':<10} | {'SOLVE (s)':<10} | {'PATH LEN':<10} | {'EXPLORED':<10}")
    print("-" * 57)

    for run in range(args.runs):
        t0 = time.time()
        generator = BacktrackingGenerator(args.size, args.size, seed=args.seed + run)
        grid = generator.generate()
        gen_time = time.time() - t0

        t0 = time.time()
        solver = AStarSolver(grid)
        path = solver.solve()
        solve_time = time.time() - t0

        moves = len(path) - 1 if path else -1
        expected = bfs_distance(grid, grid.start, grid.end)
        if expected is not None and moves != expected:
            logger.error(f"Run {run}: A* found {moves} moves but BFS found {expected}")

        print(f"{run:<5} | {gen_time:<10.4f} | {solve_time:<10.4f} | {moves:<10} | {solver.explored_count:<10}")

    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            return cmd_generate(args)
        elif args.command == "benchmark":
            return cmd_benchmark(args)
    except (MazeError, IndexError) as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
