import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.algo.dfs import BacktrackingGenerator
from maze_carver.algo.solvers import AStarSolver
from maze_carver.core.complexity import calculate_stats, bfs_distance

def benchmark_size(width: int, height: int):
    print(f"\n--- Benchmarking {width}x{height} ({width*height:,} cells) ---")

    # 1. Generation (stepped to completion)
    generator = BacktrackingGenerator(width, height, seed=42)
    gen_start = time.time()
    grid = generator.generate()
    gen_time = time.time() - gen_start
    print(f"Generation Time: {gen_time:.4f}s ({generator.step_count:,} steps)")
    print(f"Speed: {(width*height)/gen_time:,.0f} cells/sec")

    stats = calculate_stats(grid)
    print(f"Dead ends: {stats['dead_ends']:,} ({stats['dead_end_percent']:.1f}%)")

    # 2. A*
    solver = AStarSolver(grid)
    solve_start = time.time()
    path = solver.solve()
    solve_time = time.time() - solve_start
    print(f"Solve Time: {solve_time:.4f}s ({solver.explored_count:,} explored)")

    # 3. Cross-check against plain BFS
    expected = bfs_distance(grid, grid.start, grid.end)
    moves = len(path) - 1 if path else None
    print(f"Path: {moves} moves (BFS: {expected}) {'OK' if moves == expected else 'MISMATCH'}")

def run_suite():
    sizes = [
        (50, 50),
        (200, 200),
        (500, 500),
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
