import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.algo.base import RunState
from maze_carver.algo.dfs import BacktrackingGenerator, CellState
from maze_carver.core.complexity import check_wall_symmetry, reachable_from
from maze_carver.core.errors import AlreadyInitializedError
from maze_carver.core.geometry import Point
from maze_carver.core.grid import Grid

class TestGenerators(unittest.TestCase):
    def assert_valid_maze(self, grid: Grid):
        reached = reachable_from(grid, grid.start)
        self.assertEqual(len(reached), grid.width * grid.height, "Every cell should be reachable from start")
        self.assertEqual(check_wall_symmetry(grid), [])
        # Spanning tree: exactly w*h - 1 passages
        open_walls = sum(4 - bin(v & Grid.ALL_WALLS).count("1") for v in grid.cells)
        self.assertEqual(open_walls // 2, grid.width * grid.height - 1)

    def test_dfs_coverage(self):
        w, h = 20, 20
        gen = BacktrackingGenerator(w, h, seed=42)
        grid = gen.generate()

        self.assertTrue(gen.is_done())
        self.assertEqual(len(gen.visited), w * h, "DFS should visit every cell")
        self.assert_valid_maze(grid)

    def test_many_shapes(self):
        for w, h in [(1, 1), (1, 7), (7, 1), (2, 3), (13, 5)]:
            for seed in range(3):
                grid = BacktrackingGenerator(w, h, seed=seed).generate()
                self.assert_valid_maze(grid)

    def test_termination_bound(self):
        for w, h in [(1, 1), (3, 3), (10, 4), (25, 25)]:
            gen = BacktrackingGenerator(w, h, seed=7)
            steps = 0
            while gen.step() is not RunState.DONE:
                steps += 1
                self.assertLessEqual(steps, 2 * w * h)
            self.assertLessEqual(gen.step_count, 2 * w * h)
            self.assertEqual(gen.carved_count, w * h - 1)

    def test_idempotent_done(self):
        gen = BacktrackingGenerator(4, 4, seed=1)
        grid = gen.generate()
        cells = grid.cells.tobytes()
        count = gen.step_count

        for _ in range(5):
            self.assertEqual(gen.step(), RunState.DONE)
        self.assertEqual(gen.step_count, count)
        self.assertEqual(gen.grid.cells.tobytes(), cells)
        self.assertEqual(gen.stack, [])

    def test_determinism(self):
        w, h = 10, 10
        grid1 = BacktrackingGenerator(w, h, seed=12345).generate()

        gen2 = BacktrackingGenerator(w, h, seed=12345)
        for _ in gen2.run(): pass

        gen3 = BacktrackingGenerator(w, h, rng=random.Random(12345))
        while not gen3.is_done():
            gen3.step()

        self.assertEqual(grid1.cells.tobytes(), gen2.grid.cells.tobytes())
        self.assertEqual(grid1.cells.tobytes(), gen3.grid.cells.tobytes())

    def test_lazy_initialization(self):
        gen = BacktrackingGenerator(3, 3, seed=0)
        self.assertEqual(gen.state, RunState.CLEAR)
        state = gen.step()
        self.assertEqual(state, RunState.IN_PROGRESS)
        self.assertEqual(len(gen.visited), 2)

    def test_initialize_twice_fails(self):
        gen = BacktrackingGenerator(3, 3, seed=0)
        gen.initialize()
        self.assertEqual(gen.state, RunState.INITIALIZED)
        self.assertEqual(gen.stack, [Point(0, 0)])
        self.assertEqual(gen.cell_generation_state((0, 0)), CellState.CURRENT)
        with self.assertRaises(AlreadyInitializedError):
            gen.initialize()

    def test_cell_states(self):
        gen = BacktrackingGenerator(5, 5, seed=3)
        for p in gen.grid.points():
            self.assertEqual(gen.cell_generation_state(p), CellState.UNVISITED)

        for _ in range(6):
            gen.step()
        current = [p for p in gen.grid.points() if gen.cell_generation_state(p) is CellState.CURRENT]
        self.assertEqual(current, [gen.current])
        visited = [p for p in gen.grid.points() if gen.cell_generation_state(p) is not CellState.UNVISITED]
        self.assertEqual(set(visited), gen.visited)

        gen.run_all()
        states = {gen.cell_generation_state(p) for p in gen.grid.points()}
        self.assertEqual(states, {CellState.VISITED})

        with self.assertRaises(IndexError):
            gen.cell_generation_state((5, 0))

    def test_restart_resets_fully(self):
        gen = BacktrackingGenerator(6, 6, seed=11)
        gen.run_all()
        gen.restart()

        self.assertEqual(gen.state, RunState.CLEAR)
        self.assertEqual(gen.stack, [])
        self.assertEqual(gen.visited, set())
        self.assertEqual(gen.step_count, 0)
        for p in gen.grid.points():
            if p != gen.grid.start:
                self.assertEqual(gen.cell_generation_state(p), CellState.UNVISITED)
        self.assertTrue(all(v == Grid.ALL_WALLS for v in gen.grid.cells))

        self.assert_valid_maze(gen.generate())

    def test_restart_mid_run(self):
        gen = BacktrackingGenerator(8, 8, seed=5)
        for _ in range(20):
            gen.step()
        gen.restart()
        self.assert_valid_maze(gen.generate())

    def test_restart_replaces_grid(self):
        gen = BacktrackingGenerator(4, 4, seed=2)
        old = gen.grid
        gen.run_all()
        gen.restart()
        self.assertIsNot(gen.grid, old)
        # The old grid keeps its carved passages
        self.assertNotEqual(old.cells.tobytes(), gen.grid.cells.tobytes())

    def test_custom_start(self):
        gen = BacktrackingGenerator(6, 4, seed=9)
        gen.set_start((3, 2))
        gen.set_end((0, 0))
        gen.step()
        self.assertIn(Point(3, 2), gen.visited)

        grid = gen.generate()
        self.assertEqual(grid.start, Point(3, 2))
        self.assertEqual(grid.end, Point(0, 0))
        self.assert_valid_maze(grid)

        # Relocation only before generation starts, and survives restart
        with self.assertRaises(AlreadyInitializedError):
            gen.set_start((0, 0))
        gen.restart()
        self.assertEqual(gen.grid.start, Point(3, 2))
        gen.set_start((1, 1))
        self.assertEqual(gen.grid.start, Point(1, 1))

    def test_finished_grid_is_snapshot(self):
        gen = BacktrackingGenerator(5, 5, seed=4)
        grid = gen.generate()
        self.assertIsNot(grid, gen.grid)
        gen.restart()
        self.assert_valid_maze(grid)

    def test_three_by_three_scenario(self):
        gen = BacktrackingGenerator(3, 3, seed=2024)
        gen.restart()
        non_start = [p for p in gen.grid.points() if p != gen.grid.start]
        self.assertEqual(len(non_start), 8)
        for p in non_start:
            self.assertEqual(gen.cell_generation_state(p), CellState.UNVISITED)

        grid = gen.generate()
        reached = reachable_from(grid, grid.start)
        for p in non_start:
            self.assertIn(p, reached)

if __name__ == '__main__':
    unittest.main()
