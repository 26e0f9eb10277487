import logging
import random
from enum import Enum
from typing import List, Optional, Set, Tuple

from maze_carver.algo.base import RunState, StepAlgorithm
from maze_carver.core.errors import AlreadyInitializedError
from maze_carver.core.geometry import Point
from maze_carver.core.grid import Grid

logger = logging.getLogger(__name__)


class CellState(Enum):
    UNVISITED = "unvisited"
    VISITED = "visited"
    CURRENT = "current"


class BacktrackingGenerator(StepAlgorithm):
    """
    Randomized depth-first maze carving with an explicit stack.

    Each `step()` pops one point. If it still has unvisited neighbors, one is
    picked at random, the wall between them is opened and both are pushed
    back; otherwise the step is a pure backtrack. The stack empties once
    every cell has been reached from the start.
    """
    def __init__(self, width: int, height: int, rng: Optional[random.Random] = None, seed: int = None):
        super().__init__()
        self.width = width
        self.height = height
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)

        self.grid = Grid(width, height)
        self.stack: List[Point] = []
        self.visited: Set[Point] = set()
        self.current: Optional[Point] = None
        self.carved_count = 0

    @property
    def stack_depth(self) -> int:
        return len(self.stack)

    def set_start(self, point: Tuple[int, int]):
        self._require_clear("set_start")
        self.grid.set_start(point)

    def set_end(self, point: Tuple[int, int]):
        self._require_clear("set_end")
        self.grid.set_end(point)

    def _require_clear(self, action: str):
        if self.state is not RunState.CLEAR:
            raise AlreadyInitializedError(f"{action} is only allowed before generation starts (state: {self.state.value})")

    def initialize(self):
        self._require_clear("initialize")
        start = self.grid.start
        self.stack.append(start)
        self.visited.add(start)
        self.current = start
        self.state = RunState.INITIALIZED
        logger.debug(f"Generator initialized at {start} on {self.width}x{self.height}")

    def step(self) -> RunState:
        if self.state is RunState.CLEAR:
            self.initialize()

        if self.state is RunState.DONE:
            return self.state

        self.step_count += 1

        if not self.stack:
            self.state = RunState.DONE
            self.current = None
            logger.debug(f"Generation done after {self.step_count} steps ({self.carved_count} passages carved)")
            return self.state

        self.state = RunState.IN_PROGRESS
        self.current = self.stack.pop()

        nxt = self._random_unvisited_neighbor(self.current)
        if nxt is not None:
            # Keep current on the stack so we can backtrack through it later
            self.stack.append(self.current)
            self.grid.carve_between(self.current, nxt)
            self.visited.add(nxt)
            self.stack.append(nxt)
            self.carved_count += 1

        return self.state

    def _random_unvisited_neighbor(self, point: Point) -> Optional[Point]:
        candidates = [n for n in self.grid.neighbors(point) if n not in self.visited]
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def generate(self) -> Grid:
        """Steps until DONE and returns a snapshot of the finished maze."""
        self.run_all()
        return self.finished_grid()

    def finished_grid(self) -> Grid:
        return self.grid.copy()

    def restart(self):
        start, end = self.grid.start, self.grid.end
        self.grid = Grid(self.width, self.height)
        self.grid.set_start(start)
        self.grid.set_end(end)

        self.stack.clear()
        self.visited.clear()
        self.current = None
        self.carved_count = 0
        self.step_count = 0
        self.state = RunState.CLEAR
        logger.debug("Generator restarted")

    def cell_generation_state(self, point: Tuple[int, int]) -> CellState:
        self.grid.get_index(*point)
        if self.current is not None and point == self.current:
            return CellState.CURRENT
        if point in self.visited:
            return CellState.VISITED
        return CellState.UNVISITED
