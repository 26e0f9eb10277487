import heapq
import itertools
import logging
import math
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Set, Tuple

from maze_carver.algo.base import RunState, StepAlgorithm
from maze_carver.core.errors import AlreadyInitializedError
from maze_carver.core.geometry import Point, manhattan
from maze_carver.core.grid import Grid

logger = logging.getLogger(__name__)

Path = Tuple[Point, ...]


class SearchState(Enum):
    UNREACHED = "unreached"
    OPEN = "open"
    EXPLORED = "explored"
    PATH = "path"


class OpenSet:
    """
    The A* frontier: a binary heap plus a membership map, so each point has
    at most one logical entry.

    A point is only inserted while it is not a member. Pushing a member
    again is ignored and its original entry stays in place, whatever the
    new priority. Equal priorities pop in insertion order.
    """
    def __init__(self):
        self._heap: List[Tuple[float, int, Point]] = []
        self._members: Dict[Point, float] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __contains__(self, point) -> bool:
        return point in self._members

    def priority(self, point: Point) -> float:
        return self._members[point]

    def push(self, point: Point, priority: float) -> bool:
        """Returns True if the point was inserted, False if it was already a member."""
        if point in self._members:
            return False
        self._members[point] = priority
        heapq.heappush(self._heap, (priority, next(self._counter), point))
        return True

    def pop(self) -> Tuple[Point, float]:
        if not self._heap:
            raise IndexError("pop from an empty OpenSet")
        priority, _, point = heapq.heappop(self._heap)
        del self._members[point]
        return point, priority

    def clear(self):
        self._heap.clear()
        self._members.clear()
        self._counter = itertools.count()


class AStarSolver(StepAlgorithm):
    """
    Stepable A* from grid.start to grid.end over open walls, unit edge cost,
    Manhattan heuristic. Works on its own copy of the grid.
    """
    def __init__(self, grid: Grid):
        super().__init__()
        self.grid = grid.copy()
        self.open_set = OpenSet()
        self.came_from: Dict[Point, Point] = {}
        self.g_score: Dict[Point, float] = {}
        self.explored: Set[Point] = set()
        self.path: Optional[Path] = None
        self._path_points: Set[Point] = set()

    @property
    def explored_count(self) -> int:
        return len(self.explored)

    def heuristic(self, point: Point) -> int:
        return manhattan(point, self.grid.end)

    def set_grid(self, grid: Grid):
        self.grid = grid.copy()
        self.restart()

    def initialize(self):
        if self.state is not RunState.CLEAR:
            raise AlreadyInitializedError(f"Solver already initialized (state: {self.state.value})")

        start = self.grid.start
        for p in self.grid.points():
            self.g_score[p] = math.inf
        self.g_score[start] = 0
        self.open_set.push(start, self.heuristic(start))
        self.state = RunState.INITIALIZED
        logger.debug(f"Solver initialized: {start} -> {self.grid.end}")

    def step(self) -> Optional[Path]:
        if self.state is RunState.CLEAR:
            self.initialize()

        if self.state is RunState.DONE:
            return self.path

        self.state = RunState.IN_PROGRESS
        self.step_count += 1

        if not self.open_set:
            self.state = RunState.DONE
            logger.debug(f"No path: open set exhausted after {self.explored_count} cells")
            return None

        current, _ = self.open_set.pop()
        self.explored.add(current)

        if current == self.grid.end:
            self.path = self.reconstruct_path(current)
            self._path_points = set(self.path)
            self.state = RunState.DONE
            logger.debug(f"Path found: {len(self.path) - 1} moves, {self.explored_count} cells explored")
            return self.path

        tentative = self.g_score[current] + 1
        for neighbor in self.grid.open_neighbors(current):
            if tentative < self.g_score[neighbor]:
                self.came_from[neighbor] = current
                self.g_score[neighbor] = tentative
                self.open_set.push(neighbor, tentative + self.heuristic(neighbor))

        return None

    def solve(self) -> Optional[Path]:
        while not self.is_done():
            path = self.step()
            if path is not None:
                return path
        return self.path

    def reconstruct_path(self, node: Point) -> Path:
        path = [node]
        while node in self.came_from:
            node = self.came_from[node]
            path.append(node)
        path.reverse()
        return tuple(path)

    def restart(self):
        self.open_set.clear()
        self.came_from.clear()
        self.g_score.clear()
        self.explored.clear()
        self.path = None
        self._path_points = set()
        self.step_count = 0
        self.state = RunState.CLEAR
        logger.debug("Solver restarted")

    def current_cost_map(self) -> Mapping[Point, float]:
        return MappingProxyType(self.g_score)

    def cell_search_state(self, point: Tuple[int, int]) -> SearchState:
        self.grid.get_index(*point)
        if point in self._path_points:
            return SearchState.PATH
        if point in self.explored:
            return SearchState.EXPLORED
        if point in self.open_set:
            return SearchState.OPEN
        return SearchState.UNREACHED
