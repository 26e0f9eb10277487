from array import array
from typing import FrozenSet, Iterator, NamedTuple, Tuple

from maze_carver.core.errors import InvalidDimensionError
from maze_carver.core.geometry import ALL_DIRECTIONS, Direction, Point, relative_direction


class Cell(NamedTuple):
    """Read-only snapshot of one cell: its position and the walls still closed."""
    point: Point
    walls: FrozenSet[Direction]

    def has_wall(self, direction: Direction) -> bool:
        return direction in self.walls

    @property
    def is_dead_end(self) -> bool:
        return len(self.walls) == 3


class Grid:
    # Bitmask Constants
    NORTH = int(Direction.NORTH)
    EAST  = int(Direction.EAST)
    SOUTH = int(Direction.SOUTH)
    WEST  = int(Direction.WEST)

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST

    __slots__ = ('width', 'height', 'cells', '_start', '_end')

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise InvalidDimensionError(width, height)

        self.width = width
        self.height = height
        # One unsigned byte per cell, row-major, low nibble = closed walls
        self.cells = array('B', [self.ALL_WALLS] * (width * height))
        self._start = Point(0, 0)
        self._end = Point(width - 1, height - 1)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, start={self._start}, end={self._end})"

    def __contains__(self, point) -> bool:
        return self.in_bounds(point)

    # --- Geometry ---

    def in_bounds(self, point: Tuple[int, int]) -> bool:
        x, y = point
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def points(self) -> Iterator[Point]:
        """Row-major iteration over every cell position."""
        for y in range(self.height):
            for x in range(self.width):
                yield Point(x, y)

    # --- Start / End ---

    @property
    def start(self) -> Point:
        return self._start

    @property
    def end(self) -> Point:
        return self._end

    def set_start(self, point: Tuple[int, int]):
        self.get_index(*point)
        self._start = Point(*point)

    def set_end(self, point: Tuple[int, int]):
        self.get_index(*point)
        self._end = Point(*point)

    # --- Cells & Walls ---

    def get_cell(self, point: Tuple[int, int]) -> Cell:
        return Cell(Point(*point), self.walls(point))

    def walls(self, point: Tuple[int, int]) -> FrozenSet[Direction]:
        val = self.cells[self.get_index(*point)]
        return frozenset(d for d in ALL_DIRECTIONS if val & d)

    def has_wall(self, point: Tuple[int, int], direction: Direction) -> bool:
        return (self.cells[self.get_index(*point)] & direction) != 0

    def remove_wall(self, point: Tuple[int, int], direction: Direction):
        """
        Removes the wall between `point` and its neighbor in `direction`.
        Also removes the OPPOSITE wall from the neighbor, so walls never go one-sided.
        """
        idx1 = self.get_index(*point)
        nx, ny = direction.step(Point(*point))
        if not (0 <= nx < self.width and 0 <= ny < self.height):
            raise IndexError(f"Cannot carve {direction.name} from {tuple(point)}: outer boundary")
        idx2 = ny * self.width + nx

        self.cells[idx1] &= ~direction
        self.cells[idx2] &= ~direction.opposite

    def add_wall(self, point: Tuple[int, int], direction: Direction):
        idx = self.get_index(*point)
        self.cells[idx] |= direction

        # Handle neighbor (strict consistency)
        nx, ny = direction.step(Point(*point))
        if 0 <= nx < self.width and 0 <= ny < self.height:
            self.cells[ny * self.width + nx] |= direction.opposite

    def carve_between(self, a: Tuple[int, int], b: Tuple[int, int]) -> Direction:
        """Opens the shared wall of two adjacent cells. Returns the direction a -> b."""
        direction = relative_direction(a, b)
        self.remove_wall(a, direction)
        return direction

    def is_open(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        if not (self.in_bounds(a) and self.in_bounds(b)):
            return False
        dx = b[0] - a[0]
        dy = b[1] - a[1]
        if abs(dx) + abs(dy) != 1:
            return False
        direction = relative_direction(a, b)
        return (not self.has_wall(a, direction)) and (not self.has_wall(b, direction.opposite))

    # --- Adjacency ---

    def neighbor_directions(self, point: Tuple[int, int]) -> Iterator[Tuple[Point, Direction]]:
        """
        Yields (neighbor, direction_to_neighbor) for all in-bounds neighbors,
        always in N, S, E, W order. Does NOT check walls.
        """
        x, y = point
        # North
        if y > 0:
            yield Point(x, y - 1), Direction.NORTH
        # South
        if y < self.height - 1:
            yield Point(x, y + 1), Direction.SOUTH
        # East
        if x < self.width - 1:
            yield Point(x + 1, y), Direction.EAST
        # West
        if x > 0:
            yield Point(x - 1, y), Direction.WEST

    def neighbors(self, point: Tuple[int, int]) -> Iterator[Point]:
        for neighbor, _ in self.neighbor_directions(point):
            yield neighbor

    def open_neighbors(self, point: Tuple[int, int]) -> Iterator[Point]:
        """
        Yields neighbors that are NOT blocked by a wall.
        """
        val = self.cells[self.get_index(*point)]
        for neighbor, direction in self.neighbor_directions(point):
            if not (val & direction):
                yield neighbor

    # --- Snapshot ---

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone.width = self.width
        clone.height = self.height
        clone.cells = array('B', self.cells)
        clone._start = self._start
        clone._end = self._end
        return clone
