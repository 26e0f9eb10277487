from enum import IntEnum
from typing import NamedTuple, Tuple

from maze_carver.core.errors import NotAdjacentError, SelfDirectionError


class Point(NamedTuple):
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Direction(IntEnum):
    # Values double as wall bits in Grid.cells
    NORTH = 0b0001
    EAST  = 0b0010
    SOUTH = 0b0100
    WEST  = 0b1000

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSET[self]

    def step(self, point: Point) -> Point:
        """Point one cell away from `point` in this direction (may be out of bounds)."""
        dx, dy = self.offset
        return Point(point.x + dx, point.y + dy)


_OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

# North is up, i.e. y - 1
_OFFSET = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

ALL_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def relative_direction(src: Tuple[int, int], dst: Tuple[int, int]) -> Direction:
    """
    Direction from `src` toward the 4-adjacent `dst`.
    Raises SelfDirectionError if both are the same point and NotAdjacentError
    if they do not share a wall.
    """
    dx = dst[0] - src[0]
    dy = dst[1] - src[1]

    if dx == 0 and dy == 0:
        raise SelfDirectionError(Point(*src))
    if abs(dx) + abs(dy) != 1:
        raise NotAdjacentError(Point(*src), Point(*dst))

    if dx == 1:
        return Direction.EAST
    if dx == -1:
        return Direction.WEST
    if dy == 1:
        return Direction.SOUTH
    return Direction.NORTH
