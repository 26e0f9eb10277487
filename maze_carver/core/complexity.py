from collections import Counter, deque
from typing import Dict, List, Optional, Set, Tuple

from maze_carver.core.geometry import ALL_DIRECTIONS, Direction, Point
from maze_carver.core.grid import Grid


def calculate_stats(grid: Grid) -> Dict[str, float]:
    """
    Classifies cells by how many walls are still closed. Dead ends keep three,
    corridors two, junctions one or none. Sealed cells count as none of these.
    """
    closed = Counter(len(grid.walls(p)) for p in grid.points())
    dead_ends = closed[3]
    total = grid.width * grid.height
    return {
        "dead_ends": dead_ends,
        "corridors": closed[2],
        "intersections": closed[1] + closed[0],
        "dead_end_percent": dead_ends / total * 100,
    }


def reachable_from(grid: Grid, origin: Tuple[int, int]) -> Set[Point]:
    origin = Point(*origin)
    seen = {origin}
    queue = deque([origin])
    while queue:
        current = queue.popleft()
        for nxt in grid.open_neighbors(current):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def bfs_distance(grid: Grid, a: Tuple[int, int], b: Tuple[int, int]) -> Optional[int]:
    """
    Hop count of the shortest open-wall route from a to b, or None.
    Plain BFS, independent of the A* solver.
    """
    a, b = Point(*a), Point(*b)
    dist = {a: 0}
    queue = deque([a])
    while queue:
        current = queue.popleft()
        if current == b:
            return dist[current]
        for nxt in grid.open_neighbors(current):
            if nxt not in dist:
                dist[nxt] = dist[current] + 1
                queue.append(nxt)
    return None


def check_wall_symmetry(grid: Grid) -> List[Tuple[Point, Direction]]:
    """Returns every (cell, direction) whose wall disagrees with the neighbor's matching wall."""
    broken = []
    for p in grid.points():
        for d in ALL_DIRECTIONS:
            n = d.step(p)
            if not grid.in_bounds(n):
                continue
            if grid.has_wall(p, d) != grid.has_wall(n, d.opposite):
                broken.append((p, d))
    return broken
