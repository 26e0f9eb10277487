from typing import Iterable, Optional, Tuple

from maze_carver.core.geometry import Direction, Point
from maze_carver.core.grid import Grid


def render_text(grid: Grid, path: Optional[Iterable[Tuple[int, int]]] = None) -> str:
    """
    Draws the maze with '+', '--' and '|'. Start is 'S', end is 'E' and
    cells on `path` are '*'. Each cell is two characters wide.
    """
    on_path = set(Point(*p) for p in path) if path else set()

    lines = []
    lines.append("+" + "--+" * grid.width)

    for y in range(grid.height):
        row = ["|"]
        floor = ["+"]
        for x in range(grid.width):
            p = Point(x, y)
            if p == grid.start:
                mark = "S "
            elif p == grid.end:
                mark = "E "
            elif p in on_path:
                mark = "* "
            else:
                mark = "  "
            row.append(mark)
            row.append("|" if grid.has_wall(p, Direction.EAST) else " ")
            floor.append("--" if grid.has_wall(p, Direction.SOUTH) else "  ")
            floor.append("+")
        lines.append("".join(row))
        lines.append("".join(floor))

    return "\n".join(lines)
