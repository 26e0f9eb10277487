import math
from typing import Mapping, Tuple

import numpy as np

from maze_carver.algo.dfs import CellState

Color = Tuple[int, int, int]

COLOR_BG = (230, 230, 230)
COLOR_WALL = (0, 0, 0)
COLOR_START = (0, 200, 0)
COLOR_END = (220, 0, 0)
COLOR_VISITED = (60, 100, 160) # Blue tint
COLOR_CURRENT = (0, 220, 220)
COLOR_SOLUTION = (255, 215, 0) # Gold

# Heat map endpoints: cheap (near start) -> expensive
COLOR_COST_LOW = (40, 60, 120)
COLOR_COST_HIGH = (240, 120, 60)

_GENERATION_COLORS = {
    CellState.UNVISITED: COLOR_BG,
    CellState.VISITED: COLOR_VISITED,
    CellState.CURRENT: COLOR_CURRENT,
}


def generation_color(state: CellState) -> Color:
    return _GENERATION_COLORS[state]


def cost_heatmap(cost_map: Mapping[Tuple[int, int], float], width: int, height: int) -> np.ndarray:
    """
    Builds a (width, height, 3) uint8 image of the solver's g-scores, laid
    out like pygame.surfarray (x first). Unreached cells keep COLOR_BG.
    """
    costs = np.full((width, height), np.inf, dtype=np.float64)
    for (x, y), cost in cost_map.items():
        if not math.isinf(cost):
            costs[x, y] = cost

    image = np.empty((width, height, 3), dtype=np.uint8)
    image[:, :] = COLOR_BG

    finite = np.isfinite(costs)
    if not finite.any():
        return image

    top = costs[finite].max()
    t = costs[finite] / top if top > 0 else np.zeros(np.count_nonzero(finite))

    low = np.array(COLOR_COST_LOW, dtype=np.float64)
    high = np.array(COLOR_COST_HIGH, dtype=np.float64)
    image[finite] = np.rint(low + (high - low) * t[:, None]).astype(np.uint8)
    return image
