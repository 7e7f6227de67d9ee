import math
from typing import Tuple

from .config import GenerationConfig
from .grid import Cell, InvalidDimension

DEFAULT_CELL_SIZE = 1.0


def compute_start_goal(config: GenerationConfig) -> Tuple[Cell, Cell]:
    """Start is always the origin. A "center" goal floors toward the lower
    index, so even dimensions give a cell just up-left of the true center."""
    w, h = config.width, config.height
    if w <= 0 or h <= 0:
        raise InvalidDimension(f"maze dimensions must be positive, got {w}x{h}")
    start: Cell = (0, 0)
    if config.goal_in_center:
        goal: Cell = ((w - 1) // 2, (h - 1) // 2)
    else:
        goal = (w - 1, h - 1)
    return start, goal


def cell_to_world(cell: Cell, cell_size: float = DEFAULT_CELL_SIZE) -> Tuple[float, float]:
    x, y = cell
    return ((x + 0.5) * cell_size, (y + 0.5) * cell_size)


def world_to_cell(position: Tuple[float, float], cell_size: float = DEFAULT_CELL_SIZE) -> Cell:
    px, py = position
    return (int(math.floor(px / cell_size)), int(math.floor(py / cell_size)))
