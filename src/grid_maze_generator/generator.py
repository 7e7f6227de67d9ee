"""
Maze carving.

All carvers take a fully closed WallGrid and an explicit random.Random and
remove walls in place. Prim's and Kruskal's produce a spanning tree of the
grid graph (a perfect maze); the custom policy opens every interior wall.

Reproducibility depends on the exact order in which the RNG is consumed:
  - Prim's:    randrange(width), randrange(height) for the start cell, then one
               randrange(len(frontier)) per popped frontier entry.
  - Kruskal's: one randint(0, i) per index i of the edge list, from the last
               index down to 1 (Fisher-Yates).
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, MutableSequence, Optional, Tuple, TypeVar
import logging
import random

from .config import Algorithm, GenerationConfig
from .grid import Cell, InvalidDimension, WallGrid
from .placement import compute_start_goal

logger = logging.getLogger(__name__)

Edge = Tuple[Cell, Cell]
T = TypeVar("T")


@dataclass(frozen=True)
class MazeResult:
    """One generated (or loaded) maze. Replaced wholesale, never edited."""

    grid: WallGrid
    start: Cell
    goal: Cell
    config: GenerationConfig


# --- Prim's ---------------------------------------------------------

def carve_prim(grid: WallGrid, rng: random.Random) -> None:
    visited = [[False] * grid.width for _ in range(grid.height)]
    frontier: List[Tuple[Cell, Optional[Cell]]] = []

    start = (rng.randrange(grid.width), rng.randrange(grid.height))
    visited[start[1]][start[0]] = True
    frontier.append((start, None))

    while frontier:
        cell, from_cell = frontier.pop(rng.randrange(len(frontier)))
        if from_cell is not None:
            grid.remove_wall_between(from_cell, cell)
        for nx, ny in grid.neighbors_in_bounds(cell):
            # mark on push so a cell is never queued twice
            if not visited[ny][nx]:
                visited[ny][nx] = True
                frontier.append(((nx, ny), cell))


# --- Kruskal's ------------------------------------------------------

class DisjointSet:
    """Union-find over ids 0..size-1 (cell id = y * width + x)."""

    def __init__(self, size: int) -> None:
        self.parent: List[int] = list(range(size))
        self.rank: List[int] = [0] * size
        self.set_count = size

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # path compression
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of a and b. Returns False if already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        self.set_count -= 1
        return True


def enumerate_edges(width: int, height: int) -> List[Edge]:
    """Every adjacent pair once: right neighbour then down neighbour, row-major."""
    edges: List[Edge] = []
    for y in range(height):
        for x in range(width):
            if x + 1 < width:
                edges.append(((x, y), (x + 1, y)))
            if y + 1 < height:
                edges.append(((x, y), (x, y + 1)))
    return edges


def fisher_yates_shuffle(items: MutableSequence[T], rng: random.Random) -> None:
    # last to first, swap with a uniformly chosen index in [0, i]
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def carve_kruskal(grid: WallGrid, rng: random.Random) -> None:
    edges = enumerate_edges(grid.width, grid.height)
    fisher_yates_shuffle(edges, rng)
    sets = DisjointSet(grid.width * grid.height)
    for a, b in edges:
        if sets.union(a[1] * grid.width + a[0], b[1] * grid.width + b[0]):
            grid.remove_wall_between(a, b)
    assert sets.set_count == 1


# --- Custom ---------------------------------------------------------

def carve_custom(grid: WallGrid, rng: random.Random) -> None:
    """Open every interior wall. The result is an open field, not a maze."""
    for a, b in enumerate_edges(grid.width, grid.height):
        grid.remove_wall_between(a, b)


CARVERS: Dict[Algorithm, Callable[[WallGrid, random.Random], None]] = {
    Algorithm.PRIM: carve_prim,
    Algorithm.KRUSKAL: carve_kruskal,
    Algorithm.CUSTOM: carve_custom,
}


def generate(config: GenerationConfig, rng: random.Random) -> MazeResult:
    """Carve a new maze for config using rng.

    The caller seeds rng once from config.seed (see config.make_rng).
    Raises InvalidDimension before anything is allocated.
    """
    if config.width <= 0 or config.height <= 0:
        raise InvalidDimension(f"maze dimensions must be positive, got {config.width}x{config.height}")
    algorithm = Algorithm.parse(config.algorithm)
    grid = WallGrid.new(config.width, config.height)
    CARVERS[algorithm](grid, rng)
    start, goal = compute_start_goal(config)
    logger.debug(
        "generated %dx%d maze with %s (seed=%d): %d walls removed",
        config.width, config.height, algorithm.name, config.seed, grid.open_wall_count(),
    )
    return MazeResult(grid=grid, start=start, goal=goal, config=config)
