from typing import Iterator, List, Tuple
import numpy as np

Cell = Tuple[int, int]  # (x, y)

# Fixed neighbour order N, E, S, W as (dx, dy). Seeded generation consumes
# randomness in this order, so changing it changes every maze.
DIRECTION_VECTORS: List[Tuple[int, int]] = [(0, -1), (1, 0), (0, 1), (-1, 0)]


class InvalidDimension(ValueError):
    """Raised when a grid is requested with a non-positive width or height."""


class NotAdjacent(AssertionError):
    """Two cells passed to a wall operation do not share an edge."""


class WallGrid:
    """Wall model of a width x height cell grid.

    vertical_walls[y, x] is the wall between (x, y) and (x + 1, y); the last
    column is unused. horizontal_walls[y, x] is the wall between (x, y) and
    (x, y + 1); the last row is unused. The outer border is implicit.
    """

    def __init__(self, width: int, height: int, vertical_walls: np.ndarray, horizontal_walls: np.ndarray) -> None:
        self.width = width
        self.height = height
        self.vertical_walls = vertical_walls
        self.horizontal_walls = horizontal_walls

    @classmethod
    def new(cls, width: int, height: int) -> "WallGrid":
        if width <= 0 or height <= 0:
            raise InvalidDimension(f"maze dimensions must be positive, got {width}x{height}")
        return cls(
            width,
            height,
            np.ones((height, width), dtype=bool),
            np.ones((height, width), dtype=bool),
        )

    def copy(self) -> "WallGrid":
        return WallGrid(self.width, self.height, self.vertical_walls.copy(), self.horizontal_walls.copy())

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def is_adjacent(self, a: Cell, b: Cell) -> bool:
        if not (self.in_bounds(a) and self.in_bounds(b)):
            return False
        return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1

    def remove_wall_between(self, a: Cell, b: Cell) -> None:
        if not self.is_adjacent(a, b):
            raise NotAdjacent(f"cells {a} and {b} do not share an edge")
        (x1, y1), (x2, y2) = a, b
        if x1 == x2:
            self.horizontal_walls[min(y1, y2), x1] = False
        else:
            self.vertical_walls[y1, min(x1, x2)] = False

    def is_open(self, a: Cell, b: Cell) -> bool:
        """True if a and b are adjacent and no wall separates them."""
        if not self.is_adjacent(a, b):
            return False
        (x1, y1), (x2, y2) = a, b
        if x1 == x2:
            return not bool(self.horizontal_walls[min(y1, y2), x1])
        return not bool(self.vertical_walls[y1, min(x1, x2)])

    def neighbors_in_bounds(self, cell: Cell) -> Iterator[Cell]:
        x, y = cell
        for dx, dy in DIRECTION_VECTORS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield (nx, ny)

    def open_neighbors(self, cell: Cell) -> Iterator[Cell]:
        for n in self.neighbors_in_bounds(cell):
            if self.is_open(cell, n):
                yield n

    def defined_wall_count(self) -> int:
        """Number of interior wall slots, i.e. grid-graph edges: 2wh - w - h."""
        return (self.width - 1) * self.height + self.width * (self.height - 1)

    def open_wall_count(self) -> int:
        # only the defined region counts; the last column/row are padding
        v = self.vertical_walls[:, : self.width - 1]
        h = self.horizontal_walls[: self.height - 1, :]
        return int(np.count_nonzero(~v) + np.count_nonzero(~h))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WallGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.vertical_walls, other.vertical_walls)
            and np.array_equal(self.horizontal_walls, other.horizontal_walls)
        )

    def __repr__(self) -> str:
        return f"WallGrid(width={self.width}, height={self.height}, open={self.open_wall_count()})"
