from pathlib import Path
from typing import List, Optional, Tuple, Union
import random

from .config import GenerationConfig, make_rng
from .generator import MazeResult, generate
from .grid import Cell, WallGrid
from .placement import DEFAULT_CELL_SIZE, cell_to_world, world_to_cell
from . import persistence

# matplotlib optional for rendering
try:
    import matplotlib.pyplot as plt
except Exception:
    plt = None  # render disabled if matplotlib missing

Point = Tuple[float, float]
Segment = Tuple[Point, Point]


class Maze:
    """The current maze plus the queries its consumers need.

    The maze is generated on construction and replaced only by an explicit
    regenerate() or load(); the underlying MazeResult is never edited.
    """

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        rng: Optional[random.Random] = None,
        cell_size: float = DEFAULT_CELL_SIZE,
        result: Optional[MazeResult] = None,
    ) -> None:
        self.cell_size = cell_size
        if result is None:
            config = config or GenerationConfig()
            result = generate(config, rng or make_rng(config.seed))
        self.result = result

    def regenerate(self, config: Optional[GenerationConfig] = None, rng: Optional[random.Random] = None, **changes) -> MazeResult:
        """Replace the maze. Keyword changes (seed=..., algorithm=...) are
        applied on top of config, or of the current config if none is given."""
        config = config or self.result.config
        if changes:
            config = config.with_changes(**changes)
        # generate() raises before touching self.result on bad dimensions
        self.result = generate(config, rng or make_rng(config.seed))
        return self.result

    @classmethod
    def from_result(cls, result: MazeResult, cell_size: float = DEFAULT_CELL_SIZE) -> "Maze":
        return cls(cell_size=cell_size, result=result)

    @classmethod
    def load(cls, path: Union[str, Path], goal_in_center: bool = False, cell_size: float = DEFAULT_CELL_SIZE) -> "Maze":
        return cls.from_result(persistence.load_result(path, goal_in_center), cell_size)

    def save(self, path: Union[str, Path]) -> Path:
        return persistence.save(self.result, path)

    # --- query surface ---------------------------------------------

    @property
    def config(self) -> GenerationConfig:
        return self.result.config

    @property
    def grid(self) -> WallGrid:
        return self.result.grid

    @property
    def width(self) -> int:
        return self.result.grid.width

    @property
    def height(self) -> int:
        return self.result.grid.height

    @property
    def start(self) -> Cell:
        return self.result.start

    @property
    def goal(self) -> Cell:
        return self.result.goal

    def start_world_position(self) -> Point:
        return cell_to_world(self.start, self.cell_size)

    def goal_world_position(self) -> Point:
        return cell_to_world(self.goal, self.cell_size)

    def cell_containing(self, world_position: Point) -> Cell:
        return world_to_cell(world_position, self.cell_size)

    # --- rendering contract ----------------------------------------

    def cell_walls(self, cell: Cell) -> Tuple[bool, bool]:
        """(east, south) wall presence for cell; border sides report True."""
        g = self.grid
        if not g.in_bounds(cell):
            raise IndexError(f"cell {cell} is outside the {g.width}x{g.height} maze")
        x, y = cell
        east = x == g.width - 1 or bool(g.vertical_walls[y, x])
        south = y == g.height - 1 or bool(g.horizontal_walls[y, x])
        return east, south

    def border_walls(self) -> List[Segment]:
        w, h = float(self.width), float(self.height)
        # north, east, south, west
        return [
            ((0.0, 0.0), (w, 0.0)),
            ((w, 0.0), (w, h)),
            ((0.0, h), (w, h)),
            ((0.0, 0.0), (0.0, h)),
        ]

    def wall_segments(self) -> List[Segment]:
        """All present walls as line segments in cell units, border first."""
        segments = self.border_walls()
        g = self.grid
        for x, y in g.cells():
            if x < g.width - 1 and g.vertical_walls[y, x]:
                segments.append(((x + 1.0, float(y)), (x + 1.0, y + 1.0)))
            if y < g.height - 1 and g.horizontal_walls[y, x]:
                segments.append(((float(x), y + 1.0), (x + 1.0, y + 1.0)))
        return segments

    def to_ascii(self) -> str:
        lines = ["+" + "--+" * self.width]
        for y in range(self.height):
            row = "|"
            floor = "+"
            for x in range(self.width):
                if (x, y) == self.start:
                    mark = "S "
                elif (x, y) == self.goal:
                    mark = "G "
                else:
                    mark = "  "
                east, south = self.cell_walls((x, y))
                row += mark + ("|" if east else " ")
                floor += ("--" if south else "  ") + "+"
            lines.append(row)
            lines.append(floor)
        return "\n".join(lines)

    def render(self, savepath: Optional[str] = None, figsize: Tuple[int, int] = (6, 6)) -> None:
        if plt is None:
            print("matplotlib not available; render skipped.")
            return
        fig, ax = plt.subplots(figsize=figsize)
        for (x0, y0), (x1, y1) in self.wall_segments():
            ax.plot([x0, x1], [y0, y1], color="black", linewidth=1.5)
        ax.scatter([self.start[0] + 0.5], [self.start[1] + 0.5], c="green")
        ax.scatter([self.goal[0] + 0.5], [self.goal[1] + 0.5], c="red")
        ax.set_aspect("equal")
        ax.invert_yaxis()
        ax.set_xticks([])
        ax.set_yticks([])
        if savepath:
            plt.savefig(savepath, bbox_inches="tight")
            print(f"Saved visual to {savepath}")
        plt.close(fig)
