"""
Save/load of the wall model.

The persisted record is a JSON object:

    {"width": 8, "height": 8,
     "vertical_walls": [[true, false, ...], ...],
     "horizontal_walls": [[...], ...],
     "seed": 42, "algorithm": 0}

Wall arrays are row-major (one list per row y). Loading is lenient: missing
fields fall back to defaults and the arrays are not checked against width and
height until the state is turned back into a grid (MazeState.to_grid).
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union
import json
import logging

import numpy as np

from .config import Algorithm, GenerationConfig
from .generator import MazeResult
from .grid import WallGrid
from .placement import compute_start_goal

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 16
DEFAULT_HEIGHT = 16
DEFAULT_SEED = 0
DEFAULT_ALGORITHM = Algorithm.PRIM


class MazeFormatError(ValueError):
    """Persisted maze data cannot be decoded or does not fit its dimensions."""


def _empty_walls() -> np.ndarray:
    return np.zeros((0, 0), dtype=bool)


def _to_wall_array(rows: Any) -> np.ndarray:
    if rows is None or rows == []:
        return _empty_walls()
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise MazeFormatError("wall array is not a list of boolean rows")
    # bool() would turn null into an open wall and any string into a closed one
    if not all(isinstance(v, bool) for row in rows for v in row):
        raise MazeFormatError("wall array is not a list of boolean rows")
    if len(set(len(row) for row in rows)) != 1:
        raise MazeFormatError("wall array rows differ in length")
    return np.array(rows, dtype=bool).reshape(len(rows), len(rows[0]))


@dataclass
class MazeState:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    seed: int = DEFAULT_SEED
    algorithm: Algorithm = DEFAULT_ALGORITHM
    vertical_walls: np.ndarray = field(default_factory=_empty_walls)
    horizontal_walls: np.ndarray = field(default_factory=_empty_walls)

    @classmethod
    def from_result(cls, result: MazeResult) -> "MazeState":
        grid, cfg = result.grid, result.config
        return cls(
            width=grid.width,
            height=grid.height,
            seed=cfg.seed,
            algorithm=Algorithm.parse(cfg.algorithm),
            vertical_walls=grid.vertical_walls.copy(),
            horizontal_walls=grid.horizontal_walls.copy(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": int(self.width),
            "height": int(self.height),
            "vertical_walls": self.vertical_walls.tolist(),
            "horizontal_walls": self.horizontal_walls.tolist(),
            "seed": int(self.seed),
            "algorithm": int(self.algorithm),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MazeState":
        try:
            algorithm = Algorithm.parse(data.get("algorithm", DEFAULT_ALGORITHM))
            return cls(
                width=int(data.get("width", DEFAULT_WIDTH)),
                height=int(data.get("height", DEFAULT_HEIGHT)),
                seed=int(data.get("seed", DEFAULT_SEED)),
                algorithm=algorithm,
                vertical_walls=_to_wall_array(data.get("vertical_walls")),
                horizontal_walls=_to_wall_array(data.get("horizontal_walls")),
            )
        except MazeFormatError:
            raise
        except (TypeError, ValueError) as e:
            raise MazeFormatError(f"invalid maze record: {e}") from e

    def to_grid(self) -> WallGrid:
        """Build a WallGrid, checking the arrays against width/height.

        Empty arrays (a record saved without walls) give a fully closed grid.
        """
        grid = WallGrid.new(self.width, self.height)
        expected = (self.height, self.width)
        for name in ("vertical_walls", "horizontal_walls"):
            arr = getattr(self, name)
            if arr.size == 0:
                continue
            if arr.shape != expected:
                raise MazeFormatError(f"{name} has shape {arr.shape}, expected {expected}")
            setattr(grid, name, arr.copy())
        return grid

    def to_config(self, goal_in_center: bool = False) -> GenerationConfig:
        return GenerationConfig(
            width=self.width,
            height=self.height,
            seed=self.seed,
            algorithm=self.algorithm,
            goal_in_center=goal_in_center,
        )

    def to_result(self, goal_in_center: bool = False) -> MazeResult:
        config = self.to_config(goal_in_center)
        start, goal = compute_start_goal(config)
        return MazeResult(grid=self.to_grid(), start=start, goal=goal, config=config)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MazeState):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.seed == other.seed
            and self.algorithm == other.algorithm
            and np.array_equal(self.vertical_walls, other.vertical_walls)
            and np.array_equal(self.horizontal_walls, other.horizontal_walls)
        )


def serialize(state: Union[MazeState, MazeResult]) -> bytes:
    if isinstance(state, MazeResult):
        state = MazeState.from_result(state)
    return json.dumps(state.to_dict()).encode("utf-8")


def deserialize(data: Union[bytes, str]) -> MazeState:
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        record = json.loads(data)
    except UnicodeDecodeError as e:
        raise MazeFormatError(f"maze data is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise MazeFormatError(f"maze data is not valid JSON: {e}") from e
    if not isinstance(record, dict):
        raise MazeFormatError(f"maze data must be a JSON object, got {type(record).__name__}")
    return MazeState.from_dict(record)


def save(state: Union[MazeState, MazeResult], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_bytes(serialize(state))
    logger.info("saved maze to %s", path)
    return path


def load(path: Union[str, Path]) -> MazeState:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Maze file not found: {path}")
    return deserialize(path.read_bytes())


def load_result(path: Union[str, Path], goal_in_center: bool = False) -> MazeResult:
    """Load a saved maze and recompute start/goal for its dimensions."""
    return load(path).to_result(goal_in_center)
