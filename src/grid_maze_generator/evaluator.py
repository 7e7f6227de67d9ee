from collections import deque
from typing import Any, Dict, List, Optional, Set, Tuple

from .generator import enumerate_edges
from .grid import Cell, WallGrid


def open_edges(grid: WallGrid) -> List[Tuple[Cell, Cell]]:
    """Adjacent cell pairs with no wall between them, each pair once."""
    return [(a, b) for a, b in enumerate_edges(grid.width, grid.height) if grid.is_open(a, b)]


def reachable_from(grid: WallGrid, cell: Cell) -> Set[Cell]:
    seen: Set[Cell] = {cell}
    queue = deque([cell])
    while queue:
        cur = queue.popleft()
        for n in grid.open_neighbors(cur):
            if n not in seen:
                seen.add(n)
                queue.append(n)
    return seen


def is_perfect(grid: WallGrid) -> bool:
    """Spanning tree check: w*h - 1 open walls and every cell reachable.

    A connected graph on n nodes with n - 1 edges has no cycle.
    """
    n_cells = grid.width * grid.height
    if grid.open_wall_count() != n_cells - 1:
        return False
    return len(reachable_from(grid, (0, 0))) == n_cells


def shortest_path(grid: WallGrid, start: Cell, goal: Cell) -> Optional[List[Cell]]:
    """BFS path from start to goal through open walls, or None."""
    prev: Dict[Cell, Optional[Cell]] = {start: None}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        if cur == goal:
            path: List[Cell] = []
            node: Optional[Cell] = cur
            while node is not None:
                path.append(node)
                node = prev[node]
            return path[::-1]
        for n in grid.open_neighbors(cur):
            if n not in prev:
                prev[n] = cur
                queue.append(n)
    return None


class Evaluator:
    """Structural report on a wall grid."""

    def __init__(self, grid: WallGrid, start: Cell = (0, 0), goal: Optional[Cell] = None) -> None:
        self.grid = grid
        self.start = start
        self.goal = goal if goal is not None else (grid.width - 1, grid.height - 1)

    def summary(self) -> Dict[str, Any]:
        n_cells = self.grid.width * self.grid.height
        path = shortest_path(self.grid, self.start, self.goal)
        return {
            "cells": n_cells,
            "open_edges": self.grid.open_wall_count(),
            "reachable": len(reachable_from(self.grid, (0, 0))),
            "perfect": is_perfect(self.grid),
            # moves from start to goal, None if unreachable
            "path_length": len(path) - 1 if path is not None else None,
        }
