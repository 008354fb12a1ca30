"""
Wall segments and the conversion from a maze grid to wall geometry.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .config import WALL_COLOR, Color
from .maze import Cell, Direction, Maze
from .vector import Vector2


@dataclass(frozen=True)
class Wall:
    """One finite wall segment from p0 to p1, drawn in a flat color."""

    p0: Vector2
    p1: Vector2
    color: Color = WALL_COLOR

    @classmethod
    def from_coords(
        cls, x0: float, y0: float, x1: float, y1: float, color: Color = WALL_COLOR
    ) -> Wall:
        return cls(Vector2(float(x0), float(y0)), Vector2(float(x1), float(y1)), color)

    def length(self) -> float:
        return self.p0.distance_to(self.p1)


def cell_edge(cell: Cell, direction: Direction, scale: float = 1.0) -> tuple:
    """Endpoints (x0, y0, x1, y1) of the given side of cell in map units."""
    x = cell.x * scale
    y = cell.y * scale
    if direction is Direction.N:
        return (x, y, x + scale, y)
    if direction is Direction.S:
        return (x, y + scale, x + scale, y + scale)
    if direction is Direction.E:
        return (x + scale, y, x + scale, y + scale)
    return (x, y, x, y + scale)


def cell_walls(
    maze: Maze, cell: Cell, scale: float = 1.0, color: Color = WALL_COLOR
) -> List[Wall]:
    """Walls for the closed sides of one cell, in N, S, E, W order."""
    return [
        Wall.from_coords(*cell_edge(cell, direction, scale), color)
        for direction in (Direction.N, Direction.S, Direction.E, Direction.W)
        if not maze.is_linked(cell, direction)
    ]


def maze_to_walls(
    maze: Maze, scale: float = 1.0, color: Color = WALL_COLOR
) -> List[Wall]:
    """
    Emit a wall for every cell side that has no passage through it.
    Interior sides shared by two closed cells come out twice, once per cell.
    """
    out = []
    for cell in maze.cells:
        out.extend(cell_walls(maze, cell, scale, color))
    return out
