"""
Grid maze generation: uniform random spanning tree via the Aldous-Broder random walk.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Protocol, Sequence, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomChoice(Protocol):
    """Anything with a uniform ``choice``; ``random.Random`` fits."""

    def choice(self, seq: Sequence[T]) -> T: ...


@dataclass(frozen=True, order=True)
class Cell:
    """Grid coordinate of one maze square."""

    x: int
    y: int


class Direction(Enum):
    """Grid directions. y grows southward, matching screen coordinates."""

    N = (0, -1)
    S = (0, 1)
    E = (1, 0)
    W = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}


class Maze:
    """
    Rectangular grid of cells plus the set of passages (links) between them.
    Attributes:
        height, width: grid size in cells.
        cells: every cell in row-major order.
        links: cell -> set of cells it has a passage to. Always symmetric.
    """

    def __init__(self, height: int, width: int) -> None:
        if height <= 0 or width <= 0:
            raise ValueError(
                f"Maze dimensions must be positive, got {height}x{width}"
            )
        self.height = height
        self.width = width
        self.cells: List[Cell] = [
            Cell(x, y) for y in range(height) for x in range(width)
        ]
        self.links: Dict[Cell, Set[Cell]] = {}

    @classmethod
    def blank(cls, height: int, width: int) -> Maze:
        """Grid with no passages at all."""
        return cls(height, width)

    @classmethod
    def generate(
        cls, height: int, width: int, rng: Optional[RandomChoice] = None
    ) -> Maze:
        """
        Build a perfect maze with a random walk: wander between neighbours and
        carve a passage every time the walk first enters an unvisited cell.
        rng: source of uniform choices; pass a seeded random.Random for
        reproducible mazes.
        """
        maze = cls(height, width)
        rng = rng or random.Random()
        cell = rng.choice(maze.cells)
        unvisited = maze.size() - 1
        steps = 0
        while unvisited > 0:
            neighbour = rng.choice(maze._neighbour_list(cell))
            if not maze.links.get(neighbour):
                maze.link(cell, neighbour)
                unvisited -= 1
            cell = neighbour
            steps += 1
        logger.debug(
            "Generated %dx%d maze in %d walk steps", height, width, steps
        )
        return maze

    def size(self) -> int:
        return self.height * self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        """Return the cell at (x, y); IndexError if outside the grid."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} maze")
        return self.cells[y * self.width + x]

    def cell_in_direction(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        """Grid neighbour of cell in direction, or None at the border."""
        x, y = cell.x + direction.dx, cell.y + direction.dy
        if not self.in_bounds(x, y):
            return None
        return self.cells[y * self.width + x]

    def _neighbour_list(self, cell: Cell) -> List[Cell]:
        out = []
        for direction in Direction:
            other = self.cell_in_direction(cell, direction)
            if other is not None:
                out.append(other)
        return out

    def neighbors_in_bounds(self, cell: Cell) -> Set[Cell]:
        """Grid-adjacent cells, clipped to the maze bounds."""
        return set(self._neighbour_list(cell))

    def link(self, a: Cell, b: Cell) -> None:
        """Open a passage between two adjacent cells (both directions)."""
        if b not in self.neighbors_in_bounds(a):
            raise ValueError(f"Cannot link non-adjacent cells {a} and {b}")
        self.links.setdefault(a, set()).add(b)
        self.links.setdefault(b, set()).add(a)

    def links_of(self, cell: Cell) -> Set[Cell]:
        return self.links.get(cell, set())

    def is_linked_cells(self, a: Cell, b: Cell) -> bool:
        return b in self.links.get(a, ())

    def is_linked(self, cell: Cell, direction: Direction) -> bool:
        """True if a passage leads out of cell in direction."""
        return self.linked_neighbor_in_direction(cell, direction) is not None

    def linked_neighbor_in_direction(
        self, cell: Cell, direction: Direction
    ) -> Optional[Cell]:
        """The neighbour reached through a passage in direction, if any."""
        other = self.cell_in_direction(cell, direction)
        if other is None or not self.is_linked_cells(cell, other):
            return None
        return other

    def edge_count(self) -> int:
        """Number of undirected passages."""
        return sum(len(s) for s in self.links.values()) // 2

    def render_text(self) -> str:
        """ASCII box drawing of the maze, one text row pair per grid row."""
        lines = ["+" + "---+" * self.width]
        for y in range(self.height):
            top = "|"
            bottom = "+"
            for x in range(self.width):
                cell = self.cells[y * self.width + x]
                top += "   " + (" " if self.is_linked(cell, Direction.E) else "|")
                bottom += ("   " if self.is_linked(cell, Direction.S) else "---") + "+"
            lines.append(top)
            lines.append(bottom)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render_text()

    def __repr__(self) -> str:
        return f"<Maze {self.width}x{self.height} links={self.edge_count()}>"
