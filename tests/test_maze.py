import random
from collections import deque

import pytest

from raymaze.maze import Cell, Direction, Maze


def _reachable(maze, start):
    seen = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        for other in maze.links_of(cell):
            if other not in seen:
                seen.add(other)
                queue.append(other)
    return seen


@pytest.mark.parametrize(
    "height,width,seed",
    [(1, 1, 0), (1, 7, 1), (6, 1, 2), (2, 2, 3), (10, 10, 4), (5, 13, 5)],
)
def test_generate_builds_spanning_tree(height, width, seed):
    maze = Maze.generate(height, width, random.Random(seed))
    # n - 1 edges and connected implies acyclic
    assert maze.edge_count() == height * width - 1
    assert _reachable(maze, maze.cells[0]) == set(maze.cells)


@pytest.mark.parametrize("seed", range(5))
def test_links_are_symmetric_and_adjacent(seed):
    maze = Maze.generate(6, 8, random.Random(seed))
    for a, linked in maze.links.items():
        for b in linked:
            assert a in maze.links[b]
            assert abs(a.x - b.x) + abs(a.y - b.y) == 1


def test_generate_is_reproducible_with_seeded_rng():
    m1 = Maze.generate(8, 8, random.Random(42))
    m2 = Maze.generate(8, 8, random.Random(42))
    assert m1.links == m2.links


def test_generate_without_rng_still_spans():
    maze = Maze.generate(4, 4)
    assert maze.edge_count() == 15


@pytest.mark.parametrize("height,width", [(0, 5), (5, 0), (-1, 3), (0, 0)])
def test_invalid_dimensions_rejected(height, width):
    with pytest.raises(ValueError):
        Maze.generate(height, width, random.Random(0))


def test_single_cell_maze_has_no_links():
    maze = Maze.generate(1, 1, random.Random(0))
    assert maze.cells == [Cell(0, 0)]
    assert maze.links == {}


def test_cells_row_major_and_lookup():
    maze = Maze.blank(2, 3)
    assert maze.cells[:3] == [Cell(0, 0), Cell(1, 0), Cell(2, 0)]
    assert maze.cell(2, 1) == Cell(2, 1)
    with pytest.raises(IndexError):
        maze.cell(3, 0)


def test_neighbors_clipped_to_bounds():
    maze = Maze.blank(3, 3)
    assert maze.neighbors_in_bounds(Cell(0, 0)) == {Cell(1, 0), Cell(0, 1)}
    assert maze.neighbors_in_bounds(Cell(1, 1)) == {
        Cell(1, 0),
        Cell(1, 2),
        Cell(0, 1),
        Cell(2, 1),
    }
    assert maze.cell_in_direction(Cell(0, 0), Direction.N) is None
    assert maze.cell_in_direction(Cell(0, 0), Direction.S) == Cell(0, 1)


def test_is_linked_by_direction():
    maze = Maze.blank(2, 2)
    maze.link(Cell(0, 0), Cell(1, 0))
    assert maze.is_linked(Cell(0, 0), Direction.E)
    assert maze.is_linked(Cell(1, 0), Direction.W)
    assert not maze.is_linked(Cell(0, 0), Direction.S)
    # Out of bounds is never linked
    assert not maze.is_linked(Cell(0, 0), Direction.N)
    assert maze.linked_neighbor_in_direction(Cell(0, 0), Direction.E) == Cell(1, 0)
    assert maze.linked_neighbor_in_direction(Cell(0, 0), Direction.S) is None


def test_link_rejects_non_adjacent_cells():
    maze = Maze.blank(3, 3)
    with pytest.raises(ValueError):
        maze.link(Cell(0, 0), Cell(2, 2))
    assert maze.links == {}


def test_direction_opposites():
    for direction in Direction:
        assert direction.opposite.opposite is direction
        assert direction.dx == -direction.opposite.dx


def test_render_text():
    maze = Maze.blank(1, 2)
    maze.link(Cell(0, 0), Cell(1, 0))
    assert str(maze) == "+---+---+\n|       |\n+---+---+\n"


def test_render_text_shape():
    maze = Maze.generate(3, 4, random.Random(9))
    lines = maze.render_text().splitlines()
    assert len(lines) == 1 + 2 * 3
    assert all(len(line) == 1 + 4 * 4 for line in lines)
