"""
Copyright 2026 ray-cast-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Perfect labyrinth generator (https://en.wikipedia.org/wiki/Maze_generation_algorithm).

A perfect labyrinth has exactly one path between any two cells: every cell
is reachable and there are no loops. The walls are exported as line pairs
that SceneGraph.add_segments() turns into mirror (or any other) edges,
which makes a convenient stress scene for the solver.
"""

import random
from typing import List, Optional, Tuple, Union, TYPE_CHECKING

from ..core.materials import MaterialState

if TYPE_CHECKING:
    from ..core.scene_graph import SceneGraph, Edge

Line = Tuple[Tuple[float, float], Tuple[float, float]]

TOP = 0b1000
BOTTOM = 0b0100
LEFT = 0b0010
RIGHT = 0b0001
ALL_WALLS = TOP | BOTTOM | LEFT | RIGHT

# (dx, dy) -> (wall of the current cell, wall of the neighbour); y grows downward
DIRECTIONS = {
    (0, -1): (TOP, BOTTOM),
    (0, 1): (BOTTOM, TOP),
    (1, 0): (RIGHT, LEFT),
    (-1, 0): (LEFT, RIGHT),
}


class Labyrinth:
    """
    Grid of square cells, each with up to four walls.

    Attributes:
        width (int): Number of columns
        height (int): Number of rows
        cell_size (float): Side length of a cell in scene units
        origin (tuple): Scene position of the top-left corner
        cells (list): cells[y][x] wall bitmask (TOP, BOTTOM, LEFT, RIGHT)
    """

    def __init__(self, width: int, height: int, cell_size: float,
                 origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Labyrinth size must be at least 1x1, got {width}x{height}")
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.width = width
        self.height = height
        self.cell_size = float(cell_size)
        self.origin = (float(origin[0]), float(origin[1]))
        self.cells: List[List[int]] = [[ALL_WALLS] * width for _ in range(height)]

    def is_open(self, x: int, y: int, side: int) -> bool:
        return not self.cells[y][x] & side

    def open_wall(self, x: int, y: int, dx: int, dy: int) -> None:
        """Open the wall between (x, y) and its neighbour in direction (dx, dy)."""
        side, opposite = DIRECTIONS[(dx, dy)]
        self.cells[y][x] &= ~side
        self.cells[y + dy][x + dx] &= ~opposite

    def passages(self) -> int:
        """Number of opened interior walls."""
        count = 0
        for y in range(self.height):
            for x in range(self.width):
                if x + 1 < self.width and self.is_open(x, y, RIGHT):
                    count += 1
                if y + 1 < self.height and self.is_open(x, y, BOTTOM):
                    count += 1
        return count

    def generate_depth_first(self, seed: Optional[Union[int, random.Random]] = None) -> 'Labyrinth':
        """
        Carve a perfect labyrinth with an iterative depth-first backtracker
        starting from cell (0, 0).

        Args:
            seed: Seed or random.Random instance, for reproducible layouts

        Returns:
            Labyrinth: self, for chaining
        """
        rng = seed if isinstance(seed, random.Random) else random.Random(seed)
        visited = [[False] * self.width for _ in range(self.height)]
        visited[0][0] = True
        stack = [(0, 0)]

        while stack:
            x, y = stack[-1]
            candidates = []
            for dx, dy in DIRECTIONS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.width and 0 <= ny < self.height and not visited[ny][nx]:
                    candidates.append((dx, dy))
            if not candidates:
                stack.pop()
                continue
            dx, dy = rng.choice(candidates)
            self.open_wall(x, y, dx, dy)
            visited[y + dy][x + dx] = True
            stack.append((x + dx, y + dy))

        return self

    def _corner(self, i: int, j: int) -> Tuple[float, float]:
        return (self.origin[0] + i * self.cell_size, self.origin[1] + j * self.cell_size)

    def _horizontal_closed(self, j: int, x: int) -> bool:
        # Horizontal grid line j is the top of row j, or the bottom of the last row
        if j < self.height:
            return not self.is_open(x, j, TOP)
        return not self.is_open(x, self.height - 1, BOTTOM)

    def _vertical_closed(self, i: int, y: int) -> bool:
        if i < self.width:
            return not self.is_open(i, y, LEFT)
        return not self.is_open(self.width - 1, y, RIGHT)

    def wall_lines(self) -> List[Line]:
        """One line per closed wall, each shared wall listed once."""
        lines = []
        for j in range(self.height + 1):
            for x in range(self.width):
                if self._horizontal_closed(j, x):
                    lines.append((self._corner(x, j), self._corner(x + 1, j)))
        for i in range(self.width + 1):
            for y in range(self.height):
                if self._vertical_closed(i, y):
                    lines.append((self._corner(i, y), self._corner(i, y + 1)))
        return lines

    def merged_lines(self) -> List[Line]:
        """Closed walls with collinear neighbours merged into longer lines."""
        lines = []
        for j in range(self.height + 1):
            start = None
            for x in range(self.width + 1):
                closed = x < self.width and self._horizontal_closed(j, x)
                if closed and start is None:
                    start = x
                elif not closed and start is not None:
                    lines.append((self._corner(start, j), self._corner(x, j)))
                    start = None
        for i in range(self.width + 1):
            start = None
            for y in range(self.height + 1):
                closed = y < self.height and self._vertical_closed(i, y)
                if closed and start is None:
                    start = y
                elif not closed and start is not None:
                    lines.append((self._corner(i, start), self._corner(i, y)))
                    start = None
        return lines

    def add_to_graph(self, graph: 'SceneGraph', material=MaterialState.REFLECTIVE,
                     merged: bool = True) -> List['Edge']:
        """
        Add the walls to a scene graph as edges.

        Returns:
            list: The created edges
        """
        lines = self.merged_lines() if merged else self.wall_lines()
        return graph.add_segments(lines, material)
