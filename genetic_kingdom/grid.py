"""The map grid: cell kinds, obstacles, exit, spawn points and enemy lookup."""

from __future__ import annotations

import logging
import random
from enum import Enum
from itertools import product
from typing import Any

logger = logging.getLogger(__name__)

Point = tuple[int, int]

_SEARCH_LIMIT = 50
_EXIT_CELLS = ((49, 24), (49, 25), (49, 26))
_OBSTACLE_CLUSTERS = ((15, 10, 11), (15, 40, 11))
_PATH_SPACING = 4


class CellType(Enum):
    """What occupies a grid cell."""

    EMPTY = 0
    OBSTACLE = 1
    TOWER = 2
    ENEMY = 3
    EXIT_POINT = 4


class GridSystem:
    """A width x height grid of cells indexed as (x, y)."""

    def __init__(
        self,
        width: int,
        height: int,
        cell_size: float,
        rng: random.Random | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.rng = rng or random.Random()
        self.precomputed_paths: dict[Point, list[Point]] = {}
        self._cells = [[CellType.EMPTY] * height for _ in range(width)]
        self._enemies: list[list[Any]] = [[None] * height for _ in range(width)]
        self.spawn_points: list[Point] = [
            (col, row) for col in range(2) for row in range(50)
        ]
        for x, y in _EXIT_CELLS:
            self.set_cell(x, y, CellType.EXIT_POINT)
        for center_x, center_y, radius in _OBSTACLE_CLUSTERS:
            self._add_obstacle_cluster(center_x, center_y, radius)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _add_obstacle_cluster(self, center_x: int, center_y: int, radius: int) -> None:
        start_x = max(0, center_x - radius)
        end_x = min(self.width - 1, center_x + radius)
        start_y = max(0, center_y - radius)
        end_y = min(self.height - 1, center_y + radius)

        for x, y in product(range(start_x, end_x + 1), range(start_y, end_y + 1)):
            self._cells[x][y] = CellType.OBSTACLE

        # Two-cell-wide corridors every few cells, horizontal then vertical.
        for y in range(start_y + _PATH_SPACING, end_y - 1, _PATH_SPACING):
            for x in range(start_x, end_x + 1):
                self._cells[x][y] = CellType.EMPTY
                if y + 1 <= end_y:
                    self._cells[x][y + 1] = CellType.EMPTY
            if start_x > 0:
                self._cells[start_x][y] = CellType.EMPTY
            if end_x < self.width - 1:
                self._cells[end_x][y] = CellType.EMPTY

        for x in range(start_x + _PATH_SPACING, end_x - 1, _PATH_SPACING):
            for y in range(start_y, end_y + 1):
                self._cells[x][y] = CellType.EMPTY
                if x + 1 <= end_x:
                    self._cells[x + 1][y] = CellType.EMPTY
            if start_y > 0:
                self._cells[x][start_y] = CellType.EMPTY
            if end_y < self.height - 1:
                self._cells[x][end_y] = CellType.EMPTY

    def get_cell(self, x: int, y: int) -> CellType:
        """The cell's kind; anything off the grid counts as an obstacle."""
        if not self._in_bounds(x, y):
            return CellType.OBSTACLE
        return self._cells[x][y]

    def set_cell(self, x: int, y: int, cell_type: CellType) -> bool:
        """Set a cell's kind; returns False when the cell is off the grid."""
        if not self._in_bounds(x, y):
            return False
        self._cells[x][y] = cell_type
        return True

    def is_cell_walkable(self, x: int, y: int) -> bool:
        """Whether an enemy may move onto the cell."""
        return self.get_cell(x, y) in (CellType.EMPTY, CellType.EXIT_POINT)

    def register_enemy(self, enemy: Any, grid_x: int, grid_y: int) -> None:
        """Place an enemy on a cell."""
        if self._in_bounds(grid_x, grid_y):
            self._enemies[grid_x][grid_y] = enemy
            self._cells[grid_x][grid_y] = CellType.ENEMY

    def unregister_enemy(self, grid_x: int, grid_y: int) -> None:
        """Clear an enemy from a cell, leaving it empty."""
        if self._in_bounds(grid_x, grid_y):
            self._enemies[grid_x][grid_y] = None
            self._cells[grid_x][grid_y] = CellType.EMPTY

    def enemies_in_radius(self, center_x: int, center_y: int, radius: int) -> list[Any]:
        """Enemies within a square of the given radius, column by column."""
        limit_x = min(self.width, _SEARCH_LIMIT)
        limit_y = min(self.height, _SEARCH_LIMIT)
        xs = range(max(0, center_x - radius), min(limit_x, center_x + radius + 1))
        ys = range(max(0, center_y - radius), min(limit_y, center_y + radius + 1))
        return [
            self._enemies[x][y]
            for x, y in product(xs, ys)
            if self._enemies[x][y] is not None
        ]

    def grid_to_world(self, x: int, y: int) -> tuple[float, float]:
        """Pixel coordinates of a cell's centre."""
        half = self.cell_size / 2.0
        return (x * self.cell_size + half, y * self.cell_size + half)

    def world_to_grid(self, x: float, y: float) -> Point:
        """The cell holding a pixel position."""
        return (int(x / self.cell_size), int(y / self.cell_size))

    def unregister_tower(self, grid_x: int, grid_y: int) -> None:
        """Clear a tower from a cell, leaving it empty."""
        if self._in_bounds(grid_x, grid_y):
            self._cells[grid_x][grid_y] = CellType.EMPTY
            logger.debug("cell (%d, %d) cleared", grid_x, grid_y)