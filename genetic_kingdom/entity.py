"""Base class for things placed on the grid."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .grid import GridSystem

Color = tuple[int, int, int, int]


class Entity(ABC):
    """An object occupying one grid cell, drawn as a square with a colour."""

    def __init__(self, grid_x: int, grid_y: int, color: Color, grid: GridSystem) -> None:
        self.grid_x = grid_x
        self.grid_y = grid_y
        self.color = color
        self.grid = grid
        self.size = grid.cell_size - 2

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the entity's logic by delta_time seconds."""

    def position(self) -> tuple[float, float]:
        """Pixel coordinates of the entity's cell centre."""
        return self.grid.grid_to_world(self.grid_x, self.grid_y)