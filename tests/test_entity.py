import random

import pytest

from genetic_kingdom.entity import Entity
from genetic_kingdom.grid import GridSystem


class Marker(Entity):
    def update(self, delta_time):
        self.grid_x += 1


@pytest.fixture
def grid():
    return GridSystem(50, 50, 16.0, random.Random(0))


def test_entity_base_is_abstract(grid):
    with pytest.raises(TypeError):
        Entity(0, 0, (255, 255, 255, 255), grid)


def test_position_matches_grid_centre(grid):
    marker = Marker(3, 4, (1, 2, 3, 255), grid)
    assert marker.position() == grid.grid_to_world(3, 4)


def test_position_follows_grid_coordinates(grid):
    marker = Marker(3, 4, (1, 2, 3, 255), grid)
    marker.update(0.1)
    assert marker.position() == grid.grid_to_world(4, 4)
    assert grid.world_to_grid(*marker.position()) == (4, 4)


def test_size_and_colour(grid):
    marker = Marker(0, 0, (10, 20, 30, 100), grid)
    assert marker.size == grid.cell_size - 2
    assert marker.color == (10, 20, 30, 100)