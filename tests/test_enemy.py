import pytest

from genetic_kingdom import enemy as enemy_module
from genetic_kingdom.enemy import (
    EffectType,
    Enemy,
    bounty_for_type,
    color_for_type,
    default_resistances,
)
from genetic_kingdom.genome import Attributes, EnemyGenome, EnemyType
from genetic_kingdom.grid import CellType, GridSystem


@pytest.fixture
def grid():
    return GridSystem(50, 50, 16.0)


def make_enemy(grid, x=0, y=5, enemy_type=EnemyType.OGRE, health=100.0, speed=1.0,
               path=None, path_finder=None):
    genome = EnemyGenome(enemy_type, Attributes(health, speed, 0.1, 0.1))
    return Enemy(genome, x, y, grid, path if path is not None else [], path_finder=path_finder)


def test_construction_registers_on_grid(grid):
    enemy = make_enemy(grid)
    assert grid.get_cell(0, 5) is CellType.ENEMY
    assert grid.enemies_in_radius(0, 5, 0) == [enemy]


def test_remove_clears_cell(grid):
    enemy = make_enemy(grid)
    enemy.remove()
    assert grid.get_cell(0, 5) is CellType.EMPTY
    assert grid.enemies_in_radius(0, 5, 0) == []


def test_attributes_come_from_genome(grid):
    enemy = make_enemy(grid, enemy_type=EnemyType.HARPY, health=77.0, speed=0.7)
    assert enemy.health == 77.0
    assert enemy.speed == 0.7
    assert enemy.resistances == default_resistances(EnemyType.HARPY)
    assert enemy.color == color_for_type(EnemyType.HARPY)


def test_ogre_resists_arrows_more_than_magic(grid):
    by_arrow = make_enemy(grid, y=5)
    by_magic = make_enemy(grid, y=6)
    by_arrow.take_damage(10.0, "archer")
    by_magic.take_damage(10.0, "mage")
    assert by_arrow.health > by_magic.health


def test_harpy_immune_to_artillery(grid):
    harpy = make_enemy(grid, enemy_type=EnemyType.HARPY, health=80.0)
    harpy.take_damage(50.0, "artillery")
    assert harpy.health == 80.0
    assert harpy.is_alive()


def test_unknown_damage_type_is_unscaled(grid):
    enemy = make_enemy(grid, health=100.0)
    enemy.take_damage(30.0, "fire")
    assert enemy.health == pytest.approx(100.0 - 30.0)


def test_lethal_damage_sets_killer(grid):
    enemy = make_enemy(grid, health=10.0)
    enemy.take_damage(1000.0, "mage")
    assert enemy.health == 0.0
    assert not enemy.is_alive()
    assert enemy.killer == "mage"


def test_bleed_kill_is_credited_to_archer(grid):
    enemy = make_enemy(grid, health=5.0)
    enemy.take_damage(100.0, "Bleed")
    assert enemy.killer == "archer"


def test_weaken_raises_resistances_to_floor(grid):
    enemy = make_enemy(grid)
    base = enemy.resistances
    enemy.apply_effect(EffectType.WEAKEN, 5.0)
    current = enemy.current_resistances()
    assert current.arrows >= enemy_module.WEAKEN_FLOOR
    assert current.magic == base.magic
    assert enemy.resistances == base


def test_slow_lengthens_step_time_until_cleared(grid):
    enemy = make_enemy(grid, speed=1.0)
    enemy.apply_effect(EffectType.SLOW, 3.0)
    assert enemy.current_speed() > enemy.speed
    enemy.clear_effect()
    assert enemy.current_speed() == enemy.speed


def test_effect_expires(grid):
    enemy = make_enemy(grid)
    enemy.apply_effect(EffectType.SLOW, 1.0)
    assert enemy.effect_color() != color_for_type(EnemyType.OGRE)
    enemy.update_effects(1.0)
    assert enemy.effect.effect_type is EffectType.NONE
    assert enemy.color == color_for_type(EnemyType.OGRE)


def test_bleed_deals_periodic_damage(grid):
    enemy = make_enemy(grid, health=100.0)
    enemy.apply_effect(EffectType.BLEED, 10.0)
    enemy.update_effects(1.0)
    assert enemy.health == 100.0
    enemy.update_effects(1.0)
    assert enemy.health == pytest.approx(100.0 - enemy_module.BLEED_DAMAGE)


def test_moves_along_path_after_step_time(grid):
    enemy = make_enemy(grid, speed=1.0, path=[(1, 5), (2, 5)])
    enemy.update_movement(0.5)
    assert (enemy.grid_x, enemy.grid_y) == (0, 5)
    enemy.update_movement(0.5)
    assert (enemy.grid_x, enemy.grid_y) == (1, 5)
    assert enemy.steps_taken == 1
    assert enemy.current_path == [(2, 5)]
    assert grid.get_cell(0, 5) is CellType.EMPTY
    assert grid.get_cell(1, 5) is CellType.ENEMY


def test_reaching_exit_ends_game(grid):
    grid.set_cell(1, 5, CellType.EXIT_POINT)
    enemy = make_enemy(grid, path=[(1, 5)])
    enemy.update_movement(1.0)
    assert enemy.reached_exit
    assert not enemy.is_alive()
    assert (enemy.grid_x, enemy.grid_y) == (0, 5)


def test_blocked_path_asks_for_new_route(grid):
    grid.set_cell(1, 5, CellType.TOWER)
    calls = []

    def finder(start):
        calls.append(start)
        return [(0, 6)]

    enemy = make_enemy(grid, path=[(1, 5)], path_finder=finder)
    enemy.update_movement(1.0)
    assert calls == [(0, 5)]
    assert enemy.current_path == [(0, 6)]
    assert (enemy.grid_x, enemy.grid_y) == (0, 5)


def test_blocked_path_without_finder_clears_route(grid):
    grid.set_cell(1, 5, CellType.OBSTACLE)
    enemy = make_enemy(grid, path=[(1, 5)])
    enemy.update_movement(1.0)
    assert enemy.current_path == []


def test_emergency_move_goes_down_without_counting_steps(grid):
    enemy = make_enemy(grid)
    enemy.update_movement(1.0)
    assert (enemy.grid_x, enemy.grid_y) == (0, 6)
    assert enemy.steps_taken == 0


def test_bounty_matches_type_and_grows(grid):
    enemy = make_enemy(grid, enemy_type=EnemyType.MERCENARY)
    assert enemy.bounty == bounty_for_type(EnemyType.MERCENARY)
    bounties = [bounty_for_type(t) for t in EnemyType]
    assert bounties == sorted(bounties)
    assert len(set(bounties)) == len(bounties)


def test_set_genome_replaces_stats(grid):
    enemy = make_enemy(grid)
    genome = EnemyGenome(EnemyType.DARK_ELF, Attributes(55.0, 0.9, 0.1, 0.1))
    enemy.set_genome(genome)
    assert enemy.enemy_type is EnemyType.DARK_ELF
    assert enemy.health == 55.0
    assert enemy.speed == 0.9
    assert enemy.genome is genome


def test_damage_flash_then_restores_color(grid):
    enemy = make_enemy(grid, speed=10.0)
    enemy.take_damage(1.0, "archer")
    enemy.update(0.0)
    assert enemy.color == enemy_module.DAMAGE_FLASH_COLOR
    enemy.update(0.5)
    assert enemy.color == enemy.effect_color()