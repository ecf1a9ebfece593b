"""Enemies: genome-driven walkers that follow a path towards the castle exit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable

from .entity import Color, Entity
from .genome import EnemyGenome, EnemyType
from .grid import CellType, GridSystem, Point

logger = logging.getLogger(__name__)

PathFinder = Callable[[Point], "list[Point]"]

DAMAGE_FLASH_COLOR: Color = (255, 0, 0, 255)
DAMAGE_FLASH_DURATION = 0.3
BLEED_INTERVAL = 2.0
BLEED_DAMAGE = 10.0
SLOW_FACTOR = 1.5
WEAKEN_FLOOR = 1.0


class EffectType(IntEnum):
    """Status effects a tower can put on an enemy."""

    NONE = 0
    SLOW = 1
    WEAKEN = 2
    BLEED = 3


@dataclass(frozen=True)
class Resistances:
    """Damage multipliers per kind of tower."""

    arrows: float
    magic: float
    artillery: float


@dataclass
class ActiveEffect:
    """The status effect currently on an enemy."""

    effect_type: EffectType = EffectType.NONE
    duration: float = 0.0
    remaining_time: float = 0.0
    timer: float = 0.0


_TYPE_COLORS: dict[EnemyType, Color] = {
    EnemyType.OGRE: (128, 0, 128, 100),
    EnemyType.DARK_ELF: (0, 255, 255, 100),
    EnemyType.HARPY: (255, 215, 0, 100),
    EnemyType.MERCENARY: (112, 128, 144, 100),
}

_DEFAULT_HEALTH: dict[EnemyType, float] = {
    EnemyType.OGRE: 120.0,
    EnemyType.DARK_ELF: 70.0,
    EnemyType.HARPY: 90.0,
    EnemyType.MERCENARY: 150.0,
}

_DEFAULT_SPEED: dict[EnemyType, float] = {
    EnemyType.OGRE: 1.0,
    EnemyType.DARK_ELF: 1.8,
    EnemyType.HARPY: 1.5,
    EnemyType.MERCENARY: 1.2,
}

_DEFAULT_RESISTANCES: dict[EnemyType, Resistances] = {
    EnemyType.OGRE: Resistances(0.5, 1.5, 1.5),
    EnemyType.DARK_ELF: Resistances(1.5, 0.5, 1.5),
    EnemyType.HARPY: Resistances(1.0, 1.0, 0.0),
    EnemyType.MERCENARY: Resistances(0.5, 1.5, 0.5),
}

_BOUNTIES: dict[EnemyType, int] = {
    EnemyType.OGRE: 20,
    EnemyType.DARK_ELF: 30,
    EnemyType.HARPY: 40,
    EnemyType.MERCENARY: 50,
}

_EFFECT_COLORS: dict[EffectType, Color] = {
    EffectType.SLOW: (100, 100, 255, 150),
    EffectType.WEAKEN: (180, 130, 255, 150),
    EffectType.BLEED: (200, 0, 0, 150),
}


def color_for_type(enemy_type: EnemyType) -> Color:
    """The base colour of an enemy type."""
    return _TYPE_COLORS[EnemyType(enemy_type)]


def default_health(enemy_type: EnemyType) -> float:
    """The nominal health of an enemy type."""
    return _DEFAULT_HEALTH[EnemyType(enemy_type)]


def default_speed(enemy_type: EnemyType) -> float:
    """The nominal seconds-per-step of an enemy type."""
    return _DEFAULT_SPEED[EnemyType(enemy_type)]


def default_resistances(enemy_type: EnemyType) -> Resistances:
    """The damage multipliers of an enemy type."""
    return _DEFAULT_RESISTANCES[EnemyType(enemy_type)]


def bounty_for_type(enemy_type: EnemyType) -> int:
    """Coins earned for killing an enemy of the type."""
    return _BOUNTIES[EnemyType(enemy_type)]


class Enemy(Entity):
    """An enemy on the grid, built from a genome and walking a path cell by cell."""

    def __init__(
        self,
        genome: EnemyGenome,
        grid_x: int,
        grid_y: int,
        grid: GridSystem,
        path: list[Point],
        path_finder: PathFinder | None = None,
    ) -> None:
        super().__init__(grid_x, grid_y, color_for_type(genome.enemy_type), grid)
        self.genome = genome
        self.enemy_type = genome.enemy_type
        self.health = genome.attributes.health
        self.max_health = genome.attributes.health
        self.speed = genome.attributes.speed
        self.resistances = default_resistances(genome.enemy_type)
        self.current_path: list[Point] = list(path)
        self.path_finder = path_finder
        self.reached_exit = False
        self.steps_taken = 0
        self.killer = ""
        self.effect = ActiveEffect()
        self._move_timer = 0.0
        self._damaged = False
        self._damage_elapsed = 0.0
        grid.register_enemy(self, grid_x, grid_y)

    def __repr__(self) -> str:
        return (
            f"Enemy(type={self.enemy_type.name}, at=({self.grid_x}, {self.grid_y}), "
            f"health={self.health})"
        )

    @property
    def bounty(self) -> int:
        """Coins earned for killing this enemy."""
        return bounty_for_type(self.enemy_type)

    def is_alive(self) -> bool:
        """Whether the enemy still has health left."""
        return self.health > 0

    def remove(self) -> None:
        """Take the enemy off the grid."""
        self.grid.unregister_enemy(self.grid_x, self.grid_y)

    def update(self, delta_time: float) -> None:
        """Advance effects, movement and the damage flash."""
        self.update_effects(delta_time)
        self.update_movement(delta_time)

        if self._damaged:
            self._damage_elapsed += delta_time
            elapsed = self._damage_elapsed
            if elapsed < DAMAGE_FLASH_DURATION:
                show_red = int(elapsed * 10) % 2 == 0
                self.color = DAMAGE_FLASH_COLOR if show_red else self.effect_color()
            else:
                self._damaged = False
                self.color = self.effect_color()

    def take_damage(self, amount: float, damage_type: str) -> None:
        """Lose health scaled by the resistance to the damage type."""
        res = self.current_resistances()
        multiplier = {
            "archer": res.arrows,
            "mage": res.magic,
            "artillery": res.artillery,
        }.get(damage_type, 1.0)

        self.health -= amount * max(0.0, multiplier)
        if self.health <= 0:
            self.killer = "archer" if damage_type == "Bleed" else damage_type
            self.health = 0.0

        self._damaged = True
        self._damage_elapsed = 0.0

    def _move_to(self, x: int, y: int) -> None:
        self.grid.unregister_enemy(self.grid_x, self.grid_y)
        self.grid_x, self.grid_y = x, y
        self.grid.register_enemy(self, x, y)

    def update_movement(self, delta_time: float) -> None:
        """Take the next step of the path once enough time has passed."""
        self._move_timer += delta_time
        if self._move_timer < self.current_speed():
            return

        if self.current_path:
            next_x, next_y = self.current_path[0]
            cell = self.grid.get_cell(next_x, next_y)
            if cell in (CellType.EMPTY, CellType.ENEMY):
                self._move_to(next_x, next_y)
                self.steps_taken += 1
                self.current_path.pop(0)
            elif cell is CellType.EXIT_POINT:
                logger.info("enemy reached the exit point")
                self.reached_exit = True
                self.health = 0.0
                return
            else:
                self.current_path = []
                if self.path_finder is not None:
                    self.current_path = list(self.path_finder((self.grid_x, self.grid_y)))
        else:
            new_x, new_y = self.grid_x, self.grid_y + 1
            if self.grid.get_cell(new_x, new_y) is CellType.EMPTY:
                self._move_to(new_x, new_y)

        self._move_timer = 0.0

    def apply_effect(self, effect_type: EffectType, duration: float) -> None:
        """Replace the current status effect."""
        self.effect = ActiveEffect(EffectType(effect_type), duration, duration, 0.0)
        self.color = self.effect_color()

    def update_effects(self, delta_time: float) -> None:
        """Run the status effect down, bleeding periodically, and clear it when it ends."""
        if self.effect.effect_type is EffectType.NONE:
            return
        self.effect.remaining_time -= delta_time
        self.effect.timer += delta_time

        if self.effect.effect_type is EffectType.BLEED and self.effect.timer >= BLEED_INTERVAL:
            self.effect.timer = 0.0
            self.take_damage(BLEED_DAMAGE, "Bleed")

        if self.effect.remaining_time <= 0:
            self.clear_effect()

    def clear_effect(self) -> None:
        """Remove the status effect and restore the base colour."""
        self.effect.effect_type = EffectType.NONE
        self.color = color_for_type(self.enemy_type)

    def current_speed(self) -> float:
        """Seconds per step, longer while slowed."""
        if self.effect.effect_type is EffectType.SLOW and self.effect.remaining_time > 0:
            return self.speed * SLOW_FACTOR
        return self.speed

    def current_resistances(self) -> Resistances:
        """Resistances, raised to at least the floor while weakened."""
        res = self.resistances
        if self.effect.effect_type is EffectType.WEAKEN and self.effect.remaining_time > 0:
            return replace(
                res,
                arrows=max(res.arrows, WEAKEN_FLOOR),
                magic=max(res.magic, WEAKEN_FLOOR),
                artillery=max(res.artillery, WEAKEN_FLOOR),
            )
        return res

    def set_genome(self, genome: EnemyGenome) -> None:
        """Adopt a new genome, taking its type, health and speed."""
        self.genome = genome
        self.enemy_type = genome.enemy_type
        self.health = genome.attributes.health
        self.speed = genome.attributes.speed

    def effect_color(self) -> Color:
        """The colour showing the current status effect."""
        return _EFFECT_COLORS.get(self.effect.effect_type, color_for_type(self.enemy_type))