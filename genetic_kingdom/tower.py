"""Defensive towers: attack stats, upgrades and special attacks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from operator import attrgetter

from .effects import AreaAttackEffect
from .enemy import EffectType, Enemy
from .entity import Color, Entity
from .grid import GridSystem

MAX_LEVEL = 3
ATTACKING_THRESHOLD = 0.9
ARCHER_SPECIAL_TARGETS = 3
MAGE_SPECIAL_TARGETS = 5
ARTILLERY_EXTRA_RANGE = 2
ARTILLERY_SPECIAL_MULTIPLIER = 1.2
BLEED_DURATION = 10.0
SLOW_DURATION = 10.0
WEAKEN_DURATION = 8.0


class TowerType(IntEnum):
    """The three kinds of tower."""

    ARCHER = 0
    MAGE = 1
    ARTILLERY = 2


@dataclass(frozen=True)
class _Profile:
    name: str
    cost: int
    color: Color
    range: int
    damage: float
    attack_speed: float
    special_speed: float


_PROFILES: dict[TowerType, _Profile] = {
    TowerType.ARCHER: _Profile("archer", 50, (34, 139, 34, 255), 5, 15.0, 1.1, 3.0),
    TowerType.MAGE: _Profile("mage", 75, (70, 130, 180, 255), 4, 25.0, 1.3, 3.9),
    TowerType.ARTILLERY: _Profile("artillery", 100, (183, 65, 14, 255), 3, 40.0, 1.7, 5.1),
}

_UPGRADE_COSTS = {1: 100, 2: 300, 3: 500}


@dataclass(frozen=True)
class _Upgrade:
    damage_bonus: float = 0.0
    range_bonus: int = 0
    attack_speed: float | None = None
    attack_cooldown: float | None = None


_UPGRADES: dict[TowerType, dict[int, _Upgrade]] = {
    TowerType.ARCHER: {
        1: _Upgrade(damage_bonus=10, range_bonus=1),
        2: _Upgrade(damage_bonus=5, attack_speed=0.9, attack_cooldown=2.7),
        3: _Upgrade(damage_bonus=10, attack_speed=0.7, range_bonus=1),
    },
    TowerType.MAGE: {
        1: _Upgrade(damage_bonus=10, attack_speed=1.1, range_bonus=1),
        2: _Upgrade(damage_bonus=15, attack_speed=0.9),
        3: _Upgrade(range_bonus=1, attack_cooldown=3.0),
    },
    TowerType.ARTILLERY: {
        1: _Upgrade(damage_bonus=15),
        2: _Upgrade(damage_bonus=15, range_bonus=2),
        3: _Upgrade(attack_speed=1.5, attack_cooldown=4.5),
    },
}


def tower_cost(tower_type: TowerType) -> int:
    """Coins needed to build a tower of the type."""
    return _PROFILES[TowerType(tower_type)].cost


def upgrade_cost(level: int) -> int:
    """Coins needed to upgrade a tower to the given level."""
    try:
        return _UPGRADE_COSTS[level]
    except KeyError:
        raise ValueError(f"no upgrade to level {level}") from None


def type_to_string(tower_type: TowerType) -> str:
    """The lower-case name used as a damage type."""
    return _PROFILES[TowerType(tower_type)].name


def color_for_type(tower_type: TowerType) -> Color:
    """The colour of a tower type."""
    return _PROFILES[TowerType(tower_type)].color


def default_range(tower_type: TowerType) -> int:
    """Attack range in cells."""
    return _PROFILES[TowerType(tower_type)].range


def default_damage(tower_type: TowerType) -> float:
    """Damage per regular attack."""
    return _PROFILES[TowerType(tower_type)].damage


def default_attack_speed(tower_type: TowerType) -> float:
    """Seconds between regular attacks."""
    return _PROFILES[TowerType(tower_type)].attack_speed


def default_special_speed(tower_type: TowerType) -> float:
    """Seconds between special attacks."""
    return _PROFILES[TowerType(tower_type)].special_speed


class Tower(Entity):
    """A tower that attacks enemies in range and periodically uses a special attack."""

    def __init__(self, tower_type: TowerType, grid_x: int, grid_y: int, grid: GridSystem) -> None:
        tower_type = TowerType(tower_type)
        super().__init__(grid_x, grid_y, color_for_type(tower_type), grid)
        self.tower_type = tower_type
        self.attack_range = default_range(tower_type)
        self.damage = default_damage(tower_type)
        self.attack_speed = default_attack_speed(tower_type)
        self.attack_cooldown = default_special_speed(tower_type)
        self.attack_timer = 0.0
        self.special_timer = 0.0
        self.level = 0
        self.attacked_this_frame = False
        self.special_effect: AreaAttackEffect | None = None

    def __repr__(self) -> str:
        return (
            f"Tower(type={self.tower_type.name}, at=({self.grid_x}, {self.grid_y}), "
            f"level={self.level})"
        )

    @property
    def damage_type(self) -> str:
        """The damage type dealt by this tower."""
        return type_to_string(self.tower_type)

    def is_attacking(self) -> bool:
        """Whether a regular attack is about to fire."""
        return self.attack_timer > self.attack_speed * ATTACKING_THRESHOLD

    def update(self, delta_time: float) -> None:
        """Advance timers and the area effect, firing attacks when they are due."""
        self.attack_timer += delta_time
        self.special_timer += delta_time

        if self.special_effect is not None:
            self.special_effect.update(delta_time)
            if self.special_effect.is_complete():
                self.special_effect = None

        self.attacked_this_frame = False
        if self.attack_timer >= self.attack_speed:
            self.attacked_this_frame = True
            self.attack_enemy()
            self.attack_timer = 0.0
        if self.special_timer >= self.attack_cooldown:
            self.special_attack()
            self.special_timer = 0.0

    def _enemies_in_range(self, radius: int | None = None) -> list[Enemy]:
        return self.grid.enemies_in_radius(
            self.grid_x, self.grid_y, self.attack_range if radius is None else radius
        )

    def attack_enemy(self) -> None:
        """Hit the enemy in range with the least health."""
        enemies = self._enemies_in_range()
        if enemies:
            weakest = min(enemies, key=attrgetter("health"))
            weakest.take_damage(self.damage, self.damage_type)

    def upgrade(self) -> None:
        """Raise the level by one, up to the maximum, improving the tower's stats."""
        if self.level >= MAX_LEVEL:
            return
        self.level += 1
        change = _UPGRADES[self.tower_type][self.level]
        self.damage += change.damage_bonus
        self.attack_range += change.range_bonus
        if change.attack_speed is not None:
            self.attack_speed = change.attack_speed
        if change.attack_cooldown is not None:
            self.attack_cooldown = change.attack_cooldown

    def special_attack(self) -> None:
        """Fire the special attack of this tower's type."""
        {
            TowerType.ARCHER: self._special_archer_attack,
            TowerType.MAGE: self._special_mage_attack,
            TowerType.ARTILLERY: self._special_artillery_attack,
        }[self.tower_type]()

    def _special_archer_attack(self) -> None:
        strongest = sorted(self._enemies_in_range(), key=attrgetter("health"), reverse=True)
        for enemy in strongest[:ARCHER_SPECIAL_TARGETS]:
            enemy.apply_effect(EffectType.BLEED, BLEED_DURATION)

    def _special_mage_attack(self) -> None:
        strongest = sorted(self._enemies_in_range(), key=attrgetter("health"), reverse=True)
        for enemy in strongest[:MAGE_SPECIAL_TARGETS]:
            enemy.take_damage(self.damage, self.damage_type)
            enemy.apply_effect(EffectType.SLOW, SLOW_DURATION)

    def _special_artillery_attack(self) -> None:
        extended_range = self.attack_range + ARTILLERY_EXTRA_RANGE
        enemies = self._enemies_in_range(extended_range)
        center = self.grid.grid_to_world(self.grid_x, self.grid_y)
        self.special_effect = AreaAttackEffect(center, extended_range * self.grid.cell_size)
        for enemy in enemies:
            enemy.take_damage(self.damage * ARTILLERY_SPECIAL_MULTIPLIER, self.damage_type)
            enemy.apply_effect(EffectType.WEAKEN, WEAKEN_DURATION)