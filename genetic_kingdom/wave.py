"""Waves: spawning a generation of enemies and breeding the next one when it is wiped out."""

from __future__ import annotations

import dataclasses
import logging
import random
from dataclasses import dataclass
from typing import Sequence

from .enemy import Enemy, PathFinder
from .genetics import DeathRecord, GeneticManager
from .genome import EnemyGenome, EnemyType
from .grid import CellType, GridSystem, Point

logger = logging.getLogger(__name__)

SPAWN_POINTS_PER_WAVE = 33
INITIAL_PER_TYPE = 2
EXTRA_POPULATION = 20


@dataclass
class WaveConfig:
    """Settings for a wave."""

    total_waves: int = 5
    wave_duration: float = 60.0
    spawn_interval: float = 5.5
    max_spawn_points: int = 100
    max_enemies: int = 200


class Wave:
    """One wave of enemies drawn from the genetic manager's current generation."""

    def __init__(
        self,
        wave_number: int,
        spawn_points: Sequence[Point],
        config: WaveConfig | None,
        grid: GridSystem,
        genetic_manager: GeneticManager,
        rng: random.Random | None = None,
        path_finder: PathFinder | None = None,
    ) -> None:
        self.wave_number = wave_number
        self.spawn_points: list[Point] = list(spawn_points)
        self.config = dataclasses.replace(config) if config is not None else WaveConfig()
        self.grid = grid
        self.genetic_manager = genetic_manager
        self.rng = rng or random.Random()
        self.path_finder = path_finder

        self.death_records: list[DeathRecord] = []
        self.time_elapsed = 0.0
        self.enemies_spawned = 0
        self.enemies_dead = 0
        self.total_enemies = 0
        self.completed = False
        self._used_genomes: set[int] = set()

        self.active_spawn_count = min(
            wave_number * SPAWN_POINTS_PER_WAVE,
            min(self.config.max_spawn_points, len(self.spawn_points)),
        )
        self.active_spawn_points: list[Point] = self.spawn_points[: self.active_spawn_count]
        self.spawn_timer = self.config.spawn_interval

        if self.wave_number == 1:
            self.generate_initial_enemies()

        logger.info(
            "wave %d: max enemies %d, spawn every %ss, %d spawn points, %d genomes",
            self.wave_number,
            self.config.max_enemies,
            self.config.spawn_interval,
            self.active_spawn_count,
            len(self.genetic_manager.current_genomes),
        )

    def __repr__(self) -> str:
        return (
            f"Wave(number={self.wave_number}, spawned={self.enemies_spawned}, "
            f"dead={self.enemies_dead}, completed={self.completed})"
        )

    @property
    def max_enemies(self) -> int:
        """The most enemies this wave spawns."""
        return self.config.max_enemies

    @property
    def enemy_data(self) -> list[DeathRecord]:
        """A copy of the records of enemies that died in this wave."""
        return list(self.death_records)

    def update(self, delta_time: float, enemies: list[Enemy]) -> None:
        """Spawn due enemies into the list and, once all have died, breed the next generation."""
        self.time_elapsed += delta_time

        if self.enemies_spawned <= self.config.max_enemies:
            self.spawn_timer += delta_time
            genomes = self.genomes_for_next_spawn()
            if self.spawn_points:
                for index, genome in enumerate(genomes):
                    point = self.spawn_points[index % len(self.spawn_points)]
                    self._spawn_enemy(genome, enemies, point)

        if (
            self.wave_number < self.config.total_waves
            and self.enemies_dead == self.config.max_enemies
        ):
            self.genetic_manager.evaluate_generation(self.death_records)
            EnemyGenome.reset_mutation_count()
            required_population = EXTRA_POPULATION + self.config.max_enemies
            self.genetic_manager.create_next_generation(required_population)
            for enemy in enemies:
                enemy.remove()
            enemies.clear()
            self.completed = True

    def generate_initial_enemies(self) -> None:
        """Create the first population when the manager holds none."""
        manager = self.genetic_manager
        if manager.current_genomes:
            logger.info(
                "existing population of %d genomes kept", len(manager.current_genomes)
            )
            return
        logger.info("generating initial population of %d enemies", self.config.max_enemies)
        for enemy_type in EnemyType:
            for _ in range(INITIAL_PER_TYPE):
                manager.generate_enemy_genome(enemy_type)
        base = INITIAL_PER_TYPE * len(EnemyType)
        for _ in range(base, self.config.max_enemies):
            manager.generate_enemy_genome(EnemyType(self.rng.randrange(len(EnemyType))))

    def genomes_for_next_spawn(self) -> list[EnemyGenome]:
        """Unused genomes to spawn now, when the spawn timer has run out."""
        if not (
            self.enemies_spawned < self.config.max_enemies
            and self.spawn_timer >= self.config.spawn_interval
        ):
            return []
        self.spawn_timer = 0.0
        to_spawn = min(self.active_spawn_count, self.config.max_enemies - self.enemies_spawned)
        available = len(self.genetic_manager.current_genomes) - len(self._used_genomes)
        to_spawn = min(to_spawn, available)
        if to_spawn <= 0:
            return []
        genomes = self._unused_genomes(to_spawn)
        self.enemies_spawned += to_spawn
        return genomes

    def _unused_genomes(self, count: int) -> list[EnemyGenome]:
        if count <= 0:
            return []
        available = [
            genome
            for genome in self.genetic_manager.current_genomes
            if genome.genome_id not in self._used_genomes
        ]
        self.rng.shuffle(available)
        chosen = available[:count]
        self._used_genomes.update(genome.genome_id for genome in chosen)
        return chosen

    def _spawn_enemy(self, genome: EnemyGenome, enemies: list[Enemy], point: Point) -> None:
        x, y = point
        if self.grid.get_cell(x, y) is not CellType.EMPTY:
            return
        path = self.grid.precomputed_paths.get(point)
        if path is None:
            return
        enemies.append(Enemy(genome, x, y, self.grid, path, self.path_finder))
        logger.debug(
            "spawning enemy id:%d type:%d at (%d,%d) %s",
            genome.genome_id,
            int(genome.enemy_type),
            x,
            y,
            genome.attributes,
        )

    def enemy_dead(self, genome: EnemyGenome, steps: float) -> None:
        """Count a death and remember how far the enemy got."""
        self.enemies_dead += 1
        logger.debug("enemy %d died, fitness %s", genome.genome_id, genome.fitness)
        self.death_records.append(DeathRecord(genome, steps))

    def add_enemy_data(self, genome: EnemyGenome, steps: int) -> None:
        """Record how far an enemy got without counting it as a death."""
        self.death_records.append(DeathRecord(genome, float(steps)))

    def is_completed(self) -> bool:
        """Whether the next generation was bred and every spawned enemy has died."""
        return self.completed and self.enemies_dead == self.enemies_spawned