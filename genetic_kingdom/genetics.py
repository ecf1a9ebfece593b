"""Genetic management of enemy populations: evaluation, selection and breeding."""

from __future__ import annotations

import logging
import math
import random
from collections import Counter
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from .genome import Attributes, EnemyGenome, EnemyType
from .stats import GameStats

logger = logging.getLogger(__name__)

MUTATION_RATE = 0.05
SELECTION_RATE = 0.3
ELITE_FRACTION = 0.1
ELITE_PREFERENCE = 0.8
TOURNAMENT_SIZE = 3


class _TypeConfig(NamedTuple):
    health_min: float
    health_max: float
    speed_min: float
    speed_max: float
    armor_max: float
    magic_resist_max: float


TYPE_CONFIGS: dict[EnemyType, _TypeConfig] = {
    EnemyType.OGRE: _TypeConfig(100.0, 200.0, 1.5, 2.5, 0.5, 0.3),
    EnemyType.DARK_ELF: _TypeConfig(60.0, 120.0, 0.8, 1.5, 0.3, 0.5),
    EnemyType.HARPY: _TypeConfig(80.0, 150.0, 0.5, 1.2, 0.2, 0.2),
    EnemyType.MERCENARY: _TypeConfig(120.0, 180.0, 1.0, 2.0, 0.6, 0.4),
}


@dataclass
class DeathRecord:
    """A genome together with the steps its enemy took before dying."""

    genome: EnemyGenome
    steps: float


class GeneticManager:
    """Holds the current generation of genomes and breeds the next one."""

    def __init__(self, game_stats: GameStats, rng: random.Random | None = None) -> None:
        self.game_stats = game_stats
        self.rng = rng or random.Random()
        self.current_genomes: list[EnemyGenome] = []
        self._next_genomes: list[EnemyGenome] = []

    def generate_enemy_genome(self, enemy_type: EnemyType) -> EnemyGenome:
        """Create a genome with random attributes for the type and add it to the population."""
        genome = EnemyGenome(enemy_type, self._random_attributes(EnemyType(enemy_type)))
        self.current_genomes.append(genome)
        logger.debug(
            "generated genome id:%d type:%d total:%d",
            genome.genome_id,
            int(genome.enemy_type),
            len(self.current_genomes),
        )
        return genome

    def _random_attributes(self, enemy_type: EnemyType) -> Attributes:
        config = TYPE_CONFIGS[enemy_type]
        return Attributes(
            health=self.rng.uniform(config.health_min, config.health_max),
            speed=self.rng.uniform(config.speed_min, config.speed_max),
            armor=self.rng.uniform(0.0, config.armor_max),
            magic_resist=self.rng.uniform(0.0, config.magic_resist_max),
            steps_taken=0,
        )

    def _sort_by_fitness(self) -> None:
        self.current_genomes.sort(key=lambda genome: genome.fitness, reverse=True)

    def evaluate_generation(self, enemies: Sequence[DeathRecord]) -> None:
        """Set fitness from the steps each dead enemy took and rank the population."""
        for genome in self.current_genomes:
            genome.fitness = 0.0
        for record in enemies:
            record.genome.fitness += record.steps
        self._sort_by_fitness()
        for genome in self.current_genomes:
            logger.debug(
                "ID:%d T:%d F:%s %s",
                genome.genome_id,
                int(genome.enemy_type),
                genome.fitness,
                genome.attributes,
            )

    def _select_parent(
        self,
        genomes: Sequence[EnemyGenome],
        elite_count: int,
        required_type: EnemyType,
        excluded_id: int = -1,
    ) -> EnemyGenome:
        """Pick a parent, preferring the required type and the elite."""
        candidates = [
            g for g in genomes
            if g.enemy_type == required_type and g.genome_id != excluded_id
        ]
        if not candidates:
            candidates = [g for g in genomes if g.genome_id != excluded_id]
        if not candidates:
            candidates = list(genomes)
        if not candidates:
            raise LookupError("no genomes available for parent selection")

        elite_ids = {g.genome_id for g in genomes[:elite_count]}
        elite = [g for g in candidates if g.genome_id in elite_ids]
        non_elite = [g for g in candidates if g.genome_id not in elite_ids]

        if elite and self.rng.random() < ELITE_PREFERENCE:
            return self.rng.choice(elite)
        if non_elite:
            return self.rng.choice(non_elite)
        return self.rng.choice(candidates)

    def _select_parent_from_all_types(
        self, genomes: Sequence[EnemyGenome], excluded_id: int = -1
    ) -> EnemyGenome:
        """Tournament selection over every type, avoiding one id where possible."""
        candidates = [g for g in genomes if g.genome_id != excluded_id] or list(genomes)
        if not candidates:
            raise LookupError("no genomes available for selection")
        size = min(TOURNAMENT_SIZE, len(candidates))
        tournament = [self.rng.choice(candidates) for _ in range(size)]
        return max(tournament, key=lambda genome: genome.fitness)

    def _choose_parents(
        self, by_type: dict[EnemyType, list[EnemyGenome]], target: EnemyType
    ) -> tuple[EnemyGenome, EnemyGenome, bool]:
        same_type = by_type.get(target, [])
        if len(same_type) >= 2:
            first, second = self.rng.sample(range(len(same_type)), 2)
            return same_type[first], same_type[second], True
        if same_type:
            parent1 = same_type[0]
        else:
            parent1 = self._select_parent_from_all_types(self.current_genomes)
        parent2 = self._select_parent_from_all_types(self.current_genomes, parent1.genome_id)
        return parent1, parent2, False

    def create_next_generation(self, required_population: int) -> None:
        """Replace the population with the elite plus mutated offspring, balanced by type."""
        self._next_genomes = []
        self._sort_by_fitness()

        elite_count = min(int(required_population * ELITE_FRACTION), len(self.current_genomes))
        for genome in self.current_genomes[:elite_count]:
            elite = genome.clone()
            self._next_genomes.append(elite)
            logger.debug(
                "elite kept id:%d type:%d fitness:%s",
                elite.genome_id,
                int(elite.enemy_type),
                elite.fitness,
            )

        by_type: dict[EnemyType, list[EnemyGenome]] = {}
        for genome in self.current_genomes:
            by_type.setdefault(genome.enemy_type, []).append(genome)

        while len(self._next_genomes) < required_population:
            target = EnemyType(len(self._next_genomes) % len(EnemyType))
            parent1, parent2, preferred = self._choose_parents(by_type, target)
            child = EnemyGenome.crossover_uniform(parent1, parent2, self.rng)
            child.mutate(MUTATION_RATE, self.rng)
            self._next_genomes.append(child)
            logger.debug(
                "child id:%d type:%d parents:%d,%d%s",
                child.genome_id,
                int(target),
                parent1.genome_id,
                parent2.genome_id,
                " (same type)" if preferred else "",
            )

        self.rng.shuffle(self._next_genomes)
        self.current_genomes = list(self._next_genomes)

        self.game_stats.record_mutations(EnemyGenome.total_mutations())
        EnemyGenome.reset_mutation_count()
        self._validate_generation()

    def _validate_generation(self) -> None:
        seen: set[int] = set()
        type_counts: Counter[EnemyType] = Counter()
        total_fitness = 0.0
        for genome in self.current_genomes:
            if genome.genome_id in seen:
                logger.error("duplicate genome id %d", genome.genome_id)
            seen.add(genome.genome_id)
            type_counts[genome.enemy_type] += 1
            total_fitness += genome.fitness
            if genome.attributes.health <= 0 or genome.attributes.speed <= 0:
                logger.warning("genome %d has invalid attributes", genome.genome_id)

        population = len(self.current_genomes)
        average = total_fitness / population if population else math.nan
        for enemy_type in EnemyType:
            share = 100.0 * type_counts[enemy_type] / population if population else math.nan
            logger.debug("type %d: %d (%.2f%%)", int(enemy_type), type_counts[enemy_type], share)
        logger.debug("average fitness %s over %d genomes", average, population)
        self.game_stats.record_fitness(average)

    def reset_generation(self, force: bool = False) -> None:
        """Promote the pending generation (always when forced) and restart id numbering."""
        if force or self._next_genomes:
            self.current_genomes = self._next_genomes
            self._next_genomes = []
        EnemyGenome.reset_id_counter()