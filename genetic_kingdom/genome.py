"""Enemy genomes: genetic attributes, uniform crossover and mutation."""

from __future__ import annotations

import copy
import dataclasses
import logging
import random
from dataclasses import dataclass
from enum import IntEnum

logger = logging.getLogger(__name__)

_default_rng = random.Random()


class EnemyType(IntEnum):
    """The four kinds of enemy."""

    OGRE = 0
    DARK_ELF = 1
    HARPY = 2
    MERCENARY = 3


@dataclass
class Attributes:
    """Genetic attributes carried by a genome."""

    health: float
    speed: float
    armor: float
    magic_resist: float
    steps_taken: int = 0


_MUTABLE_ATTRIBUTES = (
    ("health", "Health"),
    ("speed", "Speed"),
    ("armor", "Armor"),
    ("magic_resist", "MR"),
)


class EnemyGenome:
    """A genome with a type, attributes, a fitness score and a unique id."""

    _next_id = 0
    _total_mutations = 0
    _ID_LIMIT = 1_000_000
    _MIN_ATTRIBUTE = 0.1
    _MUTATION_SIGMA = 0.2

    def __init__(self, enemy_type: EnemyType, attributes: Attributes) -> None:
        self.enemy_type = EnemyType(enemy_type)
        self.attributes = attributes
        self.fitness = 0.0
        self.genome_id = EnemyGenome._next_id
        EnemyGenome._next_id += 1
        if EnemyGenome._next_id > EnemyGenome._ID_LIMIT:
            EnemyGenome._next_id = 0

    def __repr__(self) -> str:
        return (
            f"EnemyGenome(id={self.genome_id}, type={self.enemy_type.name}, "
            f"fitness={self.fitness}, attributes={self.attributes})"
        )

    @classmethod
    def crossover_uniform(
        cls,
        parent1: EnemyGenome,
        parent2: EnemyGenome,
        rng: random.Random | None = None,
    ) -> EnemyGenome:
        """Build a child taking each attribute from either parent with equal odds."""
        if parent1.enemy_type != parent2.enemy_type:
            raise ValueError("cannot cross genomes of different enemy types")
        rng = rng or _default_rng

        def pick(name: str) -> float:
            source = parent1 if rng.random() < 0.5 else parent2
            return getattr(source.attributes, name)

        child_attributes = Attributes(
            health=pick("health"),
            speed=pick("speed"),
            armor=pick("armor"),
            magic_resist=pick("magic_resist"),
            steps_taken=0,
        )
        logger.debug(
            "[Cross] new id:%d parent1:%d %s parent2:%d %s child:%s",
            EnemyGenome._next_id,
            parent1.genome_id,
            parent1.attributes,
            parent2.genome_id,
            parent2.attributes,
            child_attributes,
        )
        return cls(parent1.enemy_type, child_attributes)

    def mutate(self, mutation_chance: float, rng: random.Random | None = None) -> None:
        """Scale each attribute by a normal factor with the given chance, never below 0.1."""
        rng = rng or _default_rng
        for field_name, label in _MUTABLE_ATTRIBUTES:
            if rng.random() < mutation_chance:
                EnemyGenome._total_mutations += 1
                original = getattr(self.attributes, field_name)
                mutation = rng.gauss(0.0, self._MUTATION_SIGMA)
                mutated = max(self._MIN_ATTRIBUTE, original * (1.0 + mutation))
                setattr(self.attributes, field_name, mutated)
                logger.debug(
                    "[Mut] ID:%d %s: %.2f -> %.2f (%s%.2f%%)",
                    self.genome_id,
                    label,
                    original,
                    mutated,
                    "+" if mutation > 0 else "",
                    abs(mutation) * 100,
                )

    def clone(self) -> EnemyGenome:
        """Return a copy keeping the id and fitness, with its own attributes."""
        duplicate = copy.copy(self)
        duplicate.attributes = dataclasses.replace(self.attributes)
        return duplicate

    @classmethod
    def reset_id_counter(cls) -> None:
        """Restart id numbering at zero."""
        EnemyGenome._next_id = 0

    @classmethod
    def total_mutations(cls) -> int:
        """Number of attribute mutations since the last reset."""
        return EnemyGenome._total_mutations

    @classmethod
    def reset_mutation_count(cls) -> None:
        """Set the mutation counter back to zero."""
        EnemyGenome._total_mutations = 0