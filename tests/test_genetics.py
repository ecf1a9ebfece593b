import random

import pytest

from genetic_kingdom.genetics import TYPE_CONFIGS, DeathRecord, GeneticManager
from genetic_kingdom.genome import EnemyGenome, EnemyType
from genetic_kingdom.stats import GameStats


@pytest.fixture(autouse=True)
def _reset_counters():
    EnemyGenome.reset_id_counter()
    EnemyGenome.reset_mutation_count()
    yield
    EnemyGenome.reset_id_counter()
    EnemyGenome.reset_mutation_count()


@pytest.fixture
def stats():
    game_stats = GameStats()
    game_stats.record_wave_start(1, 40)
    return game_stats


@pytest.fixture
def manager(stats):
    return GeneticManager(stats, rng=random.Random(1234))


def _populate(manager, per_type=3):
    for enemy_type in EnemyType:
        for _ in range(per_type):
            manager.generate_enemy_genome(enemy_type)


@pytest.mark.parametrize("enemy_type", list(EnemyType))
def test_generated_attributes_within_type_ranges(manager, enemy_type):
    for _ in range(20):
        genome = manager.generate_enemy_genome(enemy_type)
        config = TYPE_CONFIGS[enemy_type]
        attrs = genome.attributes
        assert genome.enemy_type == enemy_type
        assert config.health_min <= attrs.health <= config.health_max
        assert config.speed_min <= attrs.speed <= config.speed_max
        assert 0.0 <= attrs.armor <= config.armor_max
        assert 0.0 <= attrs.magic_resist <= config.magic_resist_max
        assert attrs.steps_taken == 0


def test_generated_genomes_join_population(manager):
    first = manager.generate_enemy_genome(EnemyType.OGRE)
    second = manager.generate_enemy_genome(EnemyType.HARPY)
    assert manager.current_genomes == [first, second]


def test_evaluate_generation_sums_steps_and_sorts(manager):
    _populate(manager, per_type=1)
    ogre, elf, harpy, merc = manager.current_genomes
    harpy.fitness = 99.0
    records = [
        DeathRecord(ogre, 5.0),
        DeathRecord(elf, 12.0),
        DeathRecord(ogre, 3.0),
    ]
    manager.evaluate_generation(records)
    assert ogre.fitness == pytest.approx(8.0)
    assert elf.fitness == pytest.approx(12.0)
    assert harpy.fitness == 0.0
    assert merc.fitness == 0.0
    assert manager.current_genomes[:2] == [elf, ogre]
    fitnesses = [g.fitness for g in manager.current_genomes]
    assert fitnesses == sorted(fitnesses, reverse=True)


def test_next_generation_reaches_required_size(manager, stats):
    _populate(manager)
    manager.evaluate_generation(
        [DeathRecord(g, float(i)) for i, g in enumerate(manager.current_genomes)]
    )
    manager.create_next_generation(30)
    assert len(manager.current_genomes) == 30
    assert EnemyGenome.total_mutations() == 0
    assert 0 <= stats.current_generation().mutations_count <= 4 * 30


def test_next_generation_keeps_elite(manager):
    _populate(manager)
    records = [DeathRecord(g, float(i + 1)) for i, g in enumerate(manager.current_genomes)]
    manager.evaluate_generation(records)
    top = manager.current_genomes[:3]
    manager.create_next_generation(30)
    kept = {(g.genome_id, g.fitness) for g in manager.current_genomes}
    for genome in top:
        assert (genome.genome_id, genome.fitness) in kept


def test_elite_copies_are_independent(manager):
    _populate(manager)
    manager.evaluate_generation(
        [DeathRecord(g, 10.0) for g in manager.current_genomes[:1]]
    )
    best = manager.current_genomes[0]
    original_health = best.attributes.health
    manager.create_next_generation(10)
    copy = next(g for g in manager.current_genomes if g.genome_id == best.genome_id)
    copy.attributes.health = -1.0
    assert best.attributes.health == original_health
    assert copy is not best


def test_next_generation_records_average_fitness(manager, stats):
    _populate(manager)
    manager.evaluate_generation(
        [DeathRecord(g, 4.0) for g in manager.current_genomes]
    )
    manager.create_next_generation(20)
    expected = sum(g.fitness for g in manager.current_genomes) / len(manager.current_genomes)
    assert stats.current_generation().average_fitness == pytest.approx(expected)


def test_children_keep_each_type_present(manager):
    _populate(manager)
    manager.create_next_generation(40)
    types = {g.enemy_type for g in manager.current_genomes}
    assert types == set(EnemyType)


def test_next_generation_from_empty_population_fails(manager):
    with pytest.raises(LookupError):
        manager.create_next_generation(5)


def test_next_generation_requires_started_wave():
    manager = GeneticManager(GameStats(), rng=random.Random(3))
    _populate(manager)
    with pytest.raises(LookupError):
        manager.create_next_generation(12)


def test_reset_generation_not_forced_keeps_population(manager):
    _populate(manager, per_type=1)
    before = list(manager.current_genomes)
    manager.reset_generation()
    assert manager.current_genomes == before
    assert manager.generate_enemy_genome(EnemyType.OGRE).genome_id == 0


def test_reset_generation_forced_promotes_pending(manager):
    _populate(manager, per_type=1)
    manager.reset_generation(force=True)
    assert manager.current_genomes == []


def test_reset_after_breeding_promotes_bred_generation(manager):
    _populate(manager)
    manager.create_next_generation(16)
    bred = list(manager.current_genomes)
    manager.reset_generation()
    assert manager.current_genomes == bred