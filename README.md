# genetic_kingdom

The simulation core of a grid-based tower-defence game. Each wave of enemies
is bred from the wave before it. An enemy that walks further before it dies
gets a higher fitness. The next generation is built from the fittest genomes
by uniform crossover and mutation.

The package models the rules of the game: the map, towers, enemies, status
effects, coins, waves, statistics and the genetic algorithm. It has no
dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `genetic_kingdom.genome`
  - `EnemyType`: `OGRE`, `DARK_ELF`, `HARPY` or `MERCENARY`.
  - `Attributes`: `health`, `speed`, `armor`, `magic_resist` and
    `steps_taken`.
  - `EnemyGenome`:
    - `crossover_uniform(parent1, parent2, rng)` takes each attribute from
      one parent or the other with equal odds. It raises `ValueError` when
      the two parents have different types.
    - `mutate(mutation_chance, rng)` scales attributes by a normal factor
      (sigma 0.2) and never lets one fall below 0.1.
    - `clone()` makes a copy that keeps the id and the fitness.
    - Class-level counters: `reset_id_counter()`, `total_mutations()` and
      `reset_mutation_count()`.
- `genetic_kingdom.genetics`: `GeneticManager` holds `current_genomes`.
  - `generate_enemy_genome(enemy_type)` adds a genome whose attributes are
    drawn at random from the ranges of its type.
  - `evaluate_generation(records)` sets each genome's fitness to the sum of
    the steps in its `DeathRecord`s, then sorts the population by fitness.
  - `create_next_generation(required_population)`:
    - keeps the top 10% as an elite;
    - fills the rest with mutated children, cycling through the four types
      in turn;
    - shuffles the result;
    - records the mutation count and the average fitness in the
      `GameStats` it was given.
  - `reset_generation(force)` moves the pending generation into place and
    restarts id numbering.
- `genetic_kingdom.grid`: `GridSystem(width, height, cell_size)` builds the
  map.
  - It adds two obstacle clusters that have corridors cut through them.
  - `spawn_points` are columns 0 and 1, rows 0 to 49.
  - The castle gate is at (49, 24), (49, 25) and (49, 26), marked
    `CellType.EXIT_POINT`.
  - Cell methods: `get_cell`, `set_cell`, `is_cell_walkable`.
  - Enemy methods: `register_enemy`, `unregister_enemy`, and
    `enemies_in_radius`, which searches a square around a cell.
  - Other methods: `unregister_tower`, and `grid_to_world` /
    `world_to_grid` to convert between cells and pixels.
  - `precomputed_paths` maps each spawn point to its path.
- `genetic_kingdom.entity`: `Entity` is the abstract base for anything
  placed on the grid. It has `update(delta_time)` and `position()`.
- `genetic_kingdom.enemy`: `Enemy` is built from a genome and a path.
  - `update_movement` moves it one cell along the path each time its speed
    interval has passed. If the next cell is blocked, it asks the optional
    `path_finder` callable for a new path.
  - `take_damage(amount, damage_type)` scales damage by the enemy's
    `Resistances`.
  - `apply_effect` applies an `EffectType`:
    - `SLOW` makes steps 1.5× longer;
    - `WEAKEN` raises every resistance to at least 1.0;
    - `BLEED` deals 10 damage every 2 s.
  - The module also has per-type lookup functions: `color_for_type`,
    `default_health`, `default_speed`, `default_resistances` and
    `bounty_for_type`.
- `genetic_kingdom.tower`: `Tower` comes in three `TowerType`s: `ARCHER`,
  `MAGE` and `ARTILLERY`.
  - `attack_enemy()` hits the enemy in range that has the least health.
  - `special_attack()` depends on the type:
    - archer: bleeds up to 3 enemies;
    - mage: damages and slows up to 5 enemies;
    - artillery: damages and weakens every enemy within an extended range,
      and starts an `AreaAttackEffect`.
  - `upgrade()` raises the level, up to 3.
  - Module functions: `tower_cost`, `upgrade_cost`, `type_to_string`,
    `color_for_type`, `default_range`, `default_damage`,
    `default_attack_speed` and `default_special_speed`.
- `genetic_kingdom.effects`: `AreaAttackEffect` (a ring that grows and
  fades) and `ProjectileEffect` (a bar moving in a straight line). Both hold
  only timing and geometry.
- `genetic_kingdom.wave`: `Wave` and `WaveConfig`.
  - In wave 1 it creates the initial population.
  - It spawns unused genomes on the active spawn points every
    `spawn_interval` seconds.
  - `enemy_dead` counts each death.
  - Once `max_enemies` have died, it breeds the next generation.
- `genetic_kingdom.economy`: `Economy` holds the player's `coins`, with
  `can_afford`, `spend` and `earn`. The starting balance is 500.
- `genetic_kingdom.stats`: `GameStats` keeps one `WaveStats` per wave:
  kills, average fitness, mutations, and tower counts by type and level.

## Examples

Breeding a generation:

```python
import random

from genetic_kingdom.genetics import DeathRecord, GeneticManager
from genetic_kingdom.genome import EnemyType
from genetic_kingdom.stats import GameStats

stats = GameStats()
stats.record_wave_start(1, 40)
manager = GeneticManager(stats)

genomes = [manager.generate_enemy_genome(t) for t in EnemyType for _ in range(3)]
manager.evaluate_generation(
    [DeathRecord(g, random.randint(0, 40)) for g in genomes]
)
manager.create_next_generation(30)
print(stats.current_generation().average_fitness)
```

A tower attacking an enemy:

```python
from genetic_kingdom.enemy import Enemy
from genetic_kingdom.genome import Attributes, EnemyGenome, EnemyType
from genetic_kingdom.grid import GridSystem
from genetic_kingdom.tower import Tower, TowerType

grid = GridSystem(50, 50, 16.0)
ogre = Enemy(EnemyGenome(EnemyType.OGRE, Attributes(120.0, 1.0, 0.0, 0.0)),
             30, 25, grid, [(31, 25)])
archer = Tower(TowerType.ARCHER, 32, 25, grid)
archer.attack_enemy()
print(ogre.health)  # 112.5: ogres take half damage from arrows
```

## What it does not do

- There is no window, no drawing and no input handling. Colours, positions
  and effect geometry are data for a front end to render.
- There is no game loop and no command to start a game.
- There is no path finding. Paths are given to `Enemy` directly. `Wave`
  reads them from `GridSystem.precomputed_paths`, which the caller fills.
  Re-routing around a blocked cell happens only when you pass a
  `path_finder` callable.
- Placing a tower does not mark its cell. Call
  `grid.set_cell(x, y, CellType.TOWER)` yourself if enemies should treat
  the cell as blocked.
- Nothing is saved to disk.