"""Per-wave game statistics."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TowerTypeStats:
    """Kills, placed count and per-level counts for one kind of tower."""

    kills: int = 0
    count: int = 0
    levels: list[int] = field(default_factory=lambda: [0, 0, 0])


@dataclass
class TowerStats:
    """Tower statistics of one wave."""

    kills: int = 0
    archer: TowerTypeStats = field(default_factory=TowerTypeStats)
    mage: TowerTypeStats = field(default_factory=TowerTypeStats)
    artillery: TowerTypeStats = field(default_factory=TowerTypeStats)

    def _for_type(self, tower_type: str) -> TowerTypeStats | None:
        return {
            "archer": self.archer,
            "mage": self.mage,
            "artillery": self.artillery,
        }.get(tower_type)


@dataclass
class WaveStats:
    """Statistics of one wave."""

    wave_number: int
    total_enemies: int
    killed_enemies: int = 0
    average_fitness: float = 0.0
    mutations_count: int = 0
    tower_stats: TowerStats = field(default_factory=TowerStats)


class GameStats:
    """Collects statistics wave by wave."""

    def __init__(self) -> None:
        self.stats: list[WaveStats] = []
        self._generation: int | None = None

    def record_wave_start(self, generation: int, total_enemies: int) -> None:
        """Open a new wave record and make it current."""
        self._generation = generation
        self.stats.append(WaveStats(wave_number=generation, total_enemies=total_enemies))

    def record_enemy_death(self, killer_tower_type: str) -> None:
        """Count a kill, crediting the tower type that dealt it."""
        wave = self.current_generation()
        wave.killed_enemies += 1
        wave.tower_stats.kills += 1
        tower = wave.tower_stats._for_type(killer_tower_type)
        if tower is not None:
            tower.kills += 1

    def record_fitness(self, fitness: float) -> None:
        """Store the average fitness of the current wave."""
        self.current_generation().average_fitness = fitness

    def record_mutations(self, total: int) -> None:
        """Store the mutation count of the current wave."""
        self.current_generation().mutations_count = total

    def record_tower(self, tower_type: str, level: int) -> None:
        """Count a tower standing at the end of the current wave."""
        wave = self.current_generation()
        tower = wave.tower_stats._for_type(tower_type)
        if tower is None:
            return
        tower.count += 1
        if 1 <= level <= 3:
            tower.levels[level - 1] += 1

    def current_generation(self) -> WaveStats:
        """The record of the wave most recently started."""
        for wave in self.stats:
            if wave.wave_number == self._generation:
                return wave
        raise LookupError("current generation not found")

    def has_data(self) -> bool:
        """Whether any wave has been recorded."""
        return bool(self.stats)

    def wave_stats(self, wave_number: int) -> WaveStats | None:
        """The first record for a wave number, or None."""
        return next((w for w in self.stats if w.wave_number == wave_number), None)