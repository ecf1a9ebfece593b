"""Tower-defence simulation core: map, towers, enemies, waves and genetically evolving enemy genomes."""

__version__ = "0.1.0"